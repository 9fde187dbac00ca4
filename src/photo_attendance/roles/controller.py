from __future__ import annotations

from flask import Flask, session

from ..common.responses import domain_error, ok, system_error
from ..container import Container
from ..core.exceptions import DomainError
from ..users.guards import admin_required
from .service import user_with_roles_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        try:
            users = container.role_service.list_users()
            return ok(users=[user_with_roles_to_dict(u) for u in users])
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return system_error(e, "loading users")

    @app.route("/api/admin/users/<user_id>/toggle-role", methods=["POST"], endpoint="toggle_user_role")
    @admin_required
    def toggle_user_role(user_id: str):
        try:
            change = container.role_service.toggle_role(user_id)
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return system_error(e, "updating the user role")

        # Keep the caller's own session in step when they change their own role.
        if user_id == session.get("user_id"):
            session["role"] = change.new_role.value

        payload = {
            "message": f"User role updated to {change.new_role.value}",
            "user_id": change.user_id,
            "role": change.new_role.value,
        }
        if change.users is not None:
            payload["users"] = [user_with_roles_to_dict(u) for u in change.users]
        return ok(**payload)
