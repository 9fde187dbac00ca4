from __future__ import annotations

from flask import Flask, session

from ..common.responses import domain_error, ok, system_error
from ..container import Container
from ..core.exceptions import DomainError
from ..users.guards import admin_required, login_required
from .service import record_to_dict, record_with_profile_to_dict, stats_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            records = container.attendance_service.personal_history(session["user_id"])
            return ok(records=[record_to_dict(r) for r in records])
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return system_error(e, "loading check-ins")

    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    @admin_required
    def admin_stats():
        try:
            stats = container.attendance_service.admin_stats()
            return ok(stats=stats_to_dict(stats))
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return system_error(e, "loading statistics")

    @app.route("/api/admin/records", methods=["GET"], endpoint="admin_records")
    @admin_required
    def admin_records():
        try:
            items = container.attendance_service.admin_records()
            return ok(records=[record_with_profile_to_dict(i) for i in items])
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return system_error(e, "loading attendance records")
