from __future__ import annotations

from datetime import timedelta

from flask import Flask, request, session

from ..common.responses import domain_error, ok, system_error
from ..container import Container
from ..core.constants import SESSION_DAYS
from ..core.exceptions import AuthenticationError, DomainError
from .guards import login_required
from .service import SessionUser


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=SESSION_DAYS)

    def _store(s_user: SessionUser, *, remember: bool) -> None:
        session.clear()
        session.permanent = remember
        session["user_id"] = s_user.user_id
        session["email"] = s_user.email
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

    def _user_payload(s_user: SessionUser) -> dict:
        return {
            "user": {"id": s_user.user_id, "email": s_user.email, "full_name": s_user.full_name},
            "role": s_user.role.value,
            "redirect": s_user.landing_route,
        }

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.sign_up(
                email=data.get("email", ""),
                password=data.get("password", ""),
                full_name=data.get("full_name"),
            )
            _store(s_user, remember=bool(data.get("remember_me")))
            return ok(message="Account created.", **_user_payload(s_user))
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return system_error(e, "signing up")

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
            _store(s_user, remember=bool(data.get("remember_me")))
            return ok(message="Signed in.", **_user_payload(s_user))
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return system_error(e, "signing in")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Signed out.")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        try:
            s_user = container.auth_service.refresh(session["user_id"])
        except Exception as e:
            return system_error(e, "loading the current user")

        if s_user is None:
            session.clear()
            return domain_error(AuthenticationError("Your account no longer exists."))
        session["role"] = s_user.role.value
        return ok(**_user_payload(s_user))
