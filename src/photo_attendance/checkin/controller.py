from __future__ import annotations

from flask import Flask, request, session

from ..attendance.service import record_to_dict
from ..common.responses import domain_error, ok, system_error
from ..container import Container
from ..core.exceptions import DomainError
from ..users.guards import login_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        """Submit a check-in: JSON ``{"image": <data URL>, "notes": <optional text>}``."""
        data = request.get_json(silent=True) or {}
        try:
            result = container.checkin_service.submit_data_url(
                session["user_id"],
                data.get("image"),
                note=data.get("notes"),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            return system_error(e, "checking in")

        payload = {
            "message": "Your attendance has been recorded.",
            "record": record_to_dict(result.record),
        }
        if result.history is not None:
            payload["records"] = [record_to_dict(r) for r in result.history]
        return ok(**payload)
