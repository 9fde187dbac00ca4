from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .checkin.cli import register as register_checkin_cli
from .checkin.controller import register as register_checkin
from .config import backend_configured, get_settings_module
from .container import Container, build_container
from .core.constants import MAX_UPLOAD_BYTES
from .roles.controller import register as register_roles
from .storage.controller import register as register_storage
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES))
    app.config["BACKEND_CONFIGURED"] = backend_configured(db_config)

    if app.config["BACKEND_CONFIGURED"]:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
    else:
        logger.warning("settings=%s: database settings missing (set DB_HOST, DB_USER, DB_NAME)", settings_module)

    container = container or build_container(settings)

    @app.route("/api/status", methods=["GET"], endpoint="status")
    def status():
        return jsonify(
            {
                "status": "ok",
                "setup_required": not app.config["BACKEND_CONFIGURED"],
                "bucket": container.storage.bucket,
            }
        )

    register_users(app, container)
    register_attendance(app, container)
    register_roles(app, container)
    register_checkin(app, container)
    register_checkin_cli(app, container)
    register_storage(app, container)

    return app
