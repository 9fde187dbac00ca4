from __future__ import annotations

import logging

from flask import current_app, jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    QueryFailed,
    RecordWriteFailed,
    RoleUpdateFailed,
    UploadFailed,
)

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    ((UploadFailed, RecordWriteFailed, QueryFailed, RoleUpdateFailed), 502),
)


def ok(**payload):
    return jsonify({"success": True, **payload}), 200


def domain_error(e: DomainError):
    """Transient, dismissible notification carrying the error's message."""
    status = 400
    for types, code in _STATUS_CODES:
        if isinstance(e, types):
            status = code
            break
    return jsonify({"success": False, "error": type(e).__name__, "message": e.message}), status


def system_error(e: Exception, action: str):
    logger.exception("unexpected error while %s", action)
    if bool(current_app.config.get("DEBUG", False)):
        message = f"System error while {action}: {e}"
    else:
        message = f"System error while {action}"
    return jsonify({"success": False, "message": message}), 500
