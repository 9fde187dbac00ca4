from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import AppRole


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue."}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue."}), 401

        if session.get("role") != AppRole.ADMIN.value:
            return jsonify({"success": False, "message": "Administrator access required."}), 403

        return view(*args, **kwargs)

    return wrapper
