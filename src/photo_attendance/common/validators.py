from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str) -> str:
    email = require_non_empty(value, "Email").lower()
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValidationError("Email is invalid")
    return email


def optional_text(value: Optional[str]) -> Optional[str]:
    """Blank text is stored as absent rather than as an empty string."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def optional_note(value: object) -> Optional[str]:
    """Free-text note kept as entered; blank or whitespace-only means no note."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Notes must be text")
    return value if value.strip() else None
