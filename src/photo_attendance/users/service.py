from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_email, require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import AppRole
from ..core.exceptions import AuthenticationError, ValidationError
from ..roles.model import effective_role
from ..roles.repository import RoleRepository
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    email: str
    full_name: Optional[str]
    role: AppRole

    @property
    def landing_route(self) -> str:
        return "/admin" if self.role == AppRole.ADMIN else "/dashboard"


class AuthService:
    """Use case: sign up, sign in, resolve the current role."""

    def __init__(self, profiles: ProfileRepository, roles: RoleRepository):
        self._profiles = profiles
        self._roles = roles

    def _session_user(self, profile: Profile) -> SessionUser:
        role = effective_role(self._roles.list_for_user(profile.id))
        return SessionUser(user_id=profile.id, email=profile.email, full_name=profile.full_name, role=role)

    def sign_up(self, *, email: str, password: str, full_name: Optional[str] = None) -> SessionUser:
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._profiles.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        profile = self._profiles.create_profile(
            email=email,
            full_name=optional_text(full_name),
            password_hash=generate_password_hash(password),
        )
        self._roles.create_assignment(user_id=profile.id, role=AppRole.USER)
        logger.info("provisioned profile %s", profile.id)
        return SessionUser(user_id=profile.id, email=profile.email, full_name=profile.full_name, role=AppRole.USER)

    def authenticate(self, email: str, password: str) -> SessionUser:
        profile = self._profiles.get_by_email((email or "").strip().lower())
        if not profile:
            raise AuthenticationError("Invalid email or password")

        password_hash = self._profiles.get_password_hash(profile.id)
        try:
            ok = bool(password_hash) and check_password_hash(password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return self._session_user(profile)

    def refresh(self, user_id: str) -> Optional[SessionUser]:
        """Re-read profile and role so a role change applies without signing in again."""
        profile = self._profiles.get_by_id(user_id)
        if not profile:
            return None
        return self._session_user(profile)

    def find_by_email(self, email: str) -> Optional[Profile]:
        return self._profiles.get_by_email((email or "").strip().lower())
