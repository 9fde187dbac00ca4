from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.enums import AppRole
from ..core.exceptions import BackendError, QueryFailed, RoleUpdateFailed
from ..users.repository import ProfileRepository
from .model import RoleAssignment, UserWithRoles, effective_role
from .repository import RoleRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleChange:
    user_id: str
    new_role: AppRole
    users: Optional[Sequence[UserWithRoles]]


class RoleService:
    """Use case: administrators flip users between admin and user."""

    def __init__(self, roles: RoleRepository, profiles: ProfileRepository):
        self._roles = roles
        self._profiles = profiles

    def current_role(self, user_id: str) -> AppRole:
        return effective_role(self._roles.list_for_user(user_id))

    def list_users(self) -> Sequence[UserWithRoles]:
        try:
            profiles = self._profiles.list_all()
            assignments = self._roles.list_all()
        except BackendError as e:
            raise QueryFailed(str(e)) from e

        by_user: dict[str, list[RoleAssignment]] = defaultdict(list)
        for a in assignments:
            by_user[a.user_id].append(a)

        return [UserWithRoles(profile=p, roles=tuple(by_user.get(p.id, ()))) for p in profiles]

    def toggle_role(self, user_id: str) -> RoleChange:
        """Flip from the latest stored role, then reload the whole list."""
        try:
            new_role = self.current_role(user_id).flipped()
            updated = self._roles.update_role(user_id=user_id, role=new_role)
        except BackendError as e:
            logger.warning("role update failed for %s: %s", user_id, e)
            raise RoleUpdateFailed(str(e)) from e

        if updated == 0:
            raise RoleUpdateFailed("No role assignment found for this user")

        logger.info("user %s role set to %s", user_id, new_role.value)
        try:
            users = self.list_users()
        except QueryFailed as e:
            # The update is already stored; the client reloads the list later.
            logger.warning("user list reload after role change for %s failed: %s", user_id, e)
            users = None
        return RoleChange(user_id=user_id, new_role=new_role, users=users)


def user_with_roles_to_dict(u: UserWithRoles) -> dict:
    p = u.profile
    return {
        "id": p.id,
        "email": p.email,
        "full_name": p.full_name,
        "avatar_url": p.avatar_url,
        "role": u.role.value,
        "user_roles": [{"id": a.id, "role": a.role.value} for a in u.roles],
    }
