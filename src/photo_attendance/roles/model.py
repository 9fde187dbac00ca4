from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from ..core.enums import AppRole
from ..users.model import Profile


@dataclass(frozen=True)
class RoleAssignment:
    id: str
    user_id: str
    role: AppRole
    created_at: datetime


def effective_role(assignments: Sequence[RoleAssignment]) -> AppRole:
    """Only the first assignment found is consulted; none means a plain user."""
    if not assignments:
        return AppRole.USER
    return assignments[0].role


@dataclass(frozen=True)
class UserWithRoles:
    """Read-model for the user management view."""

    profile: Profile
    roles: tuple[RoleAssignment, ...]

    @property
    def role(self) -> AppRole:
        return effective_role(self.roles)
