from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import AppRole
from .model import RoleAssignment


class RoleRepository(Protocol):
    def list_for_user(self, user_id: str) -> Sequence[RoleAssignment]:
        raise NotImplementedError

    def list_all(self) -> Sequence[RoleAssignment]:
        raise NotImplementedError

    def create_assignment(self, *, user_id: str, role: AppRole) -> RoleAssignment:
        raise NotImplementedError

    def update_role(self, *, user_id: str, role: AppRole) -> int:
        """Set the role of every assignment of ``user_id``; returns rows touched."""

        raise NotImplementedError
