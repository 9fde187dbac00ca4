from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for the ``profiles`` collection.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_password_hash(self, user_id: str) -> Optional[str]:
        raise NotImplementedError

    def create_profile(self, *, email: str, full_name: Optional[str], password_hash: str) -> Profile:
        raise NotImplementedError

    def list_all(self) -> Sequence[Profile]:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError
