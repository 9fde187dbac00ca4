from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Profile:
    """Domain entity: identity record.

    Plain data object; credentials are kept out of it and read separately by the
    auth service.
    """

    id: str
    email: str
    full_name: Optional[str]
    avatar_url: Optional[str]
    created_at: datetime
    updated_at: datetime

    @property
    def display_name(self) -> str:
        return self.full_name or self.email
