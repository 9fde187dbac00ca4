from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..users.model import Profile


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in. Created by the check-in pipeline, never mutated."""

    id: str
    user_id: str
    check_in_time: datetime
    photo_url: str
    status: str
    created_at: datetime
    notes: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecordWithProfile:
    """Read-model for the administrator list (record joined to its owner)."""

    record: AttendanceRecord
    profile: Optional[Profile]


@dataclass(frozen=True)
class AdminStats:
    total_users: int
    today_check_ins: int
    total_check_ins: int
