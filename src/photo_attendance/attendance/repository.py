from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceRecordWithProfile


class AttendanceRepository(Protocol):
    def list_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        """Newest first by check-in time."""

        raise NotImplementedError

    def list_recent_with_profiles(self, limit: int) -> Sequence[AttendanceRecordWithProfile]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        user_id: str,
        check_in_time: datetime,
        photo_url: str,
        status: str,
        notes: Optional[str] = None,
        location: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def count_since(self, since: datetime) -> int:
        raise NotImplementedError
