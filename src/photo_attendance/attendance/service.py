from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, start_of_day, to_iso
from ..core.constants import ADMIN_RECORDS_LIMIT, PERSONAL_HISTORY_LIMIT
from ..core.exceptions import BackendError, QueryFailed
from ..users.repository import ProfileRepository
from .model import AdminStats, AttendanceRecord, AttendanceRecordWithProfile
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Read-only list views over attendance records.

    Every call is a fresh query; nothing is cached between calls.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        *,
        history_limit: int = PERSONAL_HISTORY_LIMIT,
        admin_limit: int = ADMIN_RECORDS_LIMIT,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._history_limit = int(history_limit)
        self._admin_limit = int(admin_limit)

    def personal_history(self, user_id: str) -> Sequence[AttendanceRecord]:
        try:
            return self._attendance.list_for_user(user_id, self._history_limit)
        except BackendError as e:
            logger.warning("history query failed for user %s: %s", user_id, e)
            raise QueryFailed(str(e)) from e

    def admin_records(self) -> Sequence[AttendanceRecordWithProfile]:
        try:
            return self._attendance.list_recent_with_profiles(self._admin_limit)
        except BackendError as e:
            logger.warning("admin records query failed: %s", e)
            raise QueryFailed(str(e)) from e

    def admin_stats(self, *, now: Optional[datetime] = None) -> AdminStats:
        """Three independent counts: all profiles, check-ins since local midnight, all check-ins."""
        now = now or now_local()
        try:
            total_users = self._profiles.count_all()
            today_check_ins = self._attendance.count_since(start_of_day(now))
            total_check_ins = self._attendance.count_all()
        except BackendError as e:
            logger.warning("admin stats query failed: %s", e)
            raise QueryFailed(str(e)) from e

        return AdminStats(
            total_users=total_users,
            today_check_ins=today_check_ins,
            total_check_ins=total_check_ins,
        )


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "id": r.id,
        "user_id": r.user_id,
        "check_in_time": to_iso(r.check_in_time),
        "photo_url": r.photo_url,
        "location": r.location,
        "notes": r.notes,
        "status": r.status,
        "created_at": to_iso(r.created_at),
    }


def record_with_profile_to_dict(item: AttendanceRecordWithProfile) -> dict:
    data = record_to_dict(item.record)
    p = item.profile
    data["profile"] = (
        {
            "id": p.id,
            "email": p.email,
            "full_name": p.full_name,
            "avatar_url": p.avatar_url,
        }
        if p
        else None
    )
    return data


def stats_to_dict(stats: AdminStats) -> dict:
    return {
        "totalUsers": stats.total_users,
        "todayCheckIns": stats.today_check_ins,
        "totalCheckIns": stats.total_check_ins,
    }
