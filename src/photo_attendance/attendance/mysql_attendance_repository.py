from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, new_id, normalize_timestamp
from ..users.mysql_profile_repository import row_to_profile
from .model import AttendanceRecord, AttendanceRecordWithProfile
from .repository import AttendanceRepository


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(r["id"]),
        user_id=str(r["user_id"]),
        check_in_time=normalize_timestamp(r["check_in_time"]),
        photo_url=r["photo_url"],
        status=r["status"],
        created_at=normalize_timestamp(r["created_at"]),
        notes=r.get("notes"),
        location=r.get("location"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, check_in_time, photo_url, location, notes, status, created_at
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY check_in_time DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_recent_with_profiles(self, limit: int) -> Sequence[AttendanceRecordWithProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    ar.id, ar.user_id, ar.check_in_time, ar.photo_url, ar.location,
                    ar.notes, ar.status, ar.created_at,
                    p.id AS p_id, p.email AS p_email, p.full_name AS p_full_name,
                    p.avatar_url AS p_avatar_url, p.created_at AS p_created_at,
                    p.updated_at AS p_updated_at
                FROM attendance_records ar
                LEFT JOIN profiles p ON p.id = ar.user_id
                ORDER BY ar.check_in_time DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecordWithProfile(
                    record=_row_to_record(r),
                    profile=row_to_profile(r, prefix="p_") if r.get("p_id") else None,
                )
                for r in rows
            ]

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
        record_id = new_id()
        created_at = now_local()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(id, user_id, check_in_time, photo_url, location, notes, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (record_id, user_id, check_in_time, photo_url, location, notes, status, created_at),
            )
        return AttendanceRecord(
            id=record_id,
            user_id=user_id,
            check_in_time=check_in_time,
            photo_url=photo_url,
            status=status,
            created_at=created_at,
            notes=notes,
            location=location,
        )

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendance_records")
            return fetch_count(cur)

    def count_since(self, since: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM attendance_records WHERE check_in_time >= %s",
                (since,),
            )
            return fetch_count(cur)
