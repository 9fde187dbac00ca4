from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, new_id, normalize_timestamp
from .model import Profile
from .repository import ProfileRepository

_COLUMNS = "id, email, full_name, avatar_url, created_at, updated_at"


def row_to_profile(r: Dict[str, Any], *, prefix: str = "") -> Profile:
    return Profile(
        id=str(r[f"{prefix}id"]),
        email=r[f"{prefix}email"],
        full_name=r.get(f"{prefix}full_name"),
        avatar_url=r.get(f"{prefix}avatar_url"),
        created_at=normalize_timestamp(r[f"{prefix}created_at"]),
        updated_at=normalize_timestamp(r[f"{prefix}updated_at"]),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return row_to_profile(row) if row else None

    def get_by_email(self, email: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE email=%s", (email,))
            row = fetchone(cur)
            return row_to_profile(row) if row else None

    def get_password_hash(self, user_id: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT password_hash FROM profiles WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return row.get("password_hash") if row else None

    def create_profile(self, *, email: str, full_name: Optional[str], password_hash: str) -> Profile:
        profile_id = new_id()
        now = now_local()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(id, email, full_name, avatar_url, password_hash, created_at, updated_at)
                VALUES(%s,%s,%s,NULL,%s,%s,%s)
                """,
                (profile_id, email, full_name, password_hash, now, now),
            )
        return Profile(
            id=profile_id,
            email=email,
            full_name=full_name,
            avatar_url=None,
            created_at=now,
            updated_at=now,
        )

    def list_all(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles ORDER BY created_at DESC")
            return [row_to_profile(r) for r in fetchall(cur)]

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM profiles")
            return fetch_count(cur)
