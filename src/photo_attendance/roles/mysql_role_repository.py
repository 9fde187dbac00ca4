from __future__ import annotations

from typing import Any, Dict, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import AppRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id, normalize_timestamp
from .model import RoleAssignment
from .repository import RoleRepository


def _row_to_assignment(r: Dict[str, Any]) -> RoleAssignment:
    return RoleAssignment(
        id=str(r["id"]),
        user_id=str(r["user_id"]),
        role=AppRole(r["role"]),
        created_at=normalize_timestamp(r["created_at"]),
    )


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: str) -> Sequence[RoleAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, role, created_at
                FROM user_roles
                WHERE user_id=%s
                ORDER BY created_at ASC
                """,
                (user_id,),
            )
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[RoleAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, user_id, role, created_at FROM user_roles ORDER BY created_at ASC")
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def create_assignment(self, *, user_id: str, role: AppRole) -> RoleAssignment:
        assignment_id = new_id()
        now = now_local()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO user_roles(id, user_id, role, created_at) VALUES(%s,%s,%s,%s)",
                (assignment_id, user_id, role.value, now),
            )
        return RoleAssignment(id=assignment_id, user_id=user_id, role=role, created_at=now)

    def update_role(self, *, user_id: str, role: AppRole) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE user_roles SET role=%s WHERE user_id=%s", (role.value, user_id))
            return int(cur.rowcount)
