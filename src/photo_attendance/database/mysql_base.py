"""Untyped boundary to the tabular data store.

Repositories go through ``db_cursor`` and the row helpers below; nothing else in
the package touches connector objects or dict rows.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple

import mysql.connector

from ..core.exceptions import BackendError


class ConnectionFactory(Protocol):
    def connect(self) -> Any:
        raise NotImplementedError


@contextmanager
def db_cursor(conn_factory: ConnectionFactory, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """Yield ``(conn, cur)``; commit on success, rollback and re-raise as BackendError on failure."""
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise BackendError(_describe(e)) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise BackendError(_describe(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _describe(error: mysql.connector.Error) -> str:
    return getattr(error, "msg", None) or str(error)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def fetch_count(cur) -> int:
    """Read a ``SELECT COUNT(*) AS total`` result."""
    row = fetchone(cur)
    if not row:
        return 0
    return int(row.get("total") or 0)


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_timestamp(value: Any) -> Optional[datetime]:
    """Normalize DATETIME/TIMESTAMP values across connector implementations.

    mysql-connector can return them as ``datetime`` or, with some column types
    and the pure-Python connector, as ISO-8601 strings.
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")

    if isinstance(value, str):
        return datetime.fromisoformat(value.strip().replace(" ", "T", 1))

    raise TypeError(f"Unsupported MySQL timestamp value type: {type(value)!r}")
