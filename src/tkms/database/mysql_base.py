from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import LOCAL_TZ, to_local
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """DATETIME columns hold naive canonical wall-clock time."""
    if value is None:
        return None
    return to_local(value).replace(tzinfo=None)


def from_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    return value.replace(tzinfo=LOCAL_TZ)


def normalize_mysql_time(value: Any) -> Optional[str]:
    """MySQL TIME column to the ``"HH:MM"`` form used by schedules.

    The pure-python connector hands TIME back as ``timedelta``; other
    drivers and fixtures may give ``time`` or a ``"HH:MM[:SS]"`` string.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return f"{value.hour:02d}:{value.minute:02d}"
    if isinstance(value, timedelta):
        minutes = (int(value.total_seconds()) // 60) % (24 * 60)
        return f"{minutes // 60:02d}:{minutes % 60:02d}"
    if isinstance(value, str):
        hours, sep, rest = value.strip().partition(":")
        if not sep:
            raise ValueError(f"Invalid time string: {value!r}")
        return f"{int(hours):02d}:{int(rest[:2]):02d}"
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
