from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds
from ..core.enums import EntryStatus, EntryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import Location, TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = "entry_id, user_id, entry_type, entry_timestamp, photo_url, latitude, longitude, status, notes"


def _row_to_entry(r: dict) -> TimeEntry:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = Location(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return TimeEntry(
        entry_id=int(r["entry_id"]),
        user_id=int(r["user_id"]),
        entry_type=EntryType(r["entry_type"]),
        timestamp=from_db_datetime(r["entry_timestamp"]),
        status=EntryStatus(r["status"]),
        photo_url=r.get("photo_url"),
        location=location,
        notes=r.get("notes"),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def find_for_user_on_date(self, *, user_id: int, entry_type: EntryType, work_date: date) -> Optional[TimeEntry]:
        start, end = day_bounds(work_date)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE user_id=%s AND entry_type=%s AND status<>%s
                  AND entry_timestamp >= %s AND entry_timestamp < %s
                ORDER BY entry_timestamp ASC
                LIMIT 1
                """,
                (int(user_id), entry_type.value, EntryStatus.REJECTED.value, to_db_datetime(start), to_db_datetime(end)),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def list_for_user(
        self,
        *,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 100,
    ) -> Sequence[TimeEntry]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start is not None:
            clauses.append("entry_timestamp >= %s")
            params.append(to_db_datetime(start))
        if end is not None:
            clauses.append("entry_timestamp < %s")
            params.append(to_db_datetime(end))
        params.append(int(limit))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE {where}
                ORDER BY entry_timestamp DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        entry_type: EntryType,
        timestamp: datetime,
        status: EntryStatus,
        photo_url: Optional[str] = None,
        location: Optional[Location] = None,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(user_id, entry_type, entry_timestamp, photo_url, latitude, longitude, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    entry_type.value,
                    to_db_datetime(timestamp),
                    photo_url,
                    location.latitude if location else None,
                    location.longitude if location else None,
                    status.value,
                    notes,
                ),
            )
            return int(cur.lastrowid)

    def update_status(self, *, entry_id: int, status: EntryStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE time_entries SET status=%s WHERE entry_id=%s", (status.value, int(entry_id)))
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 FROM time_entries WHERE entry_id=%s", (int(entry_id),))
            return fetchone(cur) is not None
