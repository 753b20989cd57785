from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.constants import WEEKDAYS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, normalize_mysql_time
from .model import Schedule
from .repository import ScheduleRepository

_COLUMNS = "schedule_id, user_id, days, time_in, time_out, lunch_start, lunch_end, is_active, updated_at"


def _days_to_db(days: Iterable[str]) -> str:
    return ",".join(d for d in WEEKDAYS if d in set(days))


def _row_to_schedule(r: dict) -> Schedule:
    return Schedule(
        schedule_id=int(r["schedule_id"]),
        user_id=int(r["user_id"]),
        days=frozenset(d for d in (r.get("days") or "").split(",") if d),
        time_in=normalize_mysql_time(r["time_in"]),
        time_out=normalize_mysql_time(r["time_out"]),
        lunch_start=normalize_mysql_time(r.get("lunch_start")),
        lunch_end=normalize_mysql_time(r.get("lunch_end")),
        is_active=bool(int(r["is_active"])),
        updated_at=from_db_datetime(r.get("updated_at")),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM schedules WHERE schedule_id=%s", (int(schedule_id),))
            r = fetchone(cur)
            return _row_to_schedule(r) if r else None

    def list_for_user(self, user_id: int, *, active_only: bool = True) -> Sequence[Schedule]:
        sql = f"SELECT {_COLUMNS} FROM schedules WHERE user_id=%s"
        if active_only:
            sql += " AND is_active=1"
        sql += " ORDER BY updated_at DESC, schedule_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(user_id),))
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedules
                WHERE is_active=1
                ORDER BY user_id ASC, updated_at DESC
                """
            )
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        days: Iterable[str],
        time_in: str,
        time_out: str,
        lunch_start: Optional[str] = None,
        lunch_end: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedules(user_id, days, time_in, time_out, lunch_start, lunch_end, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (int(user_id), _days_to_db(days), time_in, time_out, lunch_start, lunch_end),
            )
            return int(cur.lastrowid)

    def update(self, schedule: Schedule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedules
                SET days=%s, time_in=%s, time_out=%s, lunch_start=%s, lunch_end=%s, is_active=%s
                WHERE schedule_id=%s
                """,
                (
                    _days_to_db(schedule.days),
                    schedule.time_in,
                    schedule.time_out,
                    schedule.lunch_start,
                    schedule.lunch_end,
                    1 if schedule.is_active else 0,
                    int(schedule.schedule_id),
                ),
            )
            # MySQL reports 0 affected rows when nothing changed; the row still exists.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 FROM schedules WHERE schedule_id=%s", (int(schedule.schedule_id),))
            return fetchone(cur) is not None

    def deactivate_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE schedules SET is_active=0 WHERE user_id=%s AND is_active=1", (int(user_id),))
            return int(cur.rowcount)

    def delete(self, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0
