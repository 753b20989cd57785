from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AdjustmentType, EntryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import TimeAdjustment
from .repository import TimeAdjustmentRepository

_COLUMNS = """
    adjustment_id, user_id, adjustment_type, work_date, original_time, adjusted_time,
    reason, approved_by, notes, status, created_at
"""


def _row_to_adjustment(r: dict) -> TimeAdjustment:
    return TimeAdjustment(
        adjustment_id=int(r["adjustment_id"]),
        user_id=int(r["user_id"]),
        adjustment_type=AdjustmentType(r["adjustment_type"]),
        work_date=r["work_date"],
        original_time=from_db_datetime(r.get("original_time")),
        adjusted_time=from_db_datetime(r["adjusted_time"]),
        reason=r["reason"],
        approved_by=int(r["approved_by"]),
        notes=r.get("notes"),
        status=EntryStatus(r["status"]),
        created_at=from_db_datetime(r.get("created_at")),
    )


class MySQLTimeAdjustmentRepository(TimeAdjustmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, adjustment_id: int) -> Optional[TimeAdjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_adjustments WHERE adjustment_id=%s", (int(adjustment_id),))
            r = fetchone(cur)
            return _row_to_adjustment(r) if r else None

    def create(
        self,
        *,
        user_id: int,
        adjustment_type: AdjustmentType,
        work_date: date,
        original_time: Optional[datetime],
        adjusted_time: datetime,
        reason: str,
        approved_by: int,
        notes: Optional[str],
        status: EntryStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_adjustments(
                    user_id, adjustment_type, work_date, original_time, adjusted_time,
                    reason, approved_by, notes, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    adjustment_type.value,
                    work_date,
                    to_db_datetime(original_time),
                    to_db_datetime(adjusted_time),
                    reason,
                    int(approved_by),
                    notes,
                    status.value,
                ),
            )
            return int(cur.lastrowid)

    def list_all(self, *, user_id: Optional[int] = None) -> Sequence[TimeAdjustment]:
        sql = f"SELECT {_COLUMNS} FROM time_adjustments"
        params: tuple = ()
        if user_id is not None:
            sql += " WHERE user_id=%s"
            params = (int(user_id),)
        sql += " ORDER BY created_at DESC, adjustment_id DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_adjustment(r) for r in fetchall(cur)]
