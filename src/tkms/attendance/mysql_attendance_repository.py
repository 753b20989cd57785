from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .calculator import AttendanceMetrics
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = """
    a.attendance_id, a.user_id, a.work_date, a.status,
    a.time_in, a.time_out, a.time_in_entry_id, a.time_out_entry_id,
    a.total_minutes, a.lunch_break_minutes, a.worked_minutes,
    a.overtime_minutes, a.late_minutes, a.early_out_minutes
"""

# total_hours/worked_hours/overtime_hours/is_late/is_early_out are stored for
# exports and ad-hoc SQL; the domain rebuilds them from the minute columns.
_METRICS_SET = """
    total_minutes=%s, total_hours=%s, lunch_break_minutes=%s,
    worked_minutes=%s, worked_hours=%s, overtime_minutes=%s, overtime_hours=%s,
    late_minutes=%s, early_out_minutes=%s, is_late=%s, is_early_out=%s
"""


def _metrics_params(m: AttendanceMetrics) -> tuple:
    is_early_out = m.is_early_out
    return (
        m.total_minutes,
        m.total_hours,
        m.lunch_break_minutes,
        m.worked_minutes,
        m.worked_hours,
        m.overtime_minutes,
        m.overtime_hours,
        m.late_minutes,
        m.early_out_minutes,
        1 if m.is_late else 0,
        None if is_early_out is None else int(is_early_out),
    )


def _int_or_none(value) -> Optional[int]:
    return None if value is None else int(value)


def _row_to_record(r: dict) -> AttendanceRecord:
    metrics = None
    if r.get("late_minutes") is not None:
        metrics = AttendanceMetrics(
            late_minutes=int(r["late_minutes"]),
            total_minutes=_int_or_none(r.get("total_minutes")),
            lunch_break_minutes=_int_or_none(r.get("lunch_break_minutes")),
            worked_minutes=_int_or_none(r.get("worked_minutes")),
            overtime_minutes=_int_or_none(r.get("overtime_minutes")),
            early_out_minutes=_int_or_none(r.get("early_out_minutes")),
        )
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        time_in=from_db_datetime(r.get("time_in")),
        time_out=from_db_datetime(r.get("time_out")),
        time_in_entry_id=_int_or_none(r.get("time_in_entry_id")),
        time_out_entry_id=_int_or_none(r.get("time_out_entry_id")),
        metrics=metrics,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records a WHERE a.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records a WHERE a.user_id=%s AND a.work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, *, user_id: int, work_date: date, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, status)
                    VALUES(%s,%s,%s)
                    """,
                    (int(user_id), work_date, status.value),
                )
            except mysql.connector.IntegrityError:
                # uq_attendance_user_date: a concurrent clock event created the day first.
                raise ValidationError("Attendance for this day is already being recorded")
            return int(cur.lastrowid)

    def record_time_in(self, *, attendance_id: int, entry_id: int, time_in: datetime, metrics: AttendanceMetrics) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE attendance_records
                SET time_in_entry_id=%s, time_in=%s, status=%s, {_METRICS_SET}
                WHERE attendance_id=%s
                """,
                (
                    int(entry_id),
                    to_db_datetime(time_in),
                    AttendanceStatus.PRESENT.value,
                    *_metrics_params(metrics),
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def record_time_out(self, *, attendance_id: int, entry_id: int, time_out: datetime, metrics: AttendanceMetrics) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE attendance_records
                SET time_out_entry_id=%s, time_out=%s, {_METRICS_SET}
                WHERE attendance_id=%s
                """,
                (int(entry_id), to_db_datetime(time_out), *_metrics_params(metrics), int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_metrics(self, *, attendance_id: int, metrics: AttendanceMetrics) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_records SET {_METRICS_SET} WHERE attendance_id=%s",
                (*_metrics_params(metrics), int(attendance_id)),
            )
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return fetchone(cur) is not None

    def list_range(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if start_date is not None:
            clauses.append("a.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("a.work_date <= %s")
            params.append(end_date)
        if user_id is not None:
            clauses.append("a.user_id=%s")
            params.append(int(user_id))

        sql = f"SELECT {_COLUMNS} FROM attendance_records a"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY a.work_date DESC, a.user_id ASC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["a.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("a.user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.employee_id, u.first_name, u.last_name
                FROM attendance_records a
                JOIN users u ON u.user_id = a.user_id
                WHERE {where}
                ORDER BY a.work_date ASC, u.last_name ASC, u.first_name ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    record=_row_to_record(r),
                    employee_id=r.get("employee_id"),
                    first_name=r.get("first_name") or "",
                    last_name=r.get("last_name") or "",
                )
                for r in fetchall(cur)
            ]
