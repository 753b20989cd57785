from __future__ import annotations

import calendar
import csv
from dataclasses import dataclass
from datetime import date
from typing import IO, Optional

from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError

CSV_HEADERS = [
    "Date",
    "Employee ID",
    "Name",
    "Time In",
    "Time Out",
    "Duration",
    "Break",
    "Worked",
    "OT",
    "Status",
    "Late",
]

FIRST_HALF = "1-15"
SECOND_HALF = "16-end"


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


def cutoff_range(month: date, cutoff: str) -> tuple[date, date]:
    """Semi-monthly payroll cut-off: ``"1-15"`` or ``"16-end"`` of ``month``."""
    if cutoff == FIRST_HALF:
        return month.replace(day=1), month.replace(day=15)
    if cutoff == SECOND_HALF:
        last_day = calendar.monthrange(month.year, month.month)[1]
        return month.replace(day=16), month.replace(day=last_day)
    raise ValidationError(f"Cutoff must be {FIRST_HALF!r} or {SECOND_HALF!r}")


def default_cutoff(today: date) -> str:
    return SECOND_HALF if today.day > 15 else FIRST_HALF


def _hours_cell(value: Optional[float]) -> str:
    return f"{value:.2f}" if value else "-"


def _to_row(r: AttendanceReportRow) -> dict:
    record = r.record
    metrics = record.metrics
    lunch = (metrics.lunch_break_minutes if metrics else None) or 0
    return {
        "Date": record.work_date.strftime("%Y-%m-%d"),
        "Employee ID": r.employee_id or "",
        "Name": r.full_name or "Unknown",
        "Time In": record.time_in.strftime("%H:%M") if record.time_in else "-",
        "Time Out": record.time_out.strftime("%H:%M") if record.time_out else "-",
        "Duration": _hours_cell(metrics.total_hours if metrics else None),
        "Break": f"-{lunch}min" if lunch > 0 else "-",
        "Worked": _hours_cell(metrics.worked_hours if metrics else None),
        "OT": _hours_cell(metrics.overtime_hours if metrics else None),
        "Status": record.status.value,
        "Late": "Yes" if metrics and metrics.is_late else "No",
    }


def summarize(rows: list[AttendanceReportRow]) -> dict:
    records = [r.record for r in rows]
    return {
        "total_present": sum(1 for a in records if a.status == AttendanceStatus.PRESENT),
        "total_absent": sum(1 for a in records if a.status == AttendanceStatus.ABSENT),
        "total_late": sum(1 for a in records if a.metrics and a.metrics.is_late),
        "total_on_leave": sum(1 for a in records if a.status == AttendanceStatus.ON_LEAVE),
        "total_overtime_hours": round(
            sum((a.metrics.overtime_hours or 0) for a in records if a.metrics), 2
        ),
    }


class AttendanceReportService:
    """Admin attendance report: rows, summary stats and CSV export.

    Reads the persisted metrics; nothing is recalculated here.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        user_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> ReportData:
        if start > end:
            raise ValidationError("Start date must not be after end date")

        query_rows = list(self._attendance.get_report_rows(start_date=start, end_date=end, user_id=user_id))
        if search:
            needle = search.strip().lower()
            query_rows = [
                r
                for r in query_rows
                if needle in r.full_name.lower() or needle in (r.employee_id or "").lower()
            ]

        return ReportData(rows=[_to_row(r) for r in query_rows], summary=summarize(query_rows))


def write_csv(data: ReportData, out: IO[str]) -> None:
    writer = csv.DictWriter(out, fieldnames=CSV_HEADERS)
    writer.writeheader()
    for row in data.rows:
        writer.writerow(row)
