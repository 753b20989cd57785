from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .calculator import AttendanceMetrics
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, *, user_id: int, work_date: date, status: AttendanceStatus) -> int:
        """Insert the day's record. (user_id, work_date) is unique."""

        raise NotImplementedError

    def record_time_in(self, *, attendance_id: int, entry_id: int, time_in: datetime, metrics: AttendanceMetrics) -> bool:
        raise NotImplementedError

    def record_time_out(self, *, attendance_id: int, entry_id: int, time_out: datetime, metrics: AttendanceMetrics) -> bool:
        raise NotImplementedError

    def update_metrics(self, *, attendance_id: int, metrics: AttendanceMetrics) -> bool:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Most recent day first."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
