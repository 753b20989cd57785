from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from .calculator import AttendanceMetrics


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the attendance of one user on one calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    status: AttendanceStatus
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None
    time_in_entry_id: Optional[int] = None
    time_out_entry_id: Optional[int] = None
    metrics: Optional[AttendanceMetrics] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "timeIn": self.time_in.isoformat() if self.time_in else None,
            "timeOut": self.time_out.isoformat() if self.time_out else None,
        }
        if self.metrics is not None:
            out.update(self.metrics.to_dict())
        return out


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports (attendance joined with the employee)."""

    record: AttendanceRecord
    employee_id: Optional[str]
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
