from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .adjustments.model import AdjustmentSettings
from .adjustments.mysql_time_adjustment_repository import MySQLTimeAdjustmentRepository
from .adjustments.repository import TimeAdjustmentRepository
from .adjustments.service import TimeAdjustmentService
from .attendance.calculator import AttendanceCalculator
from .attendance.factory import LunchStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import AttendanceReportService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.resolver import ScheduleResolver
from .schedules.service import ScheduleService
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.repository import TimeEntryRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    schedules_repo: ScheduleRepository
    time_entries_repo: TimeEntryRepository
    attendance_repo: AttendanceRepository
    adjustments_repo: TimeAdjustmentRepository

    schedule_service: ScheduleService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    adjustment_service: TimeAdjustmentService


def wire(
    *,
    schedules_repo: ScheduleRepository,
    time_entries_repo: TimeEntryRepository,
    attendance_repo: AttendanceRepository,
    adjustments_repo: TimeAdjustmentRepository,
    adjustment_settings: AdjustmentSettings,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble the services over the given repositories.

    Clock events and the recompute pass share one resolver and one calculator.
    """
    calculator = AttendanceCalculator(lunch_factory=LunchStrategyFactory())
    resolver = ScheduleResolver(schedules_repo)

    return Container(
        conn=conn,
        schedules_repo=schedules_repo,
        time_entries_repo=time_entries_repo,
        attendance_repo=attendance_repo,
        adjustments_repo=adjustments_repo,
        schedule_service=ScheduleService(schedules_repo),
        attendance_service=AttendanceService(attendance_repo, time_entries_repo, resolver, calculator=calculator),
        report_service=AttendanceReportService(attendance_repo),
        adjustment_service=TimeAdjustmentService(adjustments_repo, adjustment_settings),
    )


def build_container(*, db_config: dict, adjustment_settings: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        conn=conn,
        schedules_repo=MySQLScheduleRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        adjustments_repo=MySQLTimeAdjustmentRepository(conn),
        adjustment_settings=AdjustmentSettings.from_dict(adjustment_settings),
    )
