from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from tkms.adjustments.model import AdjustmentSettings, TimeAdjustment
from tkms.attendance.calculator import AttendanceMetrics
from tkms.attendance.model import AttendanceRecord, AttendanceReportRow
from tkms.common.datetime_utils import LOCAL_TZ, to_local
from tkms.container import Container, wire
from tkms.core.enums import AttendanceStatus, EntryStatus, EntryType
from tkms.schedules.model import Schedule
from tkms.time_entries.model import TimeEntry

WEEKDAYS_MON_FRI = ("monday", "tuesday", "wednesday", "thursday", "friday")

# 2024-06-03 is a Monday.
MONDAY = date(2024, 6, 3)


def at(day: date, hh: int, mm: int, ss: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hh, mm, ss, tzinfo=LOCAL_TZ)


class InMemorySchedules:
    def __init__(self):
        self.items: dict[int, Schedule] = {}
        self._id = 0
        self._clock = datetime(2024, 1, 1, tzinfo=LOCAL_TZ)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def add(self, **fields) -> Schedule:
        """Seed a schedule directly (bypasses ScheduleService validation)."""
        self._id += 1
        fields.setdefault("days", frozenset(WEEKDAYS_MON_FRI))
        fields.setdefault("updated_at", self._tick())
        schedule = Schedule(schedule_id=self._id, **fields)
        self.items[self._id] = schedule
        return schedule

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        return self.items.get(schedule_id)

    def list_for_user(self, user_id: int, *, active_only: bool = True):
        return [s for s in self.items.values() if s.user_id == user_id and (s.is_active or not active_only)]

    def list_active(self):
        return [s for s in self.items.values() if s.is_active]

    def create(self, *, user_id, days, time_in, time_out, lunch_start=None, lunch_end=None) -> int:
        return self.add(
            user_id=user_id,
            days=frozenset(days),
            time_in=time_in,
            time_out=time_out,
            lunch_start=lunch_start,
            lunch_end=lunch_end,
        ).schedule_id

    def update(self, schedule: Schedule) -> bool:
        if schedule.schedule_id not in self.items:
            return False
        self.items[schedule.schedule_id] = replace(schedule, updated_at=self._tick())
        return True

    def deactivate_for_user(self, user_id: int) -> int:
        count = 0
        for s in self.list_for_user(user_id):
            self.items[s.schedule_id] = replace(s, is_active=False, updated_at=self._tick())
            count += 1
        return count

    def delete(self, schedule_id: int) -> bool:
        return self.items.pop(schedule_id, None) is not None


class InMemoryTimeEntries:
    def __init__(self):
        self.items: dict[int, TimeEntry] = {}
        self._id = 0

    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        return self.items.get(entry_id)

    def find_for_user_on_date(self, *, user_id: int, entry_type: EntryType, work_date: date):
        for e in self.items.values():
            if (
                e.user_id == user_id
                and e.entry_type == entry_type
                and e.status != EntryStatus.REJECTED
                and to_local(e.timestamp).date() == work_date
            ):
                return e
        return None

    def list_for_user(self, *, user_id: int, start=None, end=None, limit: int = 100):
        items = [e for e in self.items.values() if e.user_id == user_id]
        if start is not None:
            items = [e for e in items if e.timestamp >= start]
        if end is not None:
            items = [e for e in items if e.timestamp < end]
        items.sort(key=lambda e: e.timestamp, reverse=True)
        return items[:limit]

    def create(self, *, user_id, entry_type, timestamp, status, photo_url=None, location=None, notes=None) -> int:
        self._id += 1
        self.items[self._id] = TimeEntry(
            entry_id=self._id,
            user_id=user_id,
            entry_type=entry_type,
            timestamp=timestamp,
            status=status,
            photo_url=photo_url,
            location=location,
            notes=notes,
        )
        return self._id

    def update_status(self, *, entry_id: int, status: EntryStatus) -> bool:
        if entry_id not in self.items:
            return False
        self.items[entry_id] = replace(self.items[entry_id], status=status)
        return True


class InMemoryAttendance:
    def __init__(self):
        self.items: dict[int, AttendanceRecord] = {}
        self.people: dict[int, tuple[str, str, str]] = {}
        self.metric_writes: list[int] = []
        self._id = 0

    def add(self, **fields) -> AttendanceRecord:
        self._id += 1
        fields.setdefault("status", AttendanceStatus.PRESENT)
        record = AttendanceRecord(attendance_id=self._id, **fields)
        self.items[self._id] = record
        return record

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.items.get(attendance_id)

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.items.values():
            if r.user_id == user_id and r.work_date == work_date:
                return r
        return None

    def create(self, *, user_id: int, work_date: date, status: AttendanceStatus) -> int:
        return self.add(user_id=user_id, work_date=work_date, status=status).attendance_id

    def record_time_in(self, *, attendance_id, entry_id, time_in, metrics: AttendanceMetrics) -> bool:
        self.items[attendance_id] = replace(
            self.items[attendance_id],
            time_in=time_in,
            time_in_entry_id=entry_id,
            status=AttendanceStatus.PRESENT,
            metrics=metrics,
        )
        return True

    def record_time_out(self, *, attendance_id, entry_id, time_out, metrics: AttendanceMetrics) -> bool:
        self.items[attendance_id] = replace(
            self.items[attendance_id],
            time_out=time_out,
            time_out_entry_id=entry_id,
            metrics=metrics,
        )
        return True

    def update_metrics(self, *, attendance_id, metrics: AttendanceMetrics) -> bool:
        self.metric_writes.append(attendance_id)
        self.items[attendance_id] = replace(self.items[attendance_id], metrics=metrics)
        return True

    def list_range(self, *, start_date=None, end_date=None, user_id=None, limit=None):
        items = [
            r
            for r in self.items.values()
            if (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
            and (user_id is None or r.user_id == user_id)
        ]
        items.sort(key=lambda r: (r.work_date, -r.user_id), reverse=True)
        return items if limit is None else items[:limit]

    def get_report_rows(self, *, start_date, end_date, user_id=None):
        rows = []
        for r in sorted(self.list_range(start_date=start_date, end_date=end_date, user_id=user_id), key=lambda r: r.work_date):
            employee_id, first_name, last_name = self.people.get(r.user_id, (None, "", ""))
            rows.append(AttendanceReportRow(record=r, employee_id=employee_id, first_name=first_name, last_name=last_name))
        return rows


class InMemoryAdjustments:
    def __init__(self):
        self.items: dict[int, TimeAdjustment] = {}
        self._id = 0

    def get_by_id(self, adjustment_id: int) -> Optional[TimeAdjustment]:
        return self.items.get(adjustment_id)

    def create(self, **fields) -> int:
        self._id += 1
        self.items[self._id] = TimeAdjustment(
            adjustment_id=self._id,
            created_at=datetime(2024, 6, 1, tzinfo=LOCAL_TZ) + timedelta(minutes=self._id),
            **fields,
        )
        return self._id

    def list_all(self, *, user_id=None):
        items = [a for a in self.items.values() if user_id is None or a.user_id == user_id]
        return sorted(items, key=lambda a: a.created_at, reverse=True)


@pytest.fixture
def schedules_repo() -> InMemorySchedules:
    return InMemorySchedules()


@pytest.fixture
def time_entries_repo() -> InMemoryTimeEntries:
    return InMemoryTimeEntries()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def adjustments_repo() -> InMemoryAdjustments:
    return InMemoryAdjustments()


@pytest.fixture
def adjustment_settings() -> AdjustmentSettings:
    return AdjustmentSettings(
        enable_verbal_agreements=True,
        allow_early_out=True,
        allow_half_day=False,
        allow_late_in=True,
    )


@pytest.fixture
def container(schedules_repo, time_entries_repo, attendance_repo, adjustments_repo, adjustment_settings) -> Container:
    return wire(
        schedules_repo=schedules_repo,
        time_entries_repo=time_entries_repo,
        attendance_repo=attendance_repo,
        adjustments_repo=adjustments_repo,
        adjustment_settings=adjustment_settings,
    )
