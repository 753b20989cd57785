from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Mapping, Optional, Sequence, Union

from ..common.datetime_utils import day_bounds, now_local, to_local
from ..common.validators import optional_text, require_in_range
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_RECOMPUTE_DAYS
from ..core.enums import AttendanceStatus, EntryStatus, EntryType
from ..core.exceptions import InvalidSchedule, MissingClockIn, NoActiveSchedule, NotFoundError, ValidationError
from ..schedules.resolver import ScheduleResolver
from ..time_entries.model import Location, TimeEntry
from ..time_entries.repository import TimeEntryRepository
from .calculator import AttendanceCalculator, AttendanceMetrics
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

LocationInput = Union[Location, Mapping[str, object], None]


@dataclass(frozen=True)
class ClockResult:
    entry: TimeEntry
    attendance: AttendanceRecord
    metrics: AttendanceMetrics


@dataclass
class RecomputeSummary:
    start: date
    end: date
    dry_run: bool = False
    processed: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: list[tuple[int, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "dryRun": self.dry_run,
            "processed": self.processed,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "skipped": [{"id": attendance_id, "reason": reason} for attendance_id, reason in self.skipped],
        }


def parse_location(value: LocationInput) -> Optional[Location]:
    if value is None or isinstance(value, Location):
        return value
    latitude = value.get("latitude")
    longitude = value.get("longitude")
    if latitude is None and longitude is None:
        return None
    return Location(
        latitude=require_in_range(latitude, "Latitude", -90, 90),
        longitude=require_in_range(longitude, "Longitude", -180, 180),
    )


class AttendanceService:
    """Clock-in / clock-out use cases and the metrics maintenance pass.

    All metrics go through the injected AttendanceCalculator.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        time_entries: TimeEntryRepository,
        resolver: ScheduleResolver,
        *,
        calculator: AttendanceCalculator | None = None,
    ):
        self._attendance = attendance
        self._time_entries = time_entries
        self._resolver = resolver
        self._calculator = calculator or AttendanceCalculator()

    def clock_in(
        self,
        user_id: int,
        *,
        photo_url: Optional[str] = None,
        location: LocationInput = None,
        now: datetime | None = None,
    ) -> ClockResult:
        return self.record_entry(user_id, EntryType.TIME_IN, photo_url=photo_url, location=location, now=now)

    def clock_out(
        self,
        user_id: int,
        *,
        photo_url: Optional[str] = None,
        location: LocationInput = None,
        now: datetime | None = None,
    ) -> ClockResult:
        return self.record_entry(user_id, EntryType.TIME_OUT, photo_url=photo_url, location=location, now=now)

    def record_entry(
        self,
        user_id: int,
        entry_type: EntryType,
        *,
        photo_url: Optional[str] = None,
        location: LocationInput = None,
        now: datetime | None = None,
    ) -> ClockResult:
        user_id = int(user_id)
        # DATETIME columns keep whole seconds.
        now = to_local(now or now_local()).replace(microsecond=0)
        today = now.date()

        schedule = self._resolver.resolve(user_id=user_id, on_date=today)

        if self._time_entries.find_for_user_on_date(user_id=user_id, entry_type=entry_type, work_date=today):
            raise ValidationError(f"Already has a {entry_type.value} entry for today")

        attendance = self._attendance.get_for_user_and_date(user_id, today)
        if entry_type == EntryType.TIME_OUT and (attendance is None or attendance.time_in is None):
            raise MissingClockIn("Cannot clock out: no time-in recorded for today")

        if entry_type == EntryType.TIME_IN:
            metrics = self._calculator.compute(now, None, schedule)
        else:
            metrics = self._calculator.compute(attendance.time_in, now, schedule)

        parsed_location = parse_location(location)
        photo_url = optional_text(photo_url)

        # Day record first: a rejected create must not leave an orphan entry.
        if attendance is None:
            attendance_id = self._attendance.create(user_id=user_id, work_date=today, status=AttendanceStatus.PRESENT)
        else:
            attendance_id = attendance.attendance_id

        entry_id = self._time_entries.create(
            user_id=user_id,
            entry_type=entry_type,
            timestamp=now,
            status=EntryStatus.APPROVED,
            photo_url=photo_url,
            location=parsed_location,
        )
        entry = TimeEntry(
            entry_id=entry_id,
            user_id=user_id,
            entry_type=entry_type,
            timestamp=now,
            status=EntryStatus.APPROVED,
            photo_url=photo_url,
            location=parsed_location,
        )

        if entry_type == EntryType.TIME_IN:
            self._attendance.record_time_in(attendance_id=attendance_id, entry_id=entry_id, time_in=now, metrics=metrics)
        else:
            self._attendance.record_time_out(attendance_id=attendance_id, entry_id=entry_id, time_out=now, metrics=metrics)

        logger.info(
            "user=%s %s at %s (schedule=%s) late=%s worked=%s overtime=%s",
            user_id,
            entry_type.value,
            now.isoformat(),
            schedule.schedule_id,
            metrics.late_minutes,
            metrics.worked_minutes,
            metrics.overtime_minutes,
        )
        return ClockResult(entry=entry, attendance=self._get_attendance(attendance_id), metrics=metrics)

    def set_entry_status(self, entry_id: int, status: EntryStatus) -> TimeEntry:
        if not self._time_entries.update_status(entry_id=int(entry_id), status=status):
            raise NotFoundError("Time entry not found")
        entry = self._time_entries.get_by_id(int(entry_id))
        if entry is None:
            raise NotFoundError("Time entry not found")
        return entry

    def list_attendance(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_range(start_date=start, end_date=end, user_id=user_id, limit=limit)

    def list_time_entries(
        self,
        *,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Sequence[TimeEntry]:
        start_at = day_bounds(start)[0] if start is not None else None
        end_at = day_bounds(end)[1] if end is not None else None
        return self._time_entries.list_for_user(user_id=int(user_id), start=start_at, end=end_at, limit=limit)

    def recompute(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        *,
        user_id: Optional[int] = None,
        dry_run: bool = False,
        today: Optional[date] = None,
    ) -> RecomputeSummary:
        """Re-derive stored metrics after schedules changed retroactively.

        Uses the schedule active today for each record's weekday, the same
        resolver and calculator as clock-out. Defaults to the last 7 days.
        """
        today = today or now_local().date()
        end = end or today
        start = start or end - timedelta(days=DEFAULT_RECOMPUTE_DAYS)
        if start > end:
            raise ValidationError("Start date must not be after end date")

        summary = RecomputeSummary(start=start, end=end, dry_run=dry_run)
        records = self._attendance.list_range(start_date=start, end_date=end, user_id=user_id)
        logger.info("Recomputing %s attendance record(s) from %s to %s (dry_run=%s)", len(records), start, end, dry_run)

        for record in records:
            summary.processed += 1

            if record.time_in is None:
                self._skip(summary, record, "no time-in")
                continue

            try:
                schedule = self._resolver.resolve(user_id=record.user_id, on_date=record.work_date)
                metrics = self._calculator.compute(record.time_in, record.time_out, schedule)
            except (NoActiveSchedule, InvalidSchedule) as e:
                self._skip(summary, record, str(e))
                continue

            if metrics == record.metrics:
                summary.unchanged += 1
                continue

            if dry_run:
                logger.info("[dry-run] Would update attendance %s: %s", record.attendance_id, metrics.to_dict())
            else:
                self._attendance.update_metrics(attendance_id=record.attendance_id, metrics=metrics)
                logger.info("Updated attendance %s: %s", record.attendance_id, metrics.to_dict())
            summary.updated += 1

        logger.info(
            "Processed %s record(s): %s updated, %s unchanged, %s skipped",
            summary.processed,
            summary.updated,
            summary.unchanged,
            len(summary.skipped),
        )
        return summary

    def _skip(self, summary: RecomputeSummary, record: AttendanceRecord, reason: str) -> None:
        logger.warning("Skipping attendance %s of user %s on %s: %s", record.attendance_id, record.user_id, record.work_date, reason)
        summary.skipped.append((record.attendance_id, reason))

    def _get_attendance(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if record is None:
            raise NotFoundError("Attendance record not found")
        return record
