"""Attendance calculator.

Derives the attendance metrics of one working day from a clock-in, an
optional clock-out and the schedule in force that day. Every caller
(clock-out, the recompute maintenance pass, admin corrections) goes through
``AttendanceCalculator.compute`` so the numbers never drift between call
sites.

Rules, all evaluated in the canonical timezone:

* Effective start is ``max(clock-in, scheduled start)``; arriving early earns
  nothing. Clock-out is never clamped, staying late becomes overtime.
* Lunch is the overlap with the schedule's lunch window when it has one,
  otherwise the statutory fallback (see ``StatutoryBreakStrategy``).
* Overtime is time past the scheduled end minus any lunch window inside it.
* Lateness and early-out compare the raw clock events against the schedule
  laid onto the event's own calendar date. Shifts crossing midnight are not
  special-cased.
* Minute differences are rounded to whole minutes, hours are minutes / 60
  rounded to 2 decimals, both half away from zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import (
    at_time_of_day,
    minutes_to_hours,
    parse_time_of_day,
    to_local,
    whole_minutes,
)
from ..core.exceptions import MissingClockIn
from .factory import LunchStrategyFactory


@dataclass(frozen=True)
class AttendanceMetrics:
    """Value object produced by the calculator.

    Only ``late_minutes`` is known while the employee is still clocked in;
    the other fields stay ``None`` until a clock-out exists.
    """

    late_minutes: int
    total_minutes: Optional[int] = None
    lunch_break_minutes: Optional[int] = None
    worked_minutes: Optional[int] = None
    overtime_minutes: Optional[int] = None
    early_out_minutes: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.total_minutes is not None

    @property
    def is_late(self) -> bool:
        return self.late_minutes > 0

    @property
    def is_early_out(self) -> Optional[bool]:
        if self.early_out_minutes is None:
            return None
        return self.early_out_minutes > 0

    @property
    def total_hours(self) -> Optional[float]:
        return _hours(self.total_minutes)

    @property
    def worked_hours(self) -> Optional[float]:
        return _hours(self.worked_minutes)

    @property
    def overtime_hours(self) -> Optional[float]:
        return _hours(self.overtime_minutes)

    def to_dict(self) -> dict:
        """Persisted/exported field names, shared with CSV and DTR consumers."""
        return {
            "totalMinutes": self.total_minutes,
            "totalHours": self.total_hours,
            "lunchBreakMinutes": self.lunch_break_minutes,
            "workedMinutes": self.worked_minutes,
            "workedHours": self.worked_hours,
            "overtimeMinutes": self.overtime_minutes,
            "overtimeHours": self.overtime_hours,
            "lateMinutes": self.late_minutes,
            "earlyOutMinutes": self.early_out_minutes,
            "isLate": self.is_late,
            "isEarlyOut": self.is_early_out,
        }


def _hours(minutes: Optional[int]) -> Optional[float]:
    if minutes is None:
        return None
    return minutes_to_hours(minutes)


class AttendanceCalculator:
    def __init__(self, *, lunch_factory: LunchStrategyFactory | None = None):
        self._lunch_factory = lunch_factory or LunchStrategyFactory()

    def compute(self, time_in: Optional[datetime], time_out: Optional[datetime], schedule) -> AttendanceMetrics:
        """Compute the metrics for one day.

        ``schedule`` is anything exposing ``time_in``, ``time_out``,
        ``lunch_start`` and ``lunch_end`` as ``"HH:MM"`` strings (lunch may be
        ``None``). Raises InvalidSchedule for malformed times and
        MissingClockIn when there is no clock-in.
        """
        if time_in is None:
            raise MissingClockIn("Cannot compute attendance without a clock-in")

        start_of_day = parse_time_of_day(schedule.time_in, "Time in")
        end_of_day = parse_time_of_day(schedule.time_out, "Time out")

        time_in = to_local(time_in)
        scheduled_start = at_time_of_day(time_in.date(), start_of_day)
        late_minutes = max(0, whole_minutes(time_in - scheduled_start))

        if time_out is None:
            return AttendanceMetrics(late_minutes=late_minutes)

        time_out = to_local(time_out)
        effective_in = max(time_in, scheduled_start)
        effective_out = time_out

        total_minutes = max(0, whole_minutes(effective_out - effective_in))

        lunch = self._lunch_factory.for_schedule(schedule, on_date=effective_in.date())
        lunch_break_minutes = lunch.break_minutes(
            effective_in=effective_in,
            effective_out=effective_out,
            total_minutes=total_minutes,
        )
        worked_minutes = max(0, total_minutes - lunch_break_minutes)

        scheduled_end = at_time_of_day(effective_out.date(), end_of_day)
        overtime_minutes = 0
        if effective_out > scheduled_end:
            overtime_minutes = whole_minutes(effective_out - scheduled_end)
            overtime_minutes -= lunch.overtime_overlap(scheduled_end=scheduled_end, effective_out=effective_out)
            overtime_minutes = max(0, overtime_minutes)

        early_out_minutes = max(0, whole_minutes(scheduled_end - time_out))

        return AttendanceMetrics(
            late_minutes=late_minutes,
            total_minutes=total_minutes,
            lunch_break_minutes=lunch_break_minutes,
            worked_minutes=worked_minutes,
            overtime_minutes=overtime_minutes,
            early_out_minutes=early_out_minutes,
        )


_default_calculator = AttendanceCalculator()


def compute(time_in: Optional[datetime], time_out: Optional[datetime], schedule) -> AttendanceMetrics:
    return _default_calculator.compute(time_in, time_out, schedule)
