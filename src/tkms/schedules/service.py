from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_time_of_day
from ..core.constants import WEEKDAYS
from ..core.exceptions import InvalidSchedule, NotFoundError, ValidationError
from .model import Schedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def normalize_days(days: Optional[Iterable[str]]) -> frozenset[str]:
    normalized = frozenset((d or "").strip().lower() for d in (days or []))
    if not normalized:
        raise ValidationError("At least one day must be selected")
    unknown = sorted(normalized - set(WEEKDAYS))
    if unknown:
        raise ValidationError(f"Unknown day(s): {', '.join(unknown)}")
    return normalized


def validate_schedule(schedule: Schedule) -> None:
    """Reject schedules the calculator could not work with."""
    start = parse_time_of_day(schedule.time_in, "Time in")
    end = parse_time_of_day(schedule.time_out, "Time out")
    if end <= start:
        raise InvalidSchedule("Time out must be after time in")

    if schedule.lunch_start:
        parse_time_of_day(schedule.lunch_start, "Lunch start")
    if schedule.lunch_end:
        parse_time_of_day(schedule.lunch_end, "Lunch end")
    if schedule.has_lunch_window:
        if parse_time_of_day(schedule.lunch_end) <= parse_time_of_day(schedule.lunch_start):
            raise InvalidSchedule("Lunch end must be after lunch start")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def list_active(self, *, user_id: Optional[int] = None) -> Sequence[Schedule]:
        if user_id is not None:
            return self._schedules.list_for_user(int(user_id), active_only=True)
        return self._schedules.list_active()

    def get(self, schedule_id: int) -> Schedule:
        schedule = self._schedules.get_by_id(int(schedule_id))
        if not schedule:
            raise NotFoundError("Schedule not found")
        return schedule

    def create(
        self,
        *,
        user_id: int,
        days: Iterable[str],
        time_in: str,
        time_out: str,
        lunch_start: Optional[str] = None,
        lunch_end: Optional[str] = None,
    ) -> Schedule:
        if int(user_id) <= 0:
            raise ValidationError("User ID is required")

        draft = Schedule(
            schedule_id=0,
            user_id=int(user_id),
            days=normalize_days(days),
            time_in=(time_in or "").strip(),
            time_out=(time_out or "").strip(),
            lunch_start=_blank_to_none(lunch_start),
            lunch_end=_blank_to_none(lunch_end),
        )
        validate_schedule(draft)

        # A user keeps a single active schedule; older ones stay for history.
        deactivated = self._schedules.deactivate_for_user(draft.user_id)
        if deactivated:
            logger.info("Deactivated %s schedule(s) of user %s", deactivated, draft.user_id)

        schedule_id = self._schedules.create(
            user_id=draft.user_id,
            days=draft.days,
            time_in=draft.time_in,
            time_out=draft.time_out,
            lunch_start=draft.lunch_start,
            lunch_end=draft.lunch_end,
        )
        return self.get(schedule_id)

    def update(self, schedule_id: int, **changes) -> Schedule:
        current = self.get(schedule_id)

        allowed = {"days", "time_in", "time_out", "lunch_start", "lunch_end", "is_active"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError(f"Unsupported field(s): {', '.join(sorted(unknown))}")

        if "days" in changes:
            changes["days"] = normalize_days(changes["days"])
        for key in ("lunch_start", "lunch_end"):
            if key in changes:
                changes[key] = _blank_to_none(changes[key])
        for key in ("time_in", "time_out"):
            if key in changes:
                changes[key] = (changes[key] or "").strip()
        if "is_active" in changes:
            changes["is_active"] = bool(changes["is_active"])

        updated = replace(current, **changes)
        validate_schedule(updated)

        if not self._schedules.update(updated):
            raise ValidationError("Failed to update schedule")
        return self.get(schedule_id)

    def delete(self, schedule_id: int) -> None:
        if not self._schedules.delete(int(schedule_id)):
            raise NotFoundError("Schedule not found")
