from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import weekday_name
from ..core.exceptions import NoActiveSchedule
from .model import Schedule
from .repository import ScheduleRepository


def pick_schedule(schedules: Iterable[Schedule], on_date: date) -> Optional[Schedule]:
    """Active schedule covering ``on_date``; the most recently modified one wins."""
    day = weekday_name(on_date)
    matching = [s for s in schedules if s.is_active and day in s.days]
    if not matching:
        return None
    return max(matching, key=_recency)


def _recency(schedule: Schedule) -> tuple:
    stamp = schedule.updated_at.timestamp() if schedule.updated_at else float("-inf")
    return stamp, schedule.schedule_id


class ScheduleResolver:
    """Select the schedule that feeds the attendance calculator for a day."""

    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def resolve(self, *, user_id: int, on_date: date) -> Schedule:
        schedule = pick_schedule(self._schedules.list_for_user(int(user_id), active_only=True), on_date)
        if schedule is None:
            raise NoActiveSchedule(user_id, on_date)
        return schedule
