from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import at_time_of_day, parse_time_of_day
from .strategies.base import LunchStrategy
from .strategies.explicit_lunch_strategy import ExplicitLunchStrategy
from .strategies.statutory_break_strategy import StatutoryBreakStrategy


@dataclass
class LunchStrategyFactory:
    """Factory Pattern: choose the lunch deduction rule for a schedule."""

    def for_schedule(self, schedule, *, on_date: date) -> LunchStrategy:
        if not (schedule.lunch_start and schedule.lunch_end):
            return StatutoryBreakStrategy()

        lunch_start = parse_time_of_day(schedule.lunch_start, "Lunch start")
        lunch_end = parse_time_of_day(schedule.lunch_end, "Lunch end")
        return ExplicitLunchStrategy(
            lunch_start=at_time_of_day(on_date, lunch_start),
            lunch_end=at_time_of_day(on_date, lunch_end),
        )
