from __future__ import annotations

from datetime import datetime

from .base import LunchStrategy, overlap_minutes


class ExplicitLunchStrategy(LunchStrategy):
    """Schedule defines a lunch window: deduct only the part actually worked through."""

    def __init__(self, lunch_start: datetime, lunch_end: datetime):
        self.lunch_start = lunch_start
        self.lunch_end = lunch_end

    def break_minutes(self, *, effective_in: datetime, effective_out: datetime, total_minutes: int) -> int:
        return overlap_minutes(effective_in, effective_out, self.lunch_start, self.lunch_end)

    def overtime_overlap(self, *, scheduled_end: datetime, effective_out: datetime) -> int:
        return overlap_minutes(scheduled_end, effective_out, self.lunch_start, self.lunch_end)
