from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...common.datetime_utils import whole_minutes


def overlap_minutes(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> int:
    """Whole minutes shared by [a_start, a_end] and [b_start, b_end], never negative."""
    return max(0, whole_minutes(min(a_end, b_end) - max(a_start, b_start)))


class LunchStrategy(ABC):
    """Strategy Pattern: encapsulate how the lunch break is deducted."""

    @abstractmethod
    def break_minutes(self, *, effective_in: datetime, effective_out: datetime, total_minutes: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def overtime_overlap(self, *, scheduled_end: datetime, effective_out: datetime) -> int:
        """Lunch minutes falling inside the overtime span [scheduled_end, effective_out]."""

        raise NotImplementedError
