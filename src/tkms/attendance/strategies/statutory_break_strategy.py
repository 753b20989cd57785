from __future__ import annotations

from datetime import datetime

from ...core.constants import (
    STATUTORY_LONG_BREAK_MINUTES,
    STATUTORY_LONG_SHIFT_MINUTES,
    STATUTORY_MEDIUM_BREAK_MINUTES,
    STATUTORY_MEDIUM_SHIFT_MINUTES,
)
from .base import LunchStrategy


class StatutoryBreakStrategy(LunchStrategy):
    """DOLE fallback when the schedule has no lunch window.

    More than 6 hours loses 60 minutes, 4 to 6 hours loses 30, anything
    shorter loses nothing. The span is not clamped to the scheduled end, so a
    long overtime day still loses a flat hour.
    """

    def break_minutes(self, *, effective_in: datetime, effective_out: datetime, total_minutes: int) -> int:
        if total_minutes > STATUTORY_LONG_SHIFT_MINUTES:
            return STATUTORY_LONG_BREAK_MINUTES
        if total_minutes >= STATUTORY_MEDIUM_SHIFT_MINUTES:
            return STATUTORY_MEDIUM_BREAK_MINUTES
        return 0

    def overtime_overlap(self, *, scheduled_end: datetime, effective_out: datetime) -> int:
        return 0
