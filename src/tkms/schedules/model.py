from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Optional

from ..core.constants import WEEKDAYS


@dataclass(frozen=True)
class Schedule:
    """Domain entity: a user's working schedule.

    Time-of-day fields keep their ``"HH:MM"`` wire format; they are parsed
    (and rejected when malformed) at computation time.
    """

    schedule_id: int
    user_id: int
    days: FrozenSet[str]
    time_in: str
    time_out: str
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None
    is_active: bool = True
    updated_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def has_lunch_window(self) -> bool:
        return bool(self.lunch_start) and bool(self.lunch_end)

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "userId": self.user_id,
            "days": [d for d in WEEKDAYS if d in self.days],
            "timeIn": self.time_in,
            "timeOut": self.time_out,
            "lunchStart": self.lunch_start,
            "lunchEnd": self.lunch_end,
            "isActive": self.is_active,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
