from __future__ import annotations

from enum import Enum


class EntryType(str, Enum):
    """Kind of clock event captured by the kiosk."""

    TIME_IN = "time-in"
    TIME_OUT = "time-out"


class EntryStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceStatus(str, Enum):
    """Day status stored on the attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    ON_LEAVE = "on-leave"
    HOLIDAY = "holiday"


class AdjustmentType(str, Enum):
    EARLY_OUT = "early-out"
    HALF_DAY = "half-day"
    LATE_IN = "late-in"
    OTHER = "other"
