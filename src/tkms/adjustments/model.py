from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AdjustmentType, EntryStatus


@dataclass(frozen=True)
class AdjustmentSettings:
    """Admin toggles for manual (verbal agreement) time adjustments."""

    enable_verbal_agreements: bool = False
    allow_early_out: bool = False
    allow_half_day: bool = False
    allow_late_in: bool = False

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AdjustmentSettings":
        data = data or {}
        return cls(
            enable_verbal_agreements=bool(data.get("enable_verbal_agreements", False)),
            allow_early_out=bool(data.get("allow_early_out", False)),
            allow_half_day=bool(data.get("allow_half_day", False)),
            allow_late_in=bool(data.get("allow_late_in", False)),
        )

    def allows(self, adjustment_type: AdjustmentType) -> bool:
        if adjustment_type == AdjustmentType.EARLY_OUT:
            return self.allow_early_out
        if adjustment_type == AdjustmentType.HALF_DAY:
            return self.allow_half_day
        if adjustment_type == AdjustmentType.LATE_IN:
            return self.allow_late_in
        return True


@dataclass(frozen=True)
class TimeAdjustment:
    adjustment_id: int
    user_id: int
    adjustment_type: AdjustmentType
    work_date: date
    adjusted_time: datetime
    reason: str
    approved_by: int
    original_time: Optional[datetime] = None
    notes: Optional[str] = None
    status: EntryStatus = EntryStatus.APPROVED
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.adjustment_id,
            "userId": self.user_id,
            "adjustmentType": self.adjustment_type.value,
            "date": self.work_date.isoformat(),
            "originalTime": self.original_time.isoformat() if self.original_time else None,
            "adjustedTime": self.adjusted_time.isoformat(),
            "reason": self.reason,
            "approvedBy": self.approved_by,
            "notes": self.notes,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
