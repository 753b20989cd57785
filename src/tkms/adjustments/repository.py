from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AdjustmentType, EntryStatus
from .model import TimeAdjustment


class TimeAdjustmentRepository(Protocol):
    def get_by_id(self, adjustment_id: int) -> Optional[TimeAdjustment]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        adjustment_type: AdjustmentType,
        work_date: date,
        original_time: Optional[datetime],
        adjusted_time: datetime,
        reason: str,
        approved_by: int,
        notes: Optional[str],
        status: EntryStatus,
    ) -> int:
        raise NotImplementedError

    def list_all(self, *, user_id: Optional[int] = None) -> Sequence[TimeAdjustment]:
        """Newest first."""
        raise NotImplementedError
