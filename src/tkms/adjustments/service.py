from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import at_time_of_day, parse_time_of_day
from ..common.validators import optional_text, require_non_empty
from ..core.enums import AdjustmentType, EntryStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import AdjustmentSettings, TimeAdjustment
from .repository import TimeAdjustmentRepository

logger = logging.getLogger(__name__)

_DISABLED_MESSAGES = {
    AdjustmentType.EARLY_OUT: "Early out adjustments are disabled",
    AdjustmentType.HALF_DAY: "Half day adjustments are disabled",
    AdjustmentType.LATE_IN: "Late in adjustments are disabled",
}


class TimeAdjustmentService:
    def __init__(self, repo: TimeAdjustmentRepository, settings: AdjustmentSettings):
        self._repo = repo
        self._settings = settings

    @property
    def settings(self) -> AdjustmentSettings:
        return self._settings

    def list(self, *, user_id: Optional[int] = None) -> Sequence[TimeAdjustment]:
        return self._repo.list_all(user_id=user_id)

    def create(
        self,
        *,
        user_id: int,
        adjustment_type: AdjustmentType | str,
        work_date: date,
        adjusted_time: str,
        reason: str,
        approved_by: int,
        original_time: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> TimeAdjustment:
        """Record an admin-approved adjustment agreed outside the kiosk.

        ``adjusted_time`` and ``original_time`` are ``"HH:MM"`` on ``work_date``.
        """
        if not self._settings.enable_verbal_agreements:
            raise ValidationError("Manual time adjustments are currently disabled")

        try:
            adjustment_type = AdjustmentType(adjustment_type)
        except ValueError:
            raise ValidationError(f"Unknown adjustment type: {adjustment_type!r}")
        if not self._settings.allows(adjustment_type):
            raise ValidationError(_DISABLED_MESSAGES[adjustment_type])

        reason = require_non_empty(reason, "Reason")
        adjusted_at = at_time_of_day(work_date, parse_time_of_day(adjusted_time, "Adjusted time"))
        original_at = None
        if original_time:
            original_at = at_time_of_day(work_date, parse_time_of_day(original_time, "Original time"))

        adjustment_id = self._repo.create(
            user_id=int(user_id),
            adjustment_type=adjustment_type,
            work_date=work_date,
            original_time=original_at,
            adjusted_time=adjusted_at,
            reason=reason,
            approved_by=int(approved_by),
            notes=optional_text(notes),
            status=EntryStatus.APPROVED,
        )
        logger.info(
            "Time adjustment %s (%s) for user %s on %s approved by %s",
            adjustment_id,
            adjustment_type.value,
            user_id,
            work_date,
            approved_by,
        )

        created = self._repo.get_by_id(adjustment_id)
        if created is None:
            raise NotFoundError("Time adjustment not found")
        return created
