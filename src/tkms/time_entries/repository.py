from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EntryStatus, EntryType
from .model import Location, TimeEntry


class TimeEntryRepository(Protocol):
    def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def find_for_user_on_date(self, *, user_id: int, entry_type: EntryType, work_date: date) -> Optional[TimeEntry]:
        """First non-rejected entry of that type on the canonical day."""

        raise NotImplementedError

    def list_for_user(
        self,
        *,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 100,
    ) -> Sequence[TimeEntry]:
        """Newest first. ``start`` inclusive, ``end`` exclusive."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        entry_type: EntryType,
        timestamp: datetime,
        status: EntryStatus,
        photo_url: Optional[str] = None,
        location: Optional[Location] = None,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_status(self, *, entry_id: int, status: EntryStatus) -> bool:
        raise NotImplementedError
