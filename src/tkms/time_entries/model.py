from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EntryStatus, EntryType


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one clock event (time-in or time-out).

    ``photo_url`` is an opaque reference to the capture kept by the photo store.
    """

    entry_id: int
    user_id: int
    entry_type: EntryType
    timestamp: datetime
    status: EntryStatus = EntryStatus.APPROVED
    photo_url: Optional[str] = None
    location: Optional[Location] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "userId": self.user_id,
            "type": self.entry_type.value,
            "timestamp": self.timestamp.isoformat(),
            "status": self.status.value,
            "photoUrl": self.photo_url,
            "location": (
                {"latitude": self.location.latitude, "longitude": self.location.longitude}
                if self.location
                else None
            ),
            "notes": self.notes,
        }
