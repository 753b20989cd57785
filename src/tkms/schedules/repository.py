from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, active_only: bool = True) -> Sequence[Schedule]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Schedule]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        days: Iterable[str],
        time_in: str,
        time_out: str,
        lunch_start: Optional[str] = None,
        lunch_end: Optional[str] = None,
    ) -> int:
        """Insert an active schedule. Returns schedule_id."""

        raise NotImplementedError

    def update(self, schedule: Schedule) -> bool:
        raise NotImplementedError

    def deactivate_for_user(self, user_id: int) -> int:
        """Mark every active schedule of the user inactive. Returns affected rows."""

        raise NotImplementedError

    def delete(self, schedule_id: int) -> bool:
        raise NotImplementedError
