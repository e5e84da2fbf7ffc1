"""
Event Record Store Interface

Key-value store holding one record per event. The status transition use
case depends on `conditional_update` being atomic: it is the only guard
against two concurrent transitions both committing from the same status.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.event_lifecycle.domain.entity.event_record_entity import EventRecord
from src.service.event_lifecycle.domain.enum.event_status import EventStatus


class IEventRecordStore(ABC):
    @abstractmethod
    async def get(self, *, event_id: str) -> Optional[EventRecord]:
        """
        Args:
            event_id: Event ID

        Returns:
            The record, or None if it does not exist

        Raises:
            DataIntegrityError: stored status is not a known EventStatus
            StoreUnavailableError: store could not be reached
        """
        pass

    @abstractmethod
    async def conditional_update(
        self,
        *,
        event_id: str,
        expected_status: EventStatus,
        new_status: EventStatus,
        entered_at: str,
    ) -> bool:
        """
        Set status and append status_timestamps[new_status] = entered_at,
        only if the stored status still equals expected_status.

        Returns:
            True if written, False if the stored status had changed

        Raises:
            NotFoundError: record no longer exists
            StoreUnavailableError: store could not be reached
        """
        pass

    @abstractmethod
    async def create(self, *, record: EventRecord) -> EventRecord:
        """
        Persist a new record.

        Raises:
            InvalidInputError: a record with the same event_id exists
            StoreUnavailableError: store could not be reached
        """
        pass
