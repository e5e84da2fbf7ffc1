"""
Shared fixtures for event lifecycle tests.

InMemoryEventRecordStore keeps the compare-and-set contract of the Kvrocks
store: `get` yields to the event loop before returning so concurrent
transitions interleave between read and write.

Knobs:
- lost_writes: reject this many conditional writes as if another writer won
- read_delay: seconds `get` sleeps before answering
- ack_delay: seconds `conditional_update` sleeps after committing, before answering
"""

import asyncio
from typing import Callable, Dict, Optional
from unittest.mock import AsyncMock

import attrs
import pytest

from src.platform.exception.exceptions import InvalidInputError, NotFoundError
from src.service.event_lifecycle.app.interface import IEventFanOutPublisher, IEventRecordStore
from src.service.event_lifecycle.domain.entity.event_record_entity import EventRecord
from src.service.event_lifecycle.domain.enum import EventStatus


class InMemoryEventRecordStore(IEventRecordStore):
    def __init__(
        self, *, lost_writes: int = 0, read_delay: float = 0, ack_delay: float = 0
    ) -> None:
        self.records: Dict[str, EventRecord] = {}
        self.conditional_update_calls = 0
        self.lost_writes = lost_writes
        self.read_delay = read_delay
        self.ack_delay = ack_delay

    def seed(self, record: EventRecord) -> EventRecord:
        self.records[record.event_id] = record
        return record

    async def get(self, *, event_id: str) -> Optional[EventRecord]:
        await asyncio.sleep(self.read_delay)
        record = self.records.get(event_id)
        if record is None:
            return None
        return attrs.evolve(record, status_timestamps=dict(record.status_timestamps))

    async def conditional_update(
        self,
        *,
        event_id: str,
        expected_status: EventStatus,
        new_status: EventStatus,
        entered_at: str,
    ) -> bool:
        self.conditional_update_calls += 1
        record = self.records.get(event_id)
        if record is None:
            raise NotFoundError(f'Event with ID {event_id} not found')
        if self.lost_writes > 0:
            self.lost_writes -= 1
            return False
        if record.status != expected_status:
            return False
        self.records[event_id] = record.transition_to(status=new_status, entered_at=entered_at)
        if self.ack_delay:
            await asyncio.sleep(self.ack_delay)
        return True

    async def create(self, *, record: EventRecord) -> EventRecord:
        if record.event_id in self.records:
            raise InvalidInputError(f'Event with ID {record.event_id} already exists')
        self.records[record.event_id] = record
        return record


@pytest.fixture
def record_store() -> InMemoryEventRecordStore:
    return InMemoryEventRecordStore()


@pytest.fixture
def make_record_store() -> Callable[..., InMemoryEventRecordStore]:
    return InMemoryEventRecordStore


@pytest.fixture
def fan_out_publisher() -> AsyncMock:
    publisher = AsyncMock(spec=IEventFanOutPublisher)
    publisher.publish_event_published = AsyncMock(return_value=None)
    return publisher


@pytest.fixture
def make_record() -> Callable[..., EventRecord]:
    def _make(
        *,
        event_id: str = 'evt-1',
        status: EventStatus = EventStatus.AWAITING_APPROVAL,
        organizer_id: str = 'org-1',
        title: str = 'Campus Hackathon',
    ) -> EventRecord:
        return EventRecord(
            event_id=event_id,
            organizer_id=organizer_id,
            title=title,
            scheduled_at='2026-11-20T09:00:00+05:30',
            readable_id='EVT-1042',
            event_type='open',
            status=status,
            created_at='2026-10-01T00:00:00+00:00',
        )

    return _make
