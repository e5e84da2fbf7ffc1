"""
Event Record Store Implementation (Kvrocks)

One hash per event:
    event_id, organizer_id, title, scheduled_at, readable_id, event_type,
    status, created_at, status_ts:{Status} -> ISO timestamp

Status changes go through a Lua compare-and-set so the read-validate-write
sequence of a transition cannot be interleaved with another writer's commit.
"""

from typing import Any, Callable, Dict, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.platform.exception.exceptions import (
    DataIntegrityError,
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.state.kvrocks_client import kvrocks_client
from src.service.event_lifecycle.app.interface.i_event_record_store import IEventRecordStore
from src.service.event_lifecycle.domain.entity.event_record_entity import EventRecord
from src.service.event_lifecycle.domain.enum.event_status import EventStatus
from src.service.event_lifecycle.driven_adapter.state.key_str_generator import (
    make_event_record_key,
)
from src.service.event_lifecycle.driven_adapter.state.lua_script import (
    CONDITIONAL_STATUS_UPDATE_SCRIPT,
    CREATE_EVENT_RECORD_SCRIPT,
)


STATUS_TS_FIELD_PREFIX = 'status_ts:'

_WRITTEN = 1
_CONDITION_FAILED = 0
_RECORD_MISSING = -1


def _parse_status(*, event_id: str, raw: Optional[str]) -> EventStatus:
    # Records written before status tracking have no status field yet
    if not raw:
        return EventStatus.AWAITING_APPROVAL
    try:
        return EventStatus(raw)
    except ValueError:
        raise DataIntegrityError(f'Event {event_id} has unknown stored status: {raw}')


def _record_from_hash(*, event_id: str, data: Dict[str, str]) -> EventRecord:
    status_timestamps = {
        _parse_status(event_id=event_id, raw=field.removeprefix(STATUS_TS_FIELD_PREFIX)): value
        for field, value in data.items()
        if field.startswith(STATUS_TS_FIELD_PREFIX)
    }
    return EventRecord(
        event_id=data.get('event_id') or event_id,
        organizer_id=data.get('organizer_id', ''),
        title=data.get('title', ''),
        scheduled_at=data.get('scheduled_at', ''),
        readable_id=data.get('readable_id', ''),
        event_type=data.get('event_type', ''),
        status=_parse_status(event_id=event_id, raw=data.get('status')),
        status_timestamps=status_timestamps,
        created_at=data.get('created_at') or None,
    )


def _hash_from_record(*, record: EventRecord) -> Dict[str, str]:
    data = {
        'event_id': record.event_id,
        'organizer_id': record.organizer_id,
        'title': record.title,
        'scheduled_at': record.scheduled_at,
        'readable_id': record.readable_id,
        'event_type': record.event_type,
        'status': record.status.value,
        'created_at': record.created_at or '',
    }
    for status, entered_at in record.status_timestamps.items():
        data[f'{STATUS_TS_FIELD_PREFIX}{status.value}'] = entered_at
    return data


class EventRecordStoreImpl(IEventRecordStore):
    def __init__(self, *, client_factory: Optional[Callable[[], Redis]] = None) -> None:
        self._client_factory = client_factory or kvrocks_client.get_client

    def _client(self) -> Redis:
        return self._client_factory()

    async def _run_script(self, *, source: str, keys: list[str], args: list[Any]) -> int:
        # register_script reloads on NoScriptError by itself
        script = self._client().register_script(source)
        return int(await script(keys=keys, args=args))

    @Logger.io
    async def get(self, *, event_id: str) -> Optional[EventRecord]:
        try:
            data = await self._client().hgetall(make_event_record_key(event_id=event_id))
        except RedisError as e:
            raise StoreUnavailableError(f'Failed to read event {event_id}: {e}') from e

        if not data:
            return None
        return _record_from_hash(event_id=event_id, data=data)

    @Logger.io
    async def conditional_update(
        self,
        *,
        event_id: str,
        expected_status: EventStatus,
        new_status: EventStatus,
        entered_at: str,
    ) -> bool:
        try:
            outcome = await self._run_script(
                source=CONDITIONAL_STATUS_UPDATE_SCRIPT,
                keys=[make_event_record_key(event_id=event_id)],
                args=[expected_status.value, new_status.value, entered_at],
            )
        except RedisError as e:
            raise StoreUnavailableError(f'Failed to update event {event_id}: {e}') from e

        if outcome == _RECORD_MISSING:
            raise NotFoundError(f'Event with ID {event_id} not found')
        if outcome == _CONDITION_FAILED:
            Logger.base.warning(
                f'⚠️ [EVENT_STORE] {event_id} is no longer {expected_status}, write rejected'
            )
        return outcome == _WRITTEN

    @Logger.io
    async def create(self, *, record: EventRecord) -> EventRecord:
        fields = _hash_from_record(record=record)
        args = [item for pair in fields.items() for item in pair]
        try:
            outcome = await self._run_script(
                source=CREATE_EVENT_RECORD_SCRIPT,
                keys=[make_event_record_key(event_id=record.event_id)],
                args=args,
            )
        except RedisError as e:
            raise StoreUnavailableError(f'Failed to create event {record.event_id}: {e}') from e

        if outcome != _WRITTEN:
            raise InvalidInputError(f'Event with ID {record.event_id} already exists')
        return record
