from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import uuid_utils

from src.platform.config.di import Container
from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.service.event_lifecycle.app.interface.i_event_record_store import IEventRecordStore
from src.service.event_lifecycle.domain.entity.event_record_entity import EventRecord
from src.service.event_lifecycle.domain.enum.event_status import EventStatus


class SubmitEventUseCase:
    """Create a new event record awaiting approval."""

    def __init__(self, *, event_record_store: IEventRecordStore) -> None:
        self.event_record_store = event_record_store

    @classmethod
    @inject
    def depends(
        cls,
        event_record_store: IEventRecordStore = Depends(Provide[Container.event_record_store]),
    ) -> Self:
        return cls(event_record_store=event_record_store)

    @Logger.io
    async def execute(
        self,
        *,
        organizer_id: str,
        title: str,
        scheduled_at: datetime,
        readable_id: str = '',
        event_type: str = '',
    ) -> EventRecord:
        if not organizer_id or not organizer_id.strip():
            raise InvalidInputError('Event organizer_id cannot be empty')
        if not title or not title.strip():
            raise InvalidInputError('Event title cannot be empty')

        if scheduled_at.tzinfo is None:
            scheduled_at = scheduled_at.replace(tzinfo=timezone.utc)

        record = EventRecord(
            event_id=str(uuid_utils.uuid7()),
            organizer_id=organizer_id.strip(),
            title=title.strip(),
            scheduled_at=scheduled_at.isoformat(),
            readable_id=readable_id.strip(),
            event_type=event_type.strip(),
            status=EventStatus.AWAITING_APPROVAL,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        created = await self.event_record_store.create(record=record)

        Logger.base.info(f'📝 [SUBMIT_EVENT] Created event {created.event_id} for {organizer_id}')
        return created
