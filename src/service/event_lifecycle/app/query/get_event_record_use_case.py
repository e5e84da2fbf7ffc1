from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.event_lifecycle.app.interface.i_event_record_store import IEventRecordStore
from src.service.event_lifecycle.domain.entity.event_record_entity import EventRecord


class GetEventRecordUseCase:
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
    async def get_by_id(self, *, event_id: str) -> Optional[EventRecord]:
        record = await self.event_record_store.get(event_id=event_id)
        if record is None:
            Logger.base.warning(f'⚠️ [GET_EVENT] Event {event_id} not found')
        return record
