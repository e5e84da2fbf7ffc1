from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import EventNotPublishedError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.event_lifecycle_metrics import metrics
from src.service.event_lifecycle.app.interface.i_event_fan_out_publisher import (
    IEventFanOutPublisher,
)
from src.service.event_lifecycle.app.interface.i_event_record_store import IEventRecordStore
from src.service.event_lifecycle.app.io_deadline import publish_deadline, store_deadline
from src.service.event_lifecycle.domain.domain_event.event_published_domain_event import (
    EventPublishedDomainEvent,
)
from src.service.event_lifecycle.domain.enum.event_status import EventStatus


class RepublishEventFanOutUseCase:
    """
    Re-drive the fan-out of an already Published event.

    Used after a transition returned EventPublishError: the status write
    was committed, only the message is missing. Does not touch the record.
    """

    def __init__(
        self,
        *,
        event_record_store: IEventRecordStore,
        fan_out_publisher: IEventFanOutPublisher,
        io_timeout_seconds: Optional[float] = None,
    ) -> None:
        self.event_record_store = event_record_store
        self.fan_out_publisher = fan_out_publisher
        self.io_timeout_seconds = (
            settings.EVENT_IO_TIMEOUT_SECONDS if io_timeout_seconds is None else io_timeout_seconds
        )

    @classmethod
    @inject
    def depends(
        cls,
        event_record_store: IEventRecordStore = Depends(Provide[Container.event_record_store]),
        fan_out_publisher: IEventFanOutPublisher = Depends(
            Provide[Container.event_fan_out_publisher]
        ),
    ) -> Self:
        return cls(event_record_store=event_record_store, fan_out_publisher=fan_out_publisher)

    @Logger.io
    async def execute(self, *, event_id: str) -> EventPublishedDomainEvent:
        with store_deadline(seconds=self.io_timeout_seconds, operation='get'):
            record = await self.event_record_store.get(event_id=event_id)
        if record is None:
            raise NotFoundError(f'Event with ID {event_id} not found')

        if record.status != EventStatus.PUBLISHED:
            raise EventNotPublishedError(event_id=event_id, current_status=record.status.value)

        event = EventPublishedDomainEvent.from_record(record=record)
        with publish_deadline(
            seconds=self.io_timeout_seconds, event_id=event_id, status=record.status.value
        ):
            await self.fan_out_publisher.publish_event_published(event=event)

        metrics.record_fan_out(result='republished')
        Logger.base.info(f'📤 [FAN_OUT] Re-published fan-out for event {event_id}')
        return event
