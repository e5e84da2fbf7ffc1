"""
Event Fan-Out Publisher Implementation

Kafka adapter for IEventFanOutPublisher. Messages for one organizer land on
one partition so their followers see publish notifications in order.
"""

import zlib

from confluent_kafka import KafkaException

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import EventPublishError
from src.platform.logging.loguru_io import Logger
from src.platform.message_queue.event_publisher import publish_domain_event
from src.platform.message_queue.kafka_constant_builder import KafkaTopicBuilder
from src.service.event_lifecycle.app.interface.i_event_fan_out_publisher import (
    IEventFanOutPublisher,
)
from src.service.event_lifecycle.domain.domain_event.event_published_domain_event import (
    EventPublishedDomainEvent,
)
from src.service.event_lifecycle.domain.enum.event_status import EventStatus


class EventFanOutPublisherImpl(IEventFanOutPublisher):
    @staticmethod
    def _calculate_partition(organizer_id: str) -> int:
        """Stable across processes (unlike hash())"""
        return zlib.crc32(organizer_id.encode('utf-8')) % settings.KAFKA_TOTAL_PARTITIONS

    @Logger.io
    async def publish_event_published(self, *, event: EventPublishedDomainEvent) -> None:
        topic = KafkaTopicBuilder.event_published()
        try:
            await publish_domain_event(
                event=event,
                topic=topic,
                partition=self._calculate_partition(event.organizer_id),
                key=event.event_id,
            )
        except (KafkaException, BufferError) as e:
            raise EventPublishError(
                f'Failed to publish fan-out for event {event.event_id}: {e}',
                event_id=event.event_id,
                status=EventStatus.PUBLISHED.value,
            ) from e
