from abc import ABC, abstractmethod

from src.service.event_lifecycle.domain.domain_event.event_published_domain_event import (
    EventPublishedDomainEvent,
)


class IEventFanOutPublisher(ABC):
    """
    Port for broadcasting newly published events to downstream subscribers.

    Delivery is at-least-once; subscribers must tolerate duplicates.
    Implementations must not retry internally beyond the producer's own
    settings and must raise EventPublishError on failure.
    """

    @abstractmethod
    async def publish_event_published(self, *, event: EventPublishedDomainEvent) -> None:
        """
        Raises:
            EventPublishError: If publishing fails
        """
        pass
