"""
Event Published Domain Event

Fan-out message sent when an event enters Published. Downstream
notification workers look up followers of the organizer and notify them.
"""

from datetime import datetime, timezone
from typing import Any

import attrs

from src.platform.exception.exceptions import DataIntegrityError
from src.service.event_lifecycle.domain.entity.event_record_entity import EventRecord


@attrs.define(frozen=True)
class EventPublishedDomainEvent:
    event_id: str
    organizer_id: str
    title: str
    scheduled_at: str
    readable_id: str
    event_type: str
    occurred_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_record(cls, *, record: EventRecord) -> 'EventPublishedDomainEvent':
        # A published event without an owner cannot be routed to followers
        if not record.organizer_id or not record.organizer_id.strip():
            raise DataIntegrityError(
                f'Event {record.event_id} reached Published without an organizer'
            )
        return cls(
            event_id=record.event_id,
            organizer_id=record.organizer_id,
            title=record.title,
            scheduled_at=record.scheduled_at,
            readable_id=record.readable_id,
            event_type=record.event_type,
        )

    def to_message(self) -> dict[str, Any]:
        return {
            'eventId': self.event_id,
            'organizerId': self.organizer_id,
            'title': self.title,
            'scheduledAt': self.scheduled_at,
            'readableId': self.readable_id,
            'eventType': self.event_type,
            'occurredAt': self.occurred_at.isoformat(),
        }
