from typing import Dict, Optional

import attrs

from src.platform.exception.exceptions import InvalidInputError
from src.service.event_lifecycle.domain.enum.event_status import EventStatus


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise InvalidInputError(f'Event {attribute.name} cannot be empty')


@attrs.define
class EventRecord:
    """
    Event as stored in the record store.

    Only `status` and `status_timestamps` change after submission, and only
    through the status transition use case.
    """

    event_id: str = attrs.field(validator=_validate_non_empty_string)
    organizer_id: str = ''
    title: str = ''
    scheduled_at: str = ''  # ISO-8601
    readable_id: str = ''
    event_type: str = ''
    status: EventStatus = EventStatus.AWAITING_APPROVAL
    status_timestamps: Dict[EventStatus, str] = attrs.field(factory=dict)
    created_at: Optional[str] = None

    def transition_to(self, *, status: EventStatus, entered_at: str) -> 'EventRecord':
        """Copy of this record after entering `status`; the original is untouched."""
        return attrs.evolve(
            self,
            status=status,
            status_timestamps={**self.status_timestamps, status: entered_at},
        )
