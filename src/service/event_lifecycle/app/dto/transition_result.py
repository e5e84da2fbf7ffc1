import attrs

from src.service.event_lifecycle.domain.enum.event_status import EventStatus


@attrs.define(frozen=True)
class TransitionResult:
    event_id: str
    status: EventStatus
    previous_status: EventStatus
    transitioned_at: str  # ISO-8601
