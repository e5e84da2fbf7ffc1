"""
Event Status Transition Policy

Static lookup tables deciding which status an event may move to next.
The admin table is additive: an admin caller gets the union of both.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from src.platform.exception.exceptions import InvalidInputError
from src.service.event_lifecycle.domain.enum.event_status import EventStatus


ADMIN_ROLE = 'admin'

BASE_TRANSITIONS: Mapping[EventStatus, frozenset[EventStatus]] = MappingProxyType(
    {
        EventStatus.AWAITING_APPROVAL: frozenset(
            {EventStatus.UNDER_REVIEW, EventStatus.CANCELLED, EventStatus.DELETED}
        ),
        EventStatus.UNDER_REVIEW: frozenset(
            {EventStatus.APPROVED, EventStatus.CANCELLED, EventStatus.DELETED}
        ),
        EventStatus.APPROVED: frozenset(
            {EventStatus.PUBLISHED, EventStatus.CANCELLED, EventStatus.DELETED}
        ),
        EventStatus.PUBLISHED: frozenset(),
        EventStatus.CANCELLED: frozenset({EventStatus.DELETED}),
        EventStatus.DELETED: frozenset(),
    }
)

# Cancelled -> Deleted duplicates the base table; kept as-is
ADMIN_OVERRIDES: Mapping[EventStatus, frozenset[EventStatus]] = MappingProxyType(
    {
        EventStatus.AWAITING_APPROVAL: frozenset(
            {
                EventStatus.UNDER_REVIEW,
                EventStatus.CANCELLED,
                EventStatus.DELETED,
                EventStatus.APPROVED,
            }
        ),
        EventStatus.PUBLISHED: frozenset({EventStatus.CANCELLED}),
        EventStatus.CANCELLED: frozenset({EventStatus.DELETED}),
    }
)


def normalize_caller_roles(caller_roles: str | Iterable[str] | None) -> frozenset[str]:
    """Accept 'Organizer, Admin' or ['Organizer', ' admin'] -> {'organizer', 'admin'}."""
    if caller_roles is None:
        raise InvalidInputError('Missing required field: role')

    parts = caller_roles.split(',') if isinstance(caller_roles, str) else caller_roles
    roles = frozenset(
        role.strip().lower() for role in parts if isinstance(role, str) and role.strip()
    )
    if not roles:
        raise InvalidInputError('Missing required field: role')
    return roles


def parse_event_status(value: str | EventStatus | None) -> EventStatus:
    if isinstance(value, EventStatus):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError('Missing required field: status')
    try:
        return EventStatus(value.strip())
    except ValueError:
        raise InvalidInputError(f'Unknown event status: {value}')


def is_admin(roles: frozenset[str]) -> bool:
    return ADMIN_ROLE in roles


def allowed_transitions(
    *, current_status: EventStatus, roles: frozenset[str]
) -> frozenset[EventStatus]:
    allowed = BASE_TRANSITIONS.get(current_status, frozenset())
    if is_admin(roles):
        allowed = allowed | ADMIN_OVERRIDES.get(current_status, frozenset())
    return allowed


def is_transition_allowed(
    *, current_status: EventStatus, requested_status: EventStatus, roles: frozenset[str]
) -> bool:
    return requested_status in allowed_transitions(current_status=current_status, roles=roles)
