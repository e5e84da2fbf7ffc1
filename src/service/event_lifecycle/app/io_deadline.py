from collections.abc import Iterator
from contextlib import contextmanager

import anyio

from src.platform.exception.exceptions import EventPublishError, StoreUnavailableError


@contextmanager
def store_deadline(*, seconds: float, operation: str, recovery_hint: str = '') -> Iterator[None]:
    try:
        with anyio.fail_after(seconds):
            yield
    except TimeoutError as e:
        message = f'Event record store timed out after {seconds}s during {operation}'
        raise StoreUnavailableError(
            f'{message}; {recovery_hint}' if recovery_hint else message
        ) from e


@contextmanager
def publish_deadline(*, seconds: float, event_id: str, status: str) -> Iterator[None]:
    try:
        with anyio.fail_after(seconds):
            yield
    except TimeoutError as e:
        raise EventPublishError(
            f'Fan-out for event {event_id} timed out after {seconds}s',
            event_id=event_id,
            status=status,
        ) from e
