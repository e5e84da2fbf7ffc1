from collections.abc import Iterable
from datetime import datetime, timezone
import time
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ConcurrentModificationError,
    CustomBaseError,
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.event_lifecycle_metrics import metrics
from src.service.event_lifecycle.app.dto.transition_result import TransitionResult
from src.service.event_lifecycle.app.interface.i_event_fan_out_publisher import (
    IEventFanOutPublisher,
)
from src.service.event_lifecycle.app.interface.i_event_record_store import IEventRecordStore
from src.service.event_lifecycle.app.io_deadline import publish_deadline, store_deadline
from src.service.event_lifecycle.domain.domain_event.event_published_domain_event import (
    EventPublishedDomainEvent,
)
from src.service.event_lifecycle.domain.entity.event_record_entity import EventRecord
from src.service.event_lifecycle.domain.enum.event_status import EventStatus
from src.service.event_lifecycle.domain.event_status_transition import (
    is_transition_allowed,
    normalize_caller_roles,
    parse_event_status,
)


class TransitionEventStatusUseCase:
    """
    Move an event to a new lifecycle status.

    Flow:
    1. Load the record (NotFoundError if absent)
    2. Check the requested status against the base table, plus the admin
       overrides when the caller holds the admin role
    3. Conditionally write status + timestamp (only if the stored status is
       still the one read in step 1)
    4. On Published, publish EventPublishedDomainEvent for fan-out

    The write always happens before the publish. If the publish fails the
    record stays Published and EventPublishError is raised so the caller can
    re-drive the fan-out alone (see RepublishEventFanOutUseCase).
    """

    def __init__(
        self,
        *,
        event_record_store: IEventRecordStore,
        fan_out_publisher: IEventFanOutPublisher,
        max_attempts: Optional[int] = None,
        io_timeout_seconds: Optional[float] = None,
    ) -> None:
        self.event_record_store = event_record_store
        self.fan_out_publisher = fan_out_publisher
        self.max_attempts = (
            settings.EVENT_STATUS_TRANSITION_MAX_ATTEMPTS if max_attempts is None else max_attempts
        )
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
    async def execute(
        self,
        *,
        event_id: str,
        requested_status: str | EventStatus,
        caller_roles: str | Iterable[str],
        timeout_seconds: Optional[float] = None,
    ) -> TransitionResult:
        """
        Single attempt. Raises ConcurrentModificationError when another
        writer changed the status between read and write.
        """
        if not isinstance(event_id, str) or not event_id.strip():
            raise InvalidInputError('Missing required field: event_id')
        event_id = event_id.strip()
        requested = parse_event_status(requested_status)
        roles = normalize_caller_roles(caller_roles)
        timeout = self.io_timeout_seconds if timeout_seconds is None else timeout_seconds

        started = time.perf_counter()
        from_status = 'unknown'
        try:
            with store_deadline(seconds=timeout, operation='get'):
                record = await self.event_record_store.get(event_id=event_id)
            if record is None:
                raise NotFoundError(f'Event with ID {event_id} not found')
            from_status = record.status.value

            result = await self._apply(
                record=record, requested=requested, roles=roles, timeout=timeout
            )
        except CustomBaseError as e:
            metrics.record_transition(
                from_status=from_status, to_status=requested.value, result=type(e).__name__
            )
            raise
        finally:
            metrics.transition_duration.labels(to_status=requested.value).observe(
                time.perf_counter() - started
            )

        metrics.record_transition(
            from_status=from_status, to_status=requested.value, result='success'
        )
        return result

    @Logger.io
    async def execute_with_retry(
        self,
        *,
        event_id: str,
        requested_status: str | EventStatus,
        caller_roles: str | Iterable[str],
        timeout_seconds: Optional[float] = None,
    ) -> TransitionResult:
        """Re-run the whole transition (fresh read) after a lost optimistic write."""
        attempt = 1
        while True:
            try:
                return await self.execute(
                    event_id=event_id,
                    requested_status=requested_status,
                    caller_roles=caller_roles,
                    timeout_seconds=timeout_seconds,
                )
            except ConcurrentModificationError:
                if attempt >= self.max_attempts:
                    raise
                Logger.base.warning(
                    f'🔁 [EVENT_STATUS] Lost write race on {event_id}, '
                    f'retrying ({attempt}/{self.max_attempts})'
                )
                attempt += 1

    async def _apply(
        self,
        *,
        record: EventRecord,
        requested: EventStatus,
        roles: frozenset[str],
        timeout: float,
    ) -> TransitionResult:
        current = record.status
        if not is_transition_allowed(
            current_status=current, requested_status=requested, roles=roles
        ):
            raise InvalidTransitionError(
                current_status=current.value, requested_status=requested.value
            )

        entered_at = datetime.now(timezone.utc).isoformat()
        # A timeout here may arrive after the script committed; the fan-out is then never sent
        recovery_hint = (
            f'if event {record.event_id} now reads Published, re-drive its fan-out '
            f'with POST /api/event/{record.event_id}/fan-out'
            if requested == EventStatus.PUBLISHED
            else ''
        )
        with store_deadline(
            seconds=timeout, operation='conditional_update', recovery_hint=recovery_hint
        ):
            written = await self.event_record_store.conditional_update(
                event_id=record.event_id,
                expected_status=current,
                new_status=requested,
                entered_at=entered_at,
            )
        if not written:
            raise ConcurrentModificationError(
                f'Event {record.event_id} changed while moving from {current} to {requested}'
            )

        Logger.base.info(
            f'✅ [EVENT_STATUS] {record.event_id}: {current} -> {requested} (roles={sorted(roles)})'
        )

        if requested == EventStatus.PUBLISHED:
            updated = record.transition_to(status=requested, entered_at=entered_at)
            await self._publish_fan_out(record=updated, timeout=timeout)

        return TransitionResult(
            event_id=record.event_id,
            status=requested,
            previous_status=current,
            transitioned_at=entered_at,
        )

    async def _publish_fan_out(self, *, record: EventRecord, timeout: float) -> None:
        try:
            event = EventPublishedDomainEvent.from_record(record=record)
        except CustomBaseError:
            # Record is already Published; leave it for manual investigation
            Logger.base.critical(
                f'🚨 [EVENT_STATUS] Event {record.event_id} is Published with no organizer, '
                'fan-out skipped'
            )
            raise

        try:
            with publish_deadline(
                seconds=timeout, event_id=record.event_id, status=record.status.value
            ):
                await self.fan_out_publisher.publish_event_published(event=event)
        except CustomBaseError:
            metrics.record_fan_out(result='failure')
            raise
        metrics.record_fan_out(result='success')
