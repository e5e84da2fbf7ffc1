"""
Unit tests for RepublishEventFanOutUseCase

Re-drives the fan-out of a Published event without touching the record.
"""

import pytest

from src.platform.exception.exceptions import (
    DataIntegrityError,
    EventNotPublishedError,
    EventPublishError,
    NotFoundError,
)
from src.service.event_lifecycle.app.command.republish_event_fan_out_use_case import (
    RepublishEventFanOutUseCase,
)
from src.service.event_lifecycle.domain.enum import EventStatus


@pytest.fixture
def use_case(record_store, fan_out_publisher) -> RepublishEventFanOutUseCase:
    return RepublishEventFanOutUseCase(
        event_record_store=record_store,
        fan_out_publisher=fan_out_publisher,
        io_timeout_seconds=1.0,
    )


@pytest.mark.unit
class TestRepublishEventFanOut:
    @pytest.mark.asyncio
    async def test_published_event_is_sent_again(
        self, use_case, record_store, fan_out_publisher, make_record
    ):
        record = make_record(status=EventStatus.PUBLISHED, organizer_id='org-7')
        record_store.seed(record)

        event = await use_case.execute(event_id='evt-1')

        fan_out_publisher.publish_event_published.assert_awaited_once_with(event=event)
        assert event.organizer_id == 'org-7'
        assert record_store.records['evt-1'] == record
        assert record_store.conditional_update_calls == 0

    @pytest.mark.asyncio
    async def test_unknown_event(self, use_case, fan_out_publisher):
        with pytest.raises(NotFoundError):
            await use_case.execute(event_id='missing')

        fan_out_publisher.publish_event_published.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'status', [EventStatus.APPROVED, EventStatus.CANCELLED, EventStatus.AWAITING_APPROVAL]
    )
    async def test_only_published_events_fan_out(
        self, use_case, record_store, fan_out_publisher, make_record, status
    ):
        record_store.seed(make_record(status=status))

        with pytest.raises(EventNotPublishedError) as exc_info:
            await use_case.execute(event_id='evt-1')

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == (
            f'Event evt-1 is not Published (current status: {status.value})'
        )
        assert 'transition' not in exc_info.value.message
        fan_out_publisher.publish_event_published.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_published_event_without_organizer(
        self, use_case, record_store, fan_out_publisher, make_record
    ):
        record_store.seed(make_record(status=EventStatus.PUBLISHED, organizer_id=' '))

        with pytest.raises(DataIntegrityError):
            await use_case.execute(event_id='evt-1')

        fan_out_publisher.publish_event_published.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_publish_failure_propagates(
        self, use_case, record_store, fan_out_publisher, make_record
    ):
        record_store.seed(make_record(status=EventStatus.PUBLISHED))
        fan_out_publisher.publish_event_published.side_effect = EventPublishError(
            'broker down', event_id='evt-1', status='Published'
        )

        with pytest.raises(EventPublishError):
            await use_case.execute(event_id='evt-1')

        assert record_store.records['evt-1'].status == EventStatus.PUBLISHED
