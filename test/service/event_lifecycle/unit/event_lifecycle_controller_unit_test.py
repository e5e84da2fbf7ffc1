"""
Unit tests for the event lifecycle HTTP API

Use cases are built on the in-memory record store and injected through
FastAPI dependency overrides; no Kvrocks or Kafka involved.
"""

from fastapi.testclient import TestClient
import pytest

from src.platform.app_factory import create_app
from src.platform.exception.exceptions import EventPublishError
from src.service.event_lifecycle.app.command.republish_event_fan_out_use_case import (
    RepublishEventFanOutUseCase,
)
from src.service.event_lifecycle.app.command.submit_event_use_case import SubmitEventUseCase
from src.service.event_lifecycle.app.command.transition_event_status_use_case import (
    TransitionEventStatusUseCase,
)
from src.service.event_lifecycle.app.query.get_event_record_use_case import (
    GetEventRecordUseCase,
)
from src.service.event_lifecycle.domain.enum import EventStatus


@pytest.fixture
def client(record_store, fan_out_publisher):
    app = create_app(title_suffix=' (Test)')
    app.dependency_overrides[TransitionEventStatusUseCase.depends] = (
        lambda: TransitionEventStatusUseCase(
            event_record_store=record_store,
            fan_out_publisher=fan_out_publisher,
            io_timeout_seconds=1.0,
        )
    )
    app.dependency_overrides[RepublishEventFanOutUseCase.depends] = (
        lambda: RepublishEventFanOutUseCase(
            event_record_store=record_store,
            fan_out_publisher=fan_out_publisher,
            io_timeout_seconds=1.0,
        )
    )
    app.dependency_overrides[SubmitEventUseCase.depends] = lambda: SubmitEventUseCase(
        event_record_store=record_store
    )
    app.dependency_overrides[GetEventRecordUseCase.depends] = lambda: GetEventRecordUseCase(
        event_record_store=record_store
    )

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.mark.unit
class TestUpdateEventStatus:
    def test_transition_success(self, client, record_store, make_record):
        record_store.seed(make_record(status=EventStatus.AWAITING_APPROVAL))

        response = client.patch(
            '/api/event/evt-1/status', json={'status': 'UnderReview', 'role': 'organizer'}
        )

        assert response.status_code == 200
        body = response.json()
        assert body['event_id'] == 'evt-1'
        assert body['status'] == 'UnderReview'
        assert body['previous_status'] == 'AwaitingApproval'
        assert body['transitioned_at']

    def test_comma_separated_roles_with_admin(self, client, record_store, make_record):
        record_store.seed(make_record(status=EventStatus.PUBLISHED))

        response = client.patch(
            '/api/event/evt-1/status', json={'status': 'Cancelled', 'role': 'Organizer, Admin'}
        )

        assert response.status_code == 200
        assert record_store.records['evt-1'].status == EventStatus.CANCELLED

    def test_invalid_transition_is_conflict(self, client, record_store, make_record):
        record_store.seed(make_record(status=EventStatus.PUBLISHED))

        response = client.patch(
            '/api/event/evt-1/status', json={'status': 'Cancelled', 'role': 'organizer'}
        )

        assert response.status_code == 409
        assert response.json() == {
            'detail': 'Invalid status transition: Cannot change from Published to Cancelled'
        }

    def test_unknown_event(self, client):
        response = client.patch(
            '/api/event/missing/status', json={'status': 'Cancelled', 'role': 'organizer'}
        )

        assert response.status_code == 404

    def test_unknown_status_value(self, client, record_store, make_record):
        record_store.seed(make_record())

        response = client.patch(
            '/api/event/evt-1/status', json={'status': 'Archived', 'role': 'organizer'}
        )

        assert response.status_code == 400
        assert 'Unknown event status' in response.json()['detail']

    def test_blank_role(self, client, record_store, make_record):
        record_store.seed(make_record())

        response = client.patch(
            '/api/event/evt-1/status', json={'status': 'UnderReview', 'role': ' '}
        )

        assert response.status_code == 400
        assert response.json() == {'detail': 'Missing required field: role'}

    def test_missing_body_field(self, client):
        response = client.patch('/api/event/evt-1/status', json={'status': 'UnderReview'})

        assert response.status_code == 400

    def test_publish_failure_reports_committed_status(
        self, client, record_store, fan_out_publisher, make_record
    ):
        record_store.seed(make_record(status=EventStatus.APPROVED))
        fan_out_publisher.publish_event_published.side_effect = EventPublishError(
            'broker down', event_id='evt-1', status='Published'
        )

        response = client.patch(
            '/api/event/evt-1/status', json={'status': 'Published', 'role': 'organizer'}
        )

        assert response.status_code == 502
        body = response.json()
        assert body['event_id'] == 'evt-1'
        assert body['status'] == 'Published'
        assert body['retriable'] is True
        assert record_store.records['evt-1'].status == EventStatus.PUBLISHED

    def test_lost_races_exhaust_retries(self, client, record_store, make_record):
        record_store.seed(make_record(status=EventStatus.AWAITING_APPROVAL))
        record_store.lost_writes = 10

        response = client.patch(
            '/api/event/evt-1/status', json={'status': 'UnderReview', 'role': 'organizer'}
        )

        assert response.status_code == 503
        assert record_store.conditional_update_calls == 3


@pytest.mark.unit
class TestEventRecordEndpoints:
    def test_submit_then_get(self, client):
        created = client.post(
            '/api/event',
            json={
                'organizer_id': 'org-1',
                'title': 'Campus Hackathon',
                'scheduled_at': '2026-11-20T09:00:00+05:30',
            },
        )

        assert created.status_code == 201
        event_id = created.json()['event_id']
        assert created.json()['status'] == 'AwaitingApproval'

        fetched = client.get(f'/api/event/{event_id}')

        assert fetched.status_code == 200
        assert fetched.json()['organizer_id'] == 'org-1'
        assert fetched.json()['status_timestamps'] == {}

    def test_get_unknown_event(self, client):
        response = client.get('/api/event/missing')

        assert response.status_code == 404
        assert response.json() == {'detail': 'Event with ID missing not found'}

    def test_status_timestamps_keyed_by_status(self, client, record_store, make_record):
        record_store.seed(
            make_record(status=EventStatus.UNDER_REVIEW).transition_to(
                status=EventStatus.UNDER_REVIEW, entered_at='2026-10-02T00:00:00+00:00'
            )
        )

        response = client.get('/api/event/evt-1')

        assert response.json()['status_timestamps'] == {
            'UnderReview': '2026-10-02T00:00:00+00:00'
        }


@pytest.mark.unit
class TestRepublishFanOut:
    def test_published_event_accepted(self, client, record_store, fan_out_publisher, make_record):
        record_store.seed(make_record(status=EventStatus.PUBLISHED))

        response = client.post('/api/event/evt-1/fan-out')

        assert response.status_code == 202
        assert response.json()['event_id'] == 'evt-1'
        assert response.json()['organizer_id'] == 'org-1'
        fan_out_publisher.publish_event_published.assert_awaited_once()

    def test_unpublished_event_is_conflict(self, client, record_store, make_record):
        record_store.seed(make_record(status=EventStatus.APPROVED))

        response = client.post('/api/event/evt-1/fan-out')

        assert response.status_code == 409
        assert response.json()['detail'] == (
            'Event evt-1 is not Published (current status: Approved)'
        )


@pytest.mark.unit
class TestCommonEndpoints:
    def test_health(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_metrics_exposes_transition_counter(self, client, record_store, make_record):
        record_store.seed(make_record(status=EventStatus.AWAITING_APPROVAL))
        client.patch(
            '/api/event/evt-1/status', json={'status': 'UnderReview', 'role': 'organizer'}
        )

        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'event_status_transitions_total' in response.text
