from fastapi import APIRouter, Depends, status

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
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
from src.service.event_lifecycle.driving_adapter.http_controller.schema.event_lifecycle_schema import (
    EventRecordResponse,
    EventStatusTransitionRequest,
    EventStatusTransitionResponse,
    EventSubmitRequest,
    FanOutAcceptedResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def submit_event(
    request: EventSubmitRequest,
    use_case: SubmitEventUseCase = Depends(SubmitEventUseCase.depends),
) -> EventRecordResponse:
    record = await use_case.execute(
        organizer_id=request.organizer_id,
        title=request.title,
        scheduled_at=request.scheduled_at,
        readable_id=request.readable_id,
        event_type=request.event_type,
    )
    return EventRecordResponse.from_record(record)


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: str,
    use_case: GetEventRecordUseCase = Depends(GetEventRecordUseCase.depends),
) -> EventRecordResponse:
    record = await use_case.get_by_id(event_id=event_id)
    if record is None:
        raise NotFoundError(f'Event with ID {event_id} not found')
    return EventRecordResponse.from_record(record)


@router.patch('/{event_id}/status', status_code=status.HTTP_200_OK)
@Logger.io
async def update_event_status(
    event_id: str,
    request: EventStatusTransitionRequest,
    use_case: TransitionEventStatusUseCase = Depends(TransitionEventStatusUseCase.depends),
) -> EventStatusTransitionResponse:
    """
    Roles come from the already-authenticated caller; this endpoint does not
    verify them.
    """
    result = await use_case.execute_with_retry(
        event_id=event_id,
        requested_status=request.status,
        caller_roles=request.role,
    )
    return EventStatusTransitionResponse(
        event_id=result.event_id,
        status=result.status.value,
        previous_status=result.previous_status.value,
        transitioned_at=result.transitioned_at,
    )


@router.post('/{event_id}/fan-out', status_code=status.HTTP_202_ACCEPTED)
@Logger.io
async def republish_event_fan_out(
    event_id: str,
    use_case: RepublishEventFanOutUseCase = Depends(RepublishEventFanOutUseCase.depends),
) -> FanOutAcceptedResponse:
    event = await use_case.execute(event_id=event_id)
    return FanOutAcceptedResponse(
        event_id=event.event_id,
        organizer_id=event.organizer_id,
        occurred_at=event.occurred_at,
    )
