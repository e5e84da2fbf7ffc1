from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field

from src.service.event_lifecycle.domain.entity.event_record_entity import EventRecord


class EventSubmitRequest(BaseModel):
    organizer_id: str
    title: str
    scheduled_at: datetime
    readable_id: str = ''
    event_type: str = ''

    class Config:
        json_schema_extra = {
            'example': {
                'organizer_id': 'org-1',
                'title': 'Campus Hackathon',
                'scheduled_at': '2026-11-20T09:00:00+05:30',
                'readable_id': 'EVT-1042',
                'event_type': 'open',
            }
        }


class EventStatusTransitionRequest(BaseModel):
    status: str = Field(description='Requested EventStatus, e.g. "Published"')
    role: str = Field(description='Comma-separated caller roles, e.g. "organizer,admin"')

    class Config:
        json_schema_extra = {'example': {'status': 'UnderReview', 'role': 'organizer'}}


class EventStatusTransitionResponse(BaseModel):
    event_id: str
    status: str
    previous_status: str
    transitioned_at: str

    class Config:
        json_schema_extra = {
            'example': {
                'event_id': '0192f1d2-7c1e-7b3a-9c55-2b1f5e0a9d11',
                'status': 'UnderReview',
                'previous_status': 'AwaitingApproval',
                'transitioned_at': '2026-10-19T08:30:00.000000+00:00',
            }
        }


class EventRecordResponse(BaseModel):
    event_id: str
    organizer_id: str
    title: str
    scheduled_at: str
    readable_id: str
    event_type: str
    status: str
    status_timestamps: Dict[str, str]
    created_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: EventRecord) -> 'EventRecordResponse':
        return cls(
            event_id=record.event_id,
            organizer_id=record.organizer_id,
            title=record.title,
            scheduled_at=record.scheduled_at,
            readable_id=record.readable_id,
            event_type=record.event_type,
            status=record.status.value,
            status_timestamps={
                status.value: entered_at for status, entered_at in record.status_timestamps.items()
            },
            created_at=record.created_at,
        )


class FanOutAcceptedResponse(BaseModel):
    event_id: str
    organizer_id: str
    occurred_at: datetime
