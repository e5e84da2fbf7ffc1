from src.service.event_lifecycle.app.interface.i_event_fan_out_publisher import (
    IEventFanOutPublisher,
)
from src.service.event_lifecycle.app.interface.i_event_record_store import IEventRecordStore


__all__ = ['IEventFanOutPublisher', 'IEventRecordStore']
