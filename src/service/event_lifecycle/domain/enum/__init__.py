from src.service.event_lifecycle.domain.enum.event_status import EventStatus


__all__ = ['EventStatus']
