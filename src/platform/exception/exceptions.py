class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    retriable: bool = False

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidInputError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class InvalidTransitionError(DomainError):
    def __init__(self, *, current_status: str, requested_status: str) -> None:
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f'Invalid status transition: Cannot change from {current_status} to {requested_status}',
            409,
        )


class EventNotPublishedError(DomainError):
    def __init__(self, *, event_id: str, current_status: str) -> None:
        self.event_id = event_id
        self.current_status = current_status
        super().__init__(
            f'Event {event_id} is not Published (current status: {current_status})', 409
        )


class ConcurrentModificationError(CustomBaseError):
    retriable = True

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class DataIntegrityError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class StoreUnavailableError(CustomBaseError):
    retriable = True

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class EventPublishError(CustomBaseError):
    """Fan-out failed after the status write was committed (partial success)."""

    retriable = True

    def __init__(self, message: str, *, event_id: str = '', status: str = '') -> None:
        self.event_id = event_id
        self.status = status
        super().__init__(message, 502)
