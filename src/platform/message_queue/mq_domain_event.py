from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MqDomainEvent(Protocol):
    @property
    def occurred_at(self) -> datetime:
        """Event occurrence timestamp"""
        ...

    def to_message(self) -> dict[str, Any]:
        """Wire payload, serialized as JSON by the publisher"""
        ...
