"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.service.event_lifecycle.driven_adapter.message_queue.event_fan_out_publisher_impl import (
    EventFanOutPublisherImpl,
)
from src.service.event_lifecycle.driven_adapter.state.event_record_store_impl import (
    EventRecordStoreImpl,
)


class Container(containers.DeclarativeContainer):
    # Record store (Kvrocks; client resolved per call from the shared pool)
    event_record_store = providers.Singleton(EventRecordStoreImpl)

    # Message Queue Publishers
    event_fan_out_publisher = providers.Singleton(EventFanOutPublisherImpl)


container = Container()


def cleanup() -> None:
    """Drop adapter singletons so the next startup builds them against fresh clients."""
    container.reset_singletons()
