import pytest

from src.platform.config.di import cleanup, container
from src.service.event_lifecycle.driven_adapter.state.event_record_store_impl import (
    EventRecordStoreImpl,
)


@pytest.mark.unit
class TestContainerCleanup:
    def test_record_store_is_shared_until_cleanup(self):
        first = container.event_record_store()

        assert isinstance(first, EventRecordStoreImpl)
        assert container.event_record_store() is first

        cleanup()

        assert container.event_record_store() is not first
        cleanup()
