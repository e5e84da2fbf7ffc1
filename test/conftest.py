"""
Test Configuration

- Test log directory and Kvrocks key prefix are set before any application
  module is imported (settings and logging read them at import time)
- Unit tests (test/**/*_unit_test.py): run against mocks and the in-memory
  record store from test/service/event_lifecycle/conftest.py
- Integration tests (test/**/integration): need a running Kvrocks, keys are
  isolated by the prefix above
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['KVROCKS_KEY_PREFIX'] = 'test_'
    else:
        os.environ['KVROCKS_KEY_PREFIX'] = f'test_{worker_id}_'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Unit tests never reach a broker
    os.environ.setdefault('ENABLE_KAFKA', 'false')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import pytest  # noqa: E402


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    # Files named *_unit_test.py are unit tests even without the explicit marker
    for item in items:
        if item.path.name.endswith('_unit_test.py'):
            item.add_marker(pytest.mark.unit)
