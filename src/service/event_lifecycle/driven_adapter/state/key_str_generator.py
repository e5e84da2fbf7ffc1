"""
Key String Generator

Kvrocks keys for event records.
"""

import os


def _get_key_prefix() -> str:
    # Read per call: pytest sets KVROCKS_KEY_PREFIX after some modules are imported
    return os.getenv('KVROCKS_KEY_PREFIX', '')


def _make_key(key: str) -> str:
    return f'{_get_key_prefix()}{key}'


def make_event_record_key(*, event_id: str) -> str:
    return _make_key(f'event_record:{event_id}')
