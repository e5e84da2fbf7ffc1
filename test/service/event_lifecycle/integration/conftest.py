"""
Kvrocks fixtures for event lifecycle integration tests.

Each test gets its own async client (pytest-asyncio opens a new loop per
test function) plus a sync client for assertions. Keys under
KVROCKS_KEY_PREFIX are wiped before and after every test.
"""

import os
from typing import AsyncGenerator, Generator

from redis import Redis as SyncRedis
from redis.asyncio import ConnectionPool as AsyncConnectionPool, Redis as AsyncRedis
from redis.exceptions import ConnectionError as RedisConnectionError
import pytest
import pytest_asyncio

from src.platform.config.core_setting import settings
from src.service.event_lifecycle.driven_adapter.state.event_record_store_impl import (
    EventRecordStoreImpl,
)


def _kvrocks_url() -> str:
    return f'redis://{settings.KVROCKS_HOST}:{settings.KVROCKS_PORT}/{settings.KVROCKS_DB}'


def _key_prefix() -> str:
    return os.getenv('KVROCKS_KEY_PREFIX', 'test_')


@pytest_asyncio.fixture
async def kvrocks_client_for_test() -> AsyncGenerator[AsyncRedis, None]:
    pool = AsyncConnectionPool.from_url(
        _kvrocks_url(),
        password=settings.KVROCKS_PASSWORD if settings.KVROCKS_PASSWORD else None,
        decode_responses=settings.REDIS_DECODE_RESPONSES,
        max_connections=settings.KVROCKS_POOL_MAX_CONNECTIONS,
        socket_timeout=settings.KVROCKS_POOL_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT,
    )
    client = AsyncRedis.from_pool(pool)
    try:
        await client.ping()
    except RedisConnectionError as e:
        await client.aclose()
        pytest.skip(f'Kvrocks not reachable at {_kvrocks_url()}: {e}')

    keys = await client.keys(f'{_key_prefix()}*')
    if keys:
        await client.delete(*keys)

    yield client

    keys_after = await client.keys(f'{_key_prefix()}*')
    if keys_after:
        await client.delete(*keys_after)
    await client.aclose()


@pytest.fixture
def kvrocks_client_sync_for_test(kvrocks_client_for_test) -> Generator[SyncRedis, None, None]:
    client = SyncRedis.from_url(
        _kvrocks_url(),
        password=settings.KVROCKS_PASSWORD if settings.KVROCKS_PASSWORD else None,
        decode_responses=settings.REDIS_DECODE_RESPONSES,
    )
    yield client
    client.close()


@pytest.fixture
def kvrocks_record_store(kvrocks_client_for_test) -> EventRecordStoreImpl:
    return EventRecordStoreImpl(client_factory=lambda: kvrocks_client_for_test)
