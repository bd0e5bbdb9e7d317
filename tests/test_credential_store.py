"""Tests for credential store implementations and factory."""

from __future__ import annotations

from unittest.mock import AsyncMock

import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnError

from blog_api_client.credential_store import (
    _CREDENTIAL_PREFIX,
    CredentialStore,
    MemoryCredentialStore,
    RedisCredentialStore,
    create_credential_store,
)
from tests.conftest import REDIS_URL, TOKEN


@pytest.fixture()
def fake_redis() -> fakeredis.FakeAsyncRedis:
    """Isolated fake Redis client per test."""
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer())


# -- Protocol conformance --


def test_memory_store_implements_protocol() -> None:
    assert isinstance(MemoryCredentialStore(), CredentialStore)


def test_redis_store_implements_protocol(fake_redis: fakeredis.FakeAsyncRedis) -> None:
    assert isinstance(RedisCredentialStore(fake_redis), CredentialStore)


# -- MemoryCredentialStore --


async def test_memory_set_get_remove() -> None:
    store = MemoryCredentialStore()
    assert await store.get("token") is None

    await store.set("token", TOKEN)
    assert await store.get("token") == TOKEN

    await store.remove("token")
    assert await store.get("token") is None


async def test_memory_last_writer_wins() -> None:
    store = MemoryCredentialStore()
    await store.set("token", "first")
    await store.set("token", "second")
    assert await store.get("token") == "second"


async def test_memory_remove_missing_key_is_noop() -> None:
    store = MemoryCredentialStore()
    await store.remove("token")
    assert await store.get("token") is None


async def test_memory_aclose_clears() -> None:
    store = MemoryCredentialStore()
    await store.set("token", TOKEN)
    await store.aclose()
    assert await store.get("token") is None


# -- RedisCredentialStore --


async def test_redis_set_get_remove(fake_redis: fakeredis.FakeAsyncRedis) -> None:
    store = RedisCredentialStore(fake_redis)

    await store.set("token", TOKEN)
    assert await store.get("token") == TOKEN
    assert await fake_redis.get(f"{_CREDENTIAL_PREFIX}token") == TOKEN.encode()

    await store.remove("token")
    assert await store.get("token") is None
    assert not await fake_redis.exists(f"{_CREDENTIAL_PREFIX}token")


async def test_redis_stores_share_state(fake_redis: fakeredis.FakeAsyncRedis) -> None:
    writer = RedisCredentialStore(fake_redis)
    reader = RedisCredentialStore(fake_redis)

    await writer.set("token", TOKEN)

    assert await reader.get("token") == TOKEN


async def test_redis_connection_error_propagates() -> None:
    """An unreachable Redis must not look like an empty store."""
    mock_client = AsyncMock()
    mock_client.get.side_effect = RedisConnError("Connection refused")
    store = RedisCredentialStore(mock_client)

    with pytest.raises(RedisConnError):
        await store.get("token")


# -- Factory --


def test_factory_defaults_to_memory() -> None:
    assert isinstance(create_credential_store("memory"), MemoryCredentialStore)


def test_factory_redis_requires_url() -> None:
    with pytest.raises(ValueError, match="redis_url is required"):
        create_credential_store("redis")


async def test_factory_builds_redis_store() -> None:
    store = create_credential_store("redis", REDIS_URL)
    assert isinstance(store, RedisCredentialStore)
    await store.aclose()
