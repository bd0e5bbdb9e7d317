"""Storage for the bearer credential — Protocol + Memory + Redis implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from redis.asyncio import Redis

TOKEN_KEY = "token"
_CREDENTIAL_PREFIX = "credential:"


@runtime_checkable
class CredentialStore(Protocol):
    """Key/value persistence for credentials."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def aclose(self) -> None: ...


class MemoryCredentialStore:
    """In-process credential store. Last writer wins."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def aclose(self) -> None:
        self._data.clear()


class RedisCredentialStore:
    """Redis-backed credential store, shared between processes.

    Connection errors propagate: a caller must never mistake an unreachable
    store for an empty one.
    """

    def __init__(self, client: Redis) -> None:
        self._client: Redis = client

    def _key(self, key: str) -> str:
        return f"{_CREDENTIAL_PREFIX}{key}"

    async def get(self, key: str) -> str | None:
        val = await self._client.get(self._key(key))
        if val is None:
            return None
        return val.decode() if isinstance(val, bytes) else str(val)

    async def set(self, key: str, value: str) -> None:
        await self._client.set(self._key(key), value)

    async def remove(self, key: str) -> None:
        await self._client.delete(self._key(key))

    async def aclose(self) -> None:
        await self._client.aclose()


def create_credential_store(backend: str, redis_url: str | None = None) -> CredentialStore:
    """Factory: create a CredentialStore for the given backend."""
    if backend == "redis":
        import redis.asyncio as aioredis

        if not redis_url:
            msg = "redis_url is required when backend='redis'"
            raise ValueError(msg)
        return RedisCredentialStore(aioredis.from_url(redis_url))
    return MemoryCredentialStore()
