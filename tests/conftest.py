"""Shared test constants, fixtures, and factory functions."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from blog_api_client.api_client import BlogApiClient
from blog_api_client.config import Settings
from blog_api_client.credential_store import MemoryCredentialStore
from blog_api_client.navigation import LoggingNavigator

# -- Constants --

BASE_URL = "https://blog.example.com/api/v1"
TOKEN = "test-token"
REDIS_URL = "redis://localhost:6379/0"

CATEGORY_PAYLOAD: dict[str, Any] = {"id": "c1", "name": "Python", "postCount": 2}
TAG_PAYLOAD: dict[str, Any] = {"id": "t1", "name": "asyncio", "postCount": 1}

POST_PAYLOAD: dict[str, Any] = {
    "id": "p1",
    "title": "Structured concurrency",
    "content": "TaskGroups all the way down.",
    "author": {"id": "u1", "name": "Jane Doe"},
    "category": CATEGORY_PAYLOAD,
    "tags": [TAG_PAYLOAD, {"id": "t2", "name": "python"}],
    "readingTime": 4,
    "createdAt": "2024-05-01T10:00:00",
    "updatedAt": "2024-05-02T12:30:00",
    "status": "PUBLISHED",
}

Handler = Callable[[httpx.Request], httpx.Response]


# -- Factories --


def make_settings(**overrides: Any) -> Settings:
    """Create a Settings instance with test defaults. Override any field."""
    defaults: dict[str, Any] = {"base_url": BASE_URL}
    return Settings(**(defaults | overrides))


class RecordingBackend:
    """Mock transport handler that records requests and replies via ``handler``."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(
    handler: Handler,
    store: MemoryCredentialStore | None = None,
    navigator: LoggingNavigator | None = None,
) -> BlogApiClient:
    """Create a BlogApiClient backed by an in-process mock transport."""
    return BlogApiClient(
        BASE_URL,
        store if store is not None else MemoryCredentialStore(),
        navigator if navigator is not None else LoggingNavigator(),
        transport=httpx.MockTransport(handler),
    )


def json_response(status_code: int, payload: Any) -> Handler:
    """Handler that always answers with ``payload`` as JSON."""
    return lambda request: httpx.Response(status_code, json=payload)


# -- Fixtures --


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def navigator() -> LoggingNavigator:
    return LoggingNavigator()


@pytest.fixture
async def authed_store(store: MemoryCredentialStore) -> MemoryCredentialStore:
    await store.set("token", TOKEN)
    return store
