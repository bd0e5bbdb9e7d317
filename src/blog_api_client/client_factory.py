"""Composition root: build the API client and hold the process-wide instance."""

from __future__ import annotations

import httpx
import structlog

from blog_api_client.api_client import BlogApiClient
from blog_api_client.config import Settings
from blog_api_client.credential_store import create_credential_store
from blog_api_client.logging_config import configure_logging
from blog_api_client.navigation import LoggingNavigator, Navigator

log = structlog.get_logger()

_client: BlogApiClient | None = None


def create_api_client(
    settings: Settings,
    *,
    navigator: Navigator | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BlogApiClient:
    """Build a client with the credential store selected by ``settings``."""
    store = create_credential_store(settings.credential_backend, settings.redis_url)
    return BlogApiClient(
        settings.base_url,
        store,
        navigator or LoggingNavigator(),
        transport=transport,
        timeout=settings.timeout,
    )


def get_api_client(*, setup_logging: bool = False) -> BlogApiClient:
    """Return the process-wide client, building it from the environment on first use.

    Application code should take the client as a parameter; call this only
    where the application is wired together. Logging is left to the host
    application unless ``setup_logging`` is set, in which case the root logger
    is configured with ``Settings.log_level`` when the client is first built.
    """
    global _client  # noqa: PLW0603
    if _client is None:
        settings = Settings()
        if setup_logging:
            configure_logging(settings.log_level)
        _client = create_api_client(settings)
        log.info(
            "api_client_created",
            base_url=settings.base_url,
            credential_backend=settings.credential_backend,
        )
    return _client


async def reset_api_client() -> None:
    """Close and forget the process-wide client."""
    global _client  # noqa: PLW0603
    if _client is None:
        return
    client, _client = _client, None
    await client.close()
    await client.credential_store.aclose()
