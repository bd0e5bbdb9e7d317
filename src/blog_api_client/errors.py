"""Exceptions raised by the API client and failure-body normalization."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from blog_api_client.models import ApiError


class BlogApiClientError(Exception):
    """Base class for errors raised by this package."""


class ApiRequestError(BlogApiClientError):
    """A request failed. ``error`` holds the normalized failure."""

    def __init__(self, error: ApiError) -> None:
        super().__init__(f"{error.status}: {error.message}")
        self.error = error

    @property
    def status(self) -> int:
        return self.error.status


def normalize_error(response: httpx.Response | None) -> ApiError:
    """Convert a failed response into an ``ApiError``.

    A JSON body that validates as ``ApiError`` is returned as-is. No response,
    a non-JSON body, or a body of any other shape yields ``ApiError.fallback()``.
    The response body must already be read.
    """
    if response is None:
        return ApiError.fallback()
    try:
        payload = response.json()
    except ValueError:
        return ApiError.fallback()
    try:
        return ApiError.model_validate(payload)
    except ValidationError:
        return ApiError.fallback()
