"""Async client for the blog REST API: auth, categories, tags and posts."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx
import structlog
from pydantic import TypeAdapter

from blog_api_client import metrics as app_metrics
from blog_api_client.credential_store import TOKEN_KEY, CredentialStore
from blog_api_client.errors import ApiRequestError, normalize_error
from blog_api_client.models import (
    ApiError,
    AuthResponse,
    Category,
    CreatePostRequest,
    LoginRequest,
    Post,
    Tag,
    UpdatePostRequest,
)
from blog_api_client.navigation import Navigator

log = structlog.get_logger()

LOGIN_ROUTE = "/login"

_categories = TypeAdapter(list[Category])
_tags = TypeAdapter(list[Tag])
_posts = TypeAdapter(list[Post])


class BlogApiClient:
    """Facade over the blog API.

    Every request carries ``Authorization: Bearer <token>`` while the
    credential store holds a token. A 401 response erases the token and
    redirects to the login view. Every failure is raised as
    ``ApiRequestError`` carrying a normalized ``ApiError``.
    """

    def __init__(
        self,
        base_url: str,
        credential_store: CredentialStore,
        navigator: Navigator,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._store = credential_store
        self._navigator = navigator
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            event_hooks={
                "request": [self._attach_credential],
                "response": [self._check_response],
            },
        )

    @property
    def credential_store(self) -> CredentialStore:
        return self._store

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> BlogApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # -- Hooks --

    async def _attach_credential(self, request: httpx.Request) -> None:
        token = await self._store.get(TOKEN_KEY)
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _check_response(self, response: httpx.Response) -> None:
        method = response.request.method
        app_metrics.api_requests_total.add(
            1, {"method": method, "status": response.status_code}
        )
        if not response.is_error:
            return

        if response.status_code == httpx.codes.UNAUTHORIZED:
            app_metrics.auth_redirects_total.add(1)
            await log.awarning("session_unauthorized", path=response.request.url.path)
            # A store failure propagates, but the user still lands on the login view.
            try:
                await self._store.remove(TOKEN_KEY)
            finally:
                self._navigator.redirect(LOGIN_ROUTE)

        await response.aread()
        error = normalize_error(response)
        app_metrics.api_request_errors_total.add(1, {"kind": "http"})
        await log.awarning(
            "api_request_failed",
            method=method,
            path=response.request.url.path,
            status=error.status,
            message=error.message,
        )
        raise ApiRequestError(error)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(method, path, json=json, params=params)
        except httpx.RequestError as exc:
            app_metrics.api_request_errors_total.add(1, {"kind": "transport"})
            await log.awarning("api_transport_error", method=method, path=path, error=str(exc))
            raise ApiRequestError(ApiError.fallback()) from exc

    async def _decode(self, resp: httpx.Response) -> Any:
        """Parse a success body. A body that is not JSON is reported as the fallback error."""
        try:
            return resp.json()
        except ValueError as exc:
            app_metrics.api_request_errors_total.add(1, {"kind": "decode"})
            await log.awarning(
                "api_response_not_json",
                method=resp.request.method,
                path=resp.request.url.path,
                status=resp.status_code,
            )
            raise ApiRequestError(ApiError.fallback()) from exc

    # -- Authentication --

    async def login(self, credentials: LoginRequest) -> AuthResponse:
        """Log in and store the returned token as the active credential."""
        resp = await self._request("POST", "/auth/login", json=credentials.model_dump())
        auth = AuthResponse.model_validate(await self._decode(resp))
        await self._store.set(TOKEN_KEY, auth.token)
        await log.ainfo("login_succeeded", expires_in=auth.expires_in)
        return auth

    async def logout(self) -> None:
        """Forget the active credential. No request is sent."""
        await self._store.remove(TOKEN_KEY)
        await log.ainfo("logged_out")

    async def is_authenticated(self) -> bool:
        return bool(await self._store.get(TOKEN_KEY))

    # -- Categories --

    async def get_categories(self) -> list[Category]:
        resp = await self._request("GET", "/categories")
        return _categories.validate_python(await self._decode(resp))

    async def create_category(self, name: str) -> Category:
        resp = await self._request("POST", "/categories", json={"name": name})
        return Category.model_validate(await self._decode(resp))

    async def update_category(self, category_id: str, name: str) -> Category:
        resp = await self._request(
            "PUT", f"/categories/{category_id}", json={"id": category_id, "name": name}
        )
        return Category.model_validate(await self._decode(resp))

    async def delete_category(self, category_id: str) -> None:
        await self._request("DELETE", f"/categories/{category_id}")

    # -- Tags --

    async def get_tags(self) -> list[Tag]:
        resp = await self._request("GET", "/tags")
        return _tags.validate_python(await self._decode(resp))

    async def create_tags(self, names: list[str]) -> list[Tag]:
        """Create tags in one call. The backend returns every resulting tag."""
        resp = await self._request("POST", "/tags", json={"names": names})
        return _tags.validate_python(await self._decode(resp))

    async def delete_tag(self, tag_id: str) -> None:
        await self._request("DELETE", f"/tags/{tag_id}")

    # -- Posts --

    async def get_posts(
        self, category_id: str | None = None, tag_id: str | None = None
    ) -> list[Post]:
        """List posts, optionally filtered by category and/or tag."""
        params: dict[str, str] = {}
        if category_id is not None:
            params["categoryId"] = category_id
        if tag_id is not None:
            params["tagId"] = tag_id
        resp = await self._request("GET", "/posts", params=params or None)
        return _posts.validate_python(await self._decode(resp))

    async def get_post(self, post_id: str) -> Post:
        resp = await self._request("GET", f"/posts/{post_id}")
        return Post.model_validate(await self._decode(resp))

    async def create_post(self, post: CreatePostRequest) -> Post:
        resp = await self._request(
            "POST", "/posts", json=post.model_dump(mode="json", by_alias=True)
        )
        return Post.model_validate(await self._decode(resp))

    async def update_post(self, post: UpdatePostRequest) -> Post:
        resp = await self._request(
            "PUT", f"/posts/{post.id}", json=post.model_dump(mode="json", by_alias=True)
        )
        return Post.model_validate(await self._decode(resp))

    async def delete_post(self, post_id: str) -> None:
        await self._request("DELETE", f"/posts/{post_id}")
