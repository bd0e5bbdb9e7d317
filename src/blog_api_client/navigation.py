"""Client-side navigation targets used when the session ends."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

import structlog

log = structlog.get_logger()


@runtime_checkable
class Navigator(Protocol):
    """Something that can send the user to another view."""

    def redirect(self, path: str) -> None: ...


class LoggingNavigator:
    """Records redirects instead of performing them. Used outside a UI."""

    def __init__(self) -> None:
        self.history: list[str] = []

    def redirect(self, path: str) -> None:
        self.history.append(path)
        log.info("navigation_redirect", path=path)


class CallbackNavigator:
    """Forwards redirects to a UI-provided callable."""

    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def redirect(self, path: str) -> None:
        log.info("navigation_redirect", path=path)
        self._callback(path)
