"""Diagnostic sinks for debug output of executed commands."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class LoggingDiagnosticSink:
    """Send diagnostics to the ``logging`` system at DEBUG level.

    Parameters
    ----------
    authorize : Callable[[], bool] | None
        Decides whether the current caller may see diagnostics. Defaults to
        always allowing.
    """

    def __init__(self, authorize: Callable[[], bool] | None = None) -> None:
        self._authorize = authorize

    def is_authorized(self) -> bool:
        return self._authorize() if self._authorize is not None else True

    def emit(self, title: str, content: str) -> None:
        logger.debug("%s: %s", title, content)


class CollectingDiagnosticSink:
    """Keep diagnostics in memory, for CLIs and tests that print them later."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, str]] = []

    def is_authorized(self) -> bool:
        return True

    def emit(self, title: str, content: str) -> None:
        self.entries.append((title, content))
