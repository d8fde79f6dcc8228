"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from magick_exec.application.results import ProcessOutcome
from magick_exec.arguments import ArgumentSet
from magick_exec.types import Tool


class ProcessRunner(Protocol):
    """Run a full command line and capture its streams."""

    def run(
        self,
        command_line: str,
        working_directory: Path | None,
        timeout: float | None = None,
    ) -> ProcessOutcome:
        """Run command and return its outcome; never raises for process failures."""


class DiagnosticSink(Protocol):
    """Channel showing commands and their output to authorized callers."""

    def is_authorized(self) -> bool:
        """Whether the current caller may see command diagnostics."""

    def emit(self, title: str, content: str) -> None:
        """Display one diagnostic entry."""


class ArgumentMiddleware(Protocol):
    """Hook altering arguments before the command line is built."""

    def __call__(self, arguments: ArgumentSet, tool: Tool) -> None:
        """Mutate ``arguments`` in place."""
