"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from magick_exec.errors import ExecutionError, ProcessTimeoutError, SpawnError

NO_ERROR_MESSAGE = "(no error message)"


class ProcessStatus(str, Enum):
    """How a child process ended."""

    COMPLETED = "completed"
    SPAWN_FAILED = "spawn_failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class ProcessOutcome:
    """Raw outcome of running one command line."""

    status: ProcessStatus
    command_line: str
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    reason: str = ""


@dataclass(frozen=True)
class ExecutionResult:
    """Classified outcome of a tool invocation.

    ``exit_code`` is ``None`` unless the process ran to completion.
    """

    tool: str
    label: str
    status: ProcessStatus
    command_line: str
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    reason: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is ProcessStatus.COMPLETED and self.exit_code == 0

    def __bool__(self) -> bool:
        return self.succeeded

    @property
    def error_message(self) -> str:
        """Human-readable diagnostic, empty on success."""
        if self.status is ProcessStatus.SPAWN_FAILED:
            return f"{self.label} could not be started: {self.reason or 'unknown reason'}"
        if self.status is ProcessStatus.TIMED_OUT:
            return f"{self.label} timed out: {self.reason}"
        if self.exit_code:
            return f"{self.label} error {self.exit_code}: {self.stderr.strip() or NO_ERROR_MESSAGE}"
        return ""

    def raise_for_status(self) -> ExecutionResult:
        """Raise the matching error unless the invocation succeeded."""
        if self.status is ProcessStatus.SPAWN_FAILED:
            raise SpawnError(self.error_message)
        if self.status is ProcessStatus.TIMED_OUT:
            raise ProcessTimeoutError(self.error_message)
        if self.exit_code:
            raise ExecutionError(
                self.error_message, return_code=self.exit_code, stderr=self.stderr
            )
        return self


@dataclass(frozen=True)
class PathCheckResult:
    """Outcome of verifying a binaries directory."""

    output: str = ""
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class FrameInfo:
    """Properties of one image frame reported by ``identify``."""

    format: str
    width: int
    height: int
    exif_orientation: int | None = None


@dataclass(frozen=True)
class IdentifyResult:
    """Parsed ``identify`` output for one file."""

    source_path: str
    frames: list[FrameInfo]

    @property
    def frames_count(self) -> int:
        return len(self.frames)

    @property
    def format(self) -> str:
        return self.frames[0].format

    @property
    def width(self) -> int:
        return self.frames[0].width

    @property
    def height(self) -> int:
        return self.frames[0].height

    @property
    def exif_orientation(self) -> int | None:
        return self.frames[0].exif_orientation
