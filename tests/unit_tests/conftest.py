"""Fixtures replacing the process runner with an in-memory fake."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from magick_exec.application.results import ProcessOutcome, ProcessStatus
from magick_exec.exec_manager import ExecManager
from magick_exec.schemas import MagickSettings


@dataclass
class FakeRunner:
    """Record command lines and return a canned outcome."""

    status: ProcessStatus = ProcessStatus.COMPLETED
    exit_code: int | None = 0
    stdout: str = ""
    stderr: str = ""
    reason: str = ""
    calls: list[tuple[str, Path | None, float | None]] = field(default_factory=list)

    def run(
        self,
        command_line: str,
        working_directory: Path | None,
        timeout: float | None = None,
    ) -> ProcessOutcome:
        self.calls.append((command_line, working_directory, timeout))
        return ProcessOutcome(
            status=self.status,
            command_line=command_line,
            exit_code=self.exit_code if self.status is ProcessStatus.COMPLETED else None,
            stdout=self.stdout,
            stderr=self.stderr,
            reason=self.reason,
        )

    @property
    def last_command(self) -> str:
        return self.calls[-1][0]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_manager(fake_runner: FakeRunner):
    """Build a POSIX ExecManager around ``fake_runner``."""

    def _make(**settings: object) -> ExecManager:
        return ExecManager(
            MagickSettings(**settings),
            runner=fake_runner,
            is_windows=False,
        )

    return _make
