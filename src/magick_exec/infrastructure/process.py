"""Subprocess adapter running command lines through the host shell."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from pathlib import Path

from magick_exec.application.results import ProcessOutcome, ProcessStatus

logger = logging.getLogger(__name__)

# Exit statuses a POSIX shell uses when it cannot run the command itself.
SHELL_NOT_EXECUTABLE = 126
SHELL_NOT_FOUND = 127


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


class SubprocessRunner:
    """Default :class:`~magick_exec.application.ports.ProcessRunner`.

    stdin is closed right away; stdout and stderr are drained concurrently
    by ``communicate()`` so a child filling one pipe cannot deadlock while
    the other is being read. On POSIX the shell leads its own process group
    so a timeout kills the tool along with the shell.
    """

    def __init__(self, *, posix: bool | None = None) -> None:
        self._posix = os.name != "nt" if posix is None else posix

    def _kill(self, process: subprocess.Popen[bytes]) -> None:
        """Kill the shell and everything it started."""
        if not self._posix:
            process.kill()
            return
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            # Already exited.
            pass

    def run(
        self,
        command_line: str,
        working_directory: Path | None,
        timeout: float | None = None,
    ) -> ProcessOutcome:
        """Run ``command_line`` and capture its output.

        Parameters
        ----------
        command_line : str
            Fully escaped command line, executable included.
        working_directory : Path | None
            Directory the process starts in; ``None`` keeps the current one.
        timeout : float | None, default=None
            Seconds before the process is killed.

        Returns
        -------
        ProcessOutcome
            ``COMPLETED`` with exit code and output, ``SPAWN_FAILED`` when the
            process could not be started, or ``TIMED_OUT``.
        """
        try:
            process = subprocess.Popen(
                command_line,
                shell=True,
                cwd=working_directory,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=self._posix,
            )
        except OSError as exc:
            logger.debug("failed to spawn %r: %s", command_line, exc)
            return ProcessOutcome(
                status=ProcessStatus.SPAWN_FAILED,
                command_line=command_line,
                reason=str(exc),
            )

        try:
            stdout, stderr = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            self._kill(process)
            stdout, stderr = process.communicate()
            return ProcessOutcome(
                status=ProcessStatus.TIMED_OUT,
                command_line=command_line,
                stdout=_decode(stdout),
                stderr=_decode(stderr),
                reason=f"no exit after {timeout} seconds",
            )

        outcome_stderr = _decode(stderr)
        if self._posix and process.returncode in (SHELL_NOT_EXECUTABLE, SHELL_NOT_FOUND):
            return ProcessOutcome(
                status=ProcessStatus.SPAWN_FAILED,
                command_line=command_line,
                stdout=_decode(stdout),
                stderr=outcome_stderr,
                reason=outcome_stderr.strip() or f"shell exit status {process.returncode}",
            )
        return ProcessOutcome(
            status=ProcessStatus.COMPLETED,
            command_line=command_line,
            exit_code=process.returncode,
            stdout=_decode(stdout),
            stderr=outcome_stderr,
        )
