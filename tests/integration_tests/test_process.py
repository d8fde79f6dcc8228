"""Integration tests for the subprocess runner."""

from __future__ import annotations

import shlex
import sys
from pathlib import Path

from magick_exec.application.results import ProcessStatus
from magick_exec.infrastructure.process import SubprocessRunner

PYTHON = shlex.quote(sys.executable)


def _python(code: str) -> str:
    return f"{PYTHON} -c {shlex.quote(code)}"


def test_captures_exit_code_and_streams(tmp_path: Path) -> None:
    """Ensure stdout, stderr and the exit status are reported separately."""
    outcome = SubprocessRunner().run("echo out; echo err >&2; exit 3", tmp_path)

    assert outcome.status is ProcessStatus.COMPLETED
    assert outcome.exit_code == 3
    assert outcome.stdout == "out\n"
    assert outcome.stderr == "err\n"


def test_large_output_on_both_streams_does_not_deadlock(tmp_path: Path) -> None:
    """Ensure a child filling both pipes beyond their buffers completes."""
    code = (
        "import sys\n"
        "for _ in range(2000):\n"
        "    sys.stdout.write('o' * 100 + '\\n')\n"
        "    sys.stderr.write('e' * 100 + '\\n')\n"
    )

    outcome = SubprocessRunner().run(_python(code), tmp_path, timeout=60)

    assert outcome.exit_code == 0
    assert len(outcome.stdout) == 2000 * 101
    assert len(outcome.stderr) == 2000 * 101


def test_runs_in_working_directory(tmp_path: Path) -> None:
    """Ensure the child starts in the requested directory."""
    outcome = SubprocessRunner().run("pwd", tmp_path)

    assert Path(outcome.stdout.strip()).resolve() == tmp_path.resolve()


def test_missing_working_directory_is_spawn_failure(tmp_path: Path) -> None:
    """Ensure an unusable working directory fails to spawn."""
    outcome = SubprocessRunner().run("echo hi", tmp_path / "missing")

    assert outcome.status is ProcessStatus.SPAWN_FAILED
    assert outcome.exit_code is None
    assert outcome.reason


def test_missing_command_is_spawn_failure(tmp_path: Path) -> None:
    """Ensure a command the shell cannot find is reported as a spawn failure."""
    outcome = SubprocessRunner().run("definitely-not-a-magick-binary -version", tmp_path)

    assert outcome.status is ProcessStatus.SPAWN_FAILED
    assert outcome.exit_code is None


def test_timeout_kills_child(tmp_path: Path) -> None:
    """Ensure a hung child is killed and reported as timed out."""
    outcome = SubprocessRunner().run(_python("import time; time.sleep(30)"), tmp_path, timeout=0.5)

    assert outcome.status is ProcessStatus.TIMED_OUT
    assert outcome.exit_code is None
    assert "0.5" in outcome.reason


def test_invalid_utf8_is_replaced(tmp_path: Path) -> None:
    """Ensure undecodable output does not raise."""
    outcome = SubprocessRunner().run("printf '\\377ok'", tmp_path)

    assert outcome.stdout == "\ufffdok"
