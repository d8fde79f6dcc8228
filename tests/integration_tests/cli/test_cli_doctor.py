"""Integration tests for CLI commands that run binaries."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from magick_exec.cli import cli as cli_module

runner = CliRunner()


def test_doctor_command_runs_and_prints_python() -> None:
    """Run doctor command and assert baseline diagnostics are present."""
    result = runner.invoke(cli_module.app, ["doctor"])

    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "pydantic:" in result.output
    assert "package: ImageMagick" in result.output


def test_doctor_reports_version(fake_binaries: Path) -> None:
    """Ensure doctor prints the first version line of the binaries."""
    result = runner.invoke(cli_module.app, ["--binaries-path", str(fake_binaries), "doctor"])

    assert result.exit_code == 0, result.output
    assert "version: Version: ImageMagick 7.1.1-fake Q16" in result.output


def test_check_path_with_fake_binaries(fake_binaries: Path) -> None:
    """Ensure check-path prints the version of a working installation."""
    result = runner.invoke(
        cli_module.app, ["check-path", str(fake_binaries), "--package", "graphicsmagick"]
    )

    assert result.exit_code == 0, result.output
    assert "GraphicsMagick 1.3.40-fake" in result.output


def test_convert_with_debug_shows_command(fake_binaries: Path, tmp_path: Path) -> None:
    """Ensure --debug prints the executed command line."""
    source = tmp_path / "in.png"
    source.write_bytes(b"png")
    destination = tmp_path / "out.jpg"

    result = runner.invoke(
        cli_module.app,
        [
            "--debug",
            "--binaries-path",
            str(fake_binaries),
            "convert",
            str(source),
            str(destination),
            "--format",
            "jpeg",
            "--arg",
            "-resize 50%",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "ImageMagick command" in result.output
    assert destination.is_file()


def test_identify_with_fake_binaries(fake_binaries: Path, tmp_path: Path) -> None:
    """Ensure identify prints the parsed frame count."""
    source = tmp_path / "anim.gif"
    source.write_bytes(b"gif")

    result = runner.invoke(
        cli_module.app, ["--binaries-path", str(fake_binaries), "identify", str(source)]
    )

    assert result.exit_code == 0, result.output
    assert "frames: 2" in result.output
