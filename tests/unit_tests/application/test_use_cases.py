"""Unit tests for identify/convert use-cases."""

from __future__ import annotations

from pathlib import Path

import pytest

from magick_exec.application.options import OutputOptions
from magick_exec.application.results import ProcessStatus
from magick_exec.application.use_cases import (
    apply_output_options,
    convert_image,
    identify_image,
    verify_installation,
)
from magick_exec.arguments import ArgumentSet
from magick_exec.errors import ConfigurationError, ExecutionError, OutputParseError, SpawnError
from magick_exec.identify import IDENTIFY_FORMAT
from magick_exec.schemas import MagickSettings


def test_identify_parses_output(fake_runner, make_manager) -> None:
    """Ensure identify output is parsed and the caller's tokens are reset."""
    fake_runner.stdout = "format:PNG|width:40|height:20|exif_orientation:1\n"
    arguments = ArgumentSet(tokens=["-ping"], source_path="/tmp/a.png")

    info = identify_image(make_manager(), arguments)

    assert (info.format, info.width, info.height) == ("png", 40, 20)
    assert info.exif_orientation == 1
    assert info.frames_count == 1
    assert info.source_path == "/tmp/a.png"
    assert arguments.count() == 0
    assert fake_runner.last_command == (
        f"'identify' -ping -format '{IDENTIFY_FORMAT}' '/tmp/a.png'"
    )


def test_identify_frame_selector(fake_runner, make_manager) -> None:
    """Ensure frame selectors reach identify attached to the source."""
    fake_runner.stdout = "format:GIF|width:10|height:10|exif_orientation:\n"

    identify_image(make_manager(), ArgumentSet(source_path="/tmp/a.gif", source_frames="[0]"))

    assert fake_runner.last_command.endswith(" '/tmp/a.gif[0]'")


def test_identify_requires_source(make_manager) -> None:
    """Ensure identify without a source is a configuration error."""
    with pytest.raises(ConfigurationError):
        identify_image(make_manager(), ArgumentSet())


def test_identify_tool_failure(fake_runner, make_manager) -> None:
    """Ensure a failing identify raises ExecutionError."""
    fake_runner.exit_code = 1
    fake_runner.stderr = "identify: unable to open image"

    with pytest.raises(ExecutionError, match="unable to open image"):
        identify_image(make_manager(), ArgumentSet(source_path="/tmp/missing.png"))


def test_identify_unparseable_output(fake_runner, make_manager) -> None:
    """Ensure garbage output raises OutputParseError."""
    fake_runner.stdout = "not an identify record"

    with pytest.raises(OutputParseError):
        identify_image(make_manager(), ArgumentSet(source_path="/tmp/a.png"))


def test_apply_output_options(make_manager) -> None:
    """Ensure profile wins over colorspace and density sets units."""
    arguments = apply_output_options(
        make_manager(),
        ArgumentSet(),
        OutputOptions(quality=80, density=72, colorspace="sRGB", profile="/icc/sRGB.icc"),
    )

    assert arguments.tokens == [
        "-profile '/icc/sRGB.icc'",
        "-density 72 -units PixelsPerInch",
        "-quality 80",
    ]


def test_apply_output_options_colorspace(make_manager) -> None:
    """Ensure colorspace is used when no profile is configured."""
    arguments = apply_output_options(make_manager(), ArgumentSet(), OutputOptions(colorspace="GRAY"))

    assert arguments.tokens == ["-colorspace GRAY"]


def test_convert_writes_destination(fake_runner, make_manager, tmp_path: Path) -> None:
    """Ensure convert builds the ImageMagick command and checks the output file."""
    destination = tmp_path / "out.jpg"
    destination.write_bytes(b"jpeg")
    arguments = ArgumentSet(tokens=["-resize 50%"], source_path="/tmp/a.png")

    result = convert_image(
        make_manager(quality=90),
        arguments,
        destination_path=destination,
        destination_format="JPEG",
    )

    assert result.succeeded
    assert fake_runner.last_command == (
        f"'convert' '/tmp/a.png' -resize 50% -quality 90 jpeg:'{destination}'"
    )
    assert arguments.tokens == ["-resize 50%"]


def test_convert_with_graphicsmagick(fake_runner, make_manager, tmp_path: Path) -> None:
    """Ensure the GraphicsMagick package converts through gm."""
    destination = tmp_path / "out.png"
    destination.write_bytes(b"png")

    convert_image(
        make_manager(binaries="graphicsmagick"),
        ArgumentSet(source_path="/tmp/a.png"),
        destination_path=destination,
        options=OutputOptions(),
    )

    assert fake_runner.last_command == f"'gm' convert '/tmp/a.png' '{destination}'"


def test_convert_relative_destination(fake_runner, make_manager, tmp_path: Path) -> None:
    """Ensure relative destinations are checked against the working directory."""
    (tmp_path / "out.png").write_bytes(b"png")

    result = convert_image(
        make_manager(working_directory=tmp_path),
        ArgumentSet(source_path="in.png"),
        destination_path=Path("out.png"),
    )

    assert result.succeeded


def test_convert_missing_output(fake_runner, make_manager, tmp_path: Path) -> None:
    """Ensure a zero exit without an output file is still a failure."""
    with pytest.raises(ExecutionError, match="was not written") as excinfo:
        convert_image(
            make_manager(),
            ArgumentSet(source_path="/tmp/a.png"),
            destination_path=tmp_path / "never.png",
        )
    assert excinfo.value.return_code == 0


def test_convert_invalid_format(fake_runner, make_manager, tmp_path: Path) -> None:
    """Ensure unsupported formats fail before anything runs."""
    with pytest.raises(ConfigurationError, match="Invalid convert parameters"):
        convert_image(
            make_manager(),
            ArgumentSet(source_path="/tmp/a.png"),
            destination_path=tmp_path / "out.bmp",
            destination_format="bmp",
        )
    assert fake_runner.calls == []


def test_convert_requires_source(make_manager, tmp_path: Path) -> None:
    """Ensure convert without a source is a configuration error."""
    with pytest.raises(ConfigurationError):
        convert_image(make_manager(), ArgumentSet(), destination_path=tmp_path / "out.png")


def test_convert_spawn_failure(fake_runner, make_manager, tmp_path: Path) -> None:
    """Ensure spawn failures surface as SpawnError."""
    fake_runner.status = ProcessStatus.SPAWN_FAILED
    fake_runner.reason = "not found"

    with pytest.raises(SpawnError):
        convert_image(
            make_manager(),
            ArgumentSet(source_path="/tmp/a.png"),
            destination_path=tmp_path / "out.png",
        )


def test_verify_installation_reports_missing_binaries(tmp_path: Path) -> None:
    """Ensure a missing binaries directory is reported without spawning."""
    status = verify_installation(MagickSettings(path_to_binaries=str(tmp_path / "none")))

    assert not status.ok
    assert "does not exist" in status.errors[0]


def test_identify_disabled_by_settings(fake_runner, make_manager) -> None:
    """Ensure identify refuses to run when use_identify is off."""
    with pytest.raises(ConfigurationError, match="use_identify"):
        identify_image(make_manager(use_identify=False), ArgumentSet(source_path="/tmp/a.png"))
    assert fake_runner.calls == []
