#!/usr/bin/env python3
"""Examples for identifying, converting and sizing images with ImageMagick."""

from __future__ import annotations

import sys
from pathlib import Path

from magick_exec import (
    ArgumentSet,
    MagickSettings,
    Rasterizer,
    convert_file,
    identify_file,
    rotate,
)
from magick_exec.exec_manager import ExecManager


def example_check_installation(settings: MagickSettings) -> None:
    """Verify the configured binaries before doing any work."""
    print("\n" + "=" * 60)
    print("Example 1: Installation check")
    print("=" * 60)

    status = ExecManager(settings).check_path(settings.path_to_binaries)
    if not status.ok:
        raise SystemExit("FAIL: " + "; ".join(status.errors))
    print(status.output.strip().splitlines()[0])


def example_convert(source: Path, settings: MagickSettings) -> Path:
    """Rotate, resize and convert to JPEG, then confirm the predicted size."""
    print("\n" + "=" * 60)
    print("Example 2: Rotate and convert")
    print("=" * 60)

    before = identify_file(source, settings=settings, frames="[0]")
    print(f"Source: {before.format} {before.width}x{before.height}")

    destination = source.with_name(source.stem + "-rotated.jpg")
    convert_file(
        source,
        destination,
        tokens=["-background white", "-rotate -10"],
        destination_format="jpeg",
        settings=settings,
        frames="[0]",
    )

    after = identify_file(destination, settings=settings)
    expected = rotate(before.width, before.height, -10, rasterizer=Rasterizer.IMAGEMAGICK)
    print(f"Output: {after.width}x{after.height} (predicted {expected.width}x{expected.height})")
    if (after.width, after.height) != expected:
        raise SystemExit("FAIL: rotated size differs from the prediction.")
    return destination


def example_argument_set() -> None:
    """Show how tokens are collected and inspected before execution."""
    print("\n" + "=" * 60)
    print("Example 3: Argument sets")
    print("=" * 60)

    arguments = ArgumentSet(source_path="in.png").add("-strip").add("-quality 80")
    index = arguments.find("-quality")
    if index is not None:
        arguments.remove(index).add("-quality 60")
    print(list(arguments))


if __name__ == "__main__":
    if len(sys.argv) < 2:
        raise SystemExit("usage: convert_example.py IMAGE [BINARIES_DIR]")
    settings = MagickSettings(path_to_binaries=sys.argv[2] if len(sys.argv) > 2 else "")
    example_check_installation(settings)
    example_convert(Path(sys.argv[1]), settings)
    example_argument_set()
