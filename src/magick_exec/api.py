"""Public file-based API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from magick_exec.application.results import IdentifyResult, PathCheckResult
from magick_exec.application.use_cases import convert_image, identify_image
from magick_exec.arguments import ArgumentSet
from magick_exec.exec_manager import ExecManager
from magick_exec.schemas import MagickSettings


def identify_file(
    source_path: Path,
    settings: Optional[MagickSettings] = None,
    frames: Optional[str] = None,
) -> IdentifyResult:
    """Identify an image file with ``identify``."""
    manager = ExecManager(settings)
    arguments = ArgumentSet(source_path=str(source_path), source_frames=frames)
    return identify_image(manager, arguments)


def convert_file(
    source_path: Path,
    destination_path: Path,
    tokens: Optional[list[str]] = None,
    destination_format: str = "",
    settings: Optional[MagickSettings] = None,
    frames: Optional[str] = None,
) -> Path:
    """Convert an image file, applying ``tokens`` between source and destination."""
    manager = ExecManager(settings)
    arguments = ArgumentSet(
        tokens=list(tokens or []),
        source_path=str(source_path),
        source_frames=frames,
    )
    convert_image(
        manager,
        arguments,
        destination_path=destination_path,
        destination_format=destination_format,
    )
    return destination_path


def check_path(
    path: str,
    settings: Optional[MagickSettings] = None,
    package: Optional[str] = None,
) -> PathCheckResult:
    """Verify that ``path`` holds a working ImageMagick/GraphicsMagick install."""
    return ExecManager(settings).check_path(path, package)
