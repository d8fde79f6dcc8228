"""Top-level API for running ImageMagick and GraphicsMagick."""

from __future__ import annotations

from pathlib import Path

from magick_exec.application.results import (
    ExecutionResult,
    IdentifyResult,
    PathCheckResult,
    ProcessStatus,
)
from magick_exec.arguments import ArgumentSet
from magick_exec.errors import (
    ConfigurationError,
    ExecutionError,
    MagickError,
    OutputParseError,
    ProcessTimeoutError,
    SpawnError,
)
from magick_exec.escaping import EscapeContext, escape_shell_arg
from magick_exec.geometry import BoundingBox, Rasterizer, Rectangle, rotate
from magick_exec.schemas import MagickSettings, load_settings
from magick_exec.types import Package, Tool

__version__ = "0.1.0"


def identify_file(
    source_path: Path,
    settings: MagickSettings | None = None,
    frames: str | None = None,
) -> IdentifyResult:
    """Identify an image file.

    Parameters
    ----------
    source_path : Path
        Local image path.
    settings : MagickSettings | None, default=None
        Binaries location, locale and debug settings.
    frames : str | None, default=None
        Frame selector such as ``"[0]"``.

    Returns
    -------
    IdentifyResult
        Format, dimensions, EXIF orientation and frame count.
    """
    from .api import identify_file as _impl

    return _impl(source_path=source_path, settings=settings, frames=frames)


def convert_file(
    source_path: Path,
    destination_path: Path,
    tokens: list[str] | None = None,
    destination_format: str = "",
    settings: MagickSettings | None = None,
    frames: str | None = None,
) -> Path:
    """Convert an image file.

    Parameters
    ----------
    source_path : Path
        Local input image.
    destination_path : Path
        Where to write the result.
    tokens : list[str] | None, default=None
        Literal arguments such as ``["-resize", "50%"]``.
    destination_format : str, default=""
        Output format written as a ``<format>:`` prefix.
    settings : MagickSettings | None, default=None
        Binaries location and output options.
    frames : str | None, default=None
        Frame selector for multi-frame sources.

    Returns
    -------
    Path
        The destination path.
    """
    from .api import convert_file as _impl

    return _impl(
        source_path=source_path,
        destination_path=destination_path,
        tokens=tokens,
        destination_format=destination_format,
        settings=settings,
        frames=frames,
    )


__all__ = [
    "ArgumentSet",
    "BoundingBox",
    "ConfigurationError",
    "EscapeContext",
    "ExecutionError",
    "ExecutionResult",
    "IdentifyResult",
    "MagickError",
    "MagickSettings",
    "OutputParseError",
    "Package",
    "PathCheckResult",
    "ProcessStatus",
    "ProcessTimeoutError",
    "Rasterizer",
    "Rectangle",
    "SpawnError",
    "Tool",
    "convert_file",
    "escape_shell_arg",
    "identify_file",
    "load_settings",
    "rotate",
]
