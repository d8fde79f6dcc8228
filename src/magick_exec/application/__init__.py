"""Application-layer use-cases, option and result objects."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from magick_exec.application.options import OutputOptions
from magick_exec.application.results import (
    ExecutionResult,
    FrameInfo,
    IdentifyResult,
    PathCheckResult,
    ProcessOutcome,
    ProcessStatus,
)

if TYPE_CHECKING:
    from magick_exec.arguments import ArgumentSet
    from magick_exec.exec_manager import ExecManager


def identify_image(manager: ExecManager, arguments: ArgumentSet) -> IdentifyResult:
    """Identify source image via lazy use-case import."""
    from magick_exec.application.use_cases import identify_image as _impl

    return _impl(manager, arguments)


def convert_image(
    manager: ExecManager,
    arguments: ArgumentSet,
    *,
    destination_path: Path,
    destination_format: str = "",
    options: OutputOptions | None = None,
) -> ExecutionResult:
    """Convert source image via lazy use-case import."""
    from magick_exec.application.use_cases import convert_image as _impl

    return _impl(
        manager,
        arguments,
        destination_path=destination_path,
        destination_format=destination_format,
        options=options,
    )


__all__ = [
    "OutputOptions",
    "ExecutionResult",
    "FrameInfo",
    "IdentifyResult",
    "PathCheckResult",
    "ProcessOutcome",
    "ProcessStatus",
    "identify_image",
    "convert_image",
]
