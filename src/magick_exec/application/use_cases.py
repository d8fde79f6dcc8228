"""Application use-cases orchestrating identify and convert workflows."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from magick_exec.application.options import OutputOptions
from magick_exec.application.results import ExecutionResult, IdentifyResult, PathCheckResult
from magick_exec.arguments import ArgumentSet
from magick_exec.errors import ConfigurationError, ExecutionError
from magick_exec.exec_manager import ExecManager
from magick_exec.identify import IDENTIFY_FORMAT, parse_identify_output
from magick_exec.schemas import ConvertRequest, MagickSettings
from magick_exec.types import Tool

logger = logging.getLogger(__name__)


def identify_image(
    manager: ExecManager,
    arguments: ArgumentSet,
) -> IdentifyResult:
    """Use-case: read format, dimensions and frames of ``arguments.source_path``.

    The caller's arguments are reset afterwards so the same set can be
    reused for a following convert.

    Raises
    ------
    ConfigurationError
        If no source path is set or ``settings.use_identify`` is off.
    ExecutionError, SpawnError, ProcessTimeoutError
        If ``identify`` fails.
    OutputParseError
        If the output cannot be parsed.
    """
    if not manager.settings.use_identify:
        raise ConfigurationError("identify is disabled by the use_identify setting.")
    if not arguments.source_path:
        raise ConfigurationError("identify requires a source path.")

    request = arguments.copy()
    request.add("-format " + manager.escape_shell_arg(IDENTIFY_FORMAT))
    result = manager.execute(Tool.IDENTIFY, request).raise_for_status()
    arguments.reset()
    return IdentifyResult(
        source_path=arguments.source_path,
        frames=parse_identify_output(result.stdout),
    )


def apply_output_options(
    manager: ExecManager, arguments: ArgumentSet, options: OutputOptions
) -> ArgumentSet:
    """Append colour profile/colorspace, density and quality arguments.

    A colour profile takes precedence over a colorspace conversion.
    """
    if options.profile:
        arguments.add("-profile " + manager.escape_shell_arg(options.profile))
    elif options.colorspace:
        arguments.add("-colorspace " + options.colorspace)
    if options.density:
        arguments.add(f"-density {options.density} -units PixelsPerInch")
    if options.quality is not None:
        arguments.add(f"-quality {options.quality}")
    return arguments


def convert_image(
    manager: ExecManager,
    arguments: ArgumentSet,
    *,
    destination_path: Path,
    destination_format: str = "",
    options: OutputOptions | None = None,
) -> ExecutionResult:
    """Use-case: write ``arguments.source_path`` to ``destination_path``.

    Uses ``convert`` or ``gm`` according to the configured package, and
    checks that the destination file was actually written.

    Raises
    ------
    ConfigurationError
        If the request does not validate.
    ExecutionError, SpawnError, ProcessTimeoutError
        If the tool fails or writes no output.
    """
    if not arguments.source_path:
        raise ConfigurationError("convert requires a source path.")
    try:
        request = ConvertRequest(
            source_path=Path(arguments.source_path),
            destination_path=destination_path,
            destination_format=destination_format or arguments.destination_format,
            source_frames=arguments.source_frames,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid convert parameters: {exc}") from exc

    options = options or OutputOptions.from_settings(manager.settings)
    prepared = apply_output_options(manager, arguments.copy(), options)
    prepared.destination_path = str(request.destination_path)
    prepared.destination_format = request.destination_format

    tool = manager.convert_tool()
    result = manager.execute(tool, prepared).raise_for_status()
    written = request.destination_path
    if not written.is_absolute():
        written = manager.working_directory / written
    if not written.is_file():
        raise ExecutionError(
            f"{result.label} reported success but {written} was not written.",
            return_code=0,
            stderr=result.stderr,
        )
    logger.debug("converted %s -> %s", request.source_path, written)
    return result


def verify_installation(settings: MagickSettings) -> PathCheckResult:
    """Use-case: check the configured binaries directory."""
    return ExecManager(settings).check_path(settings.path_to_binaries)
