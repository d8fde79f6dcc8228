#!/usr/bin/env python3
"""
magick_exec.cli.cli

Typer-based CLI around the ImageMagick/GraphicsMagick execution core.

Examples
--------
Check that ImageMagick is installed in /usr/bin:

    magick-exec check-path /usr/bin

Convert a PNG to JPEG at half size:

    magick-exec convert in.png out.jpg --format jpeg --arg -resize --arg 50%

Predict the size of a 40x20 image rotated by -10 degrees:

    magick-exec rotate-size -- 40 20 -10
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import Any

import typer

from magick_exec.errors import MagickError
from magick_exec.geometry import Rasterizer
from magick_exec.types import Package

app = typer.Typer(
    name="magick-exec",
    help="Run ImageMagick / GraphicsMagick commands with safe escaping.",
    no_args_is_help=True,
)

FRAMES_HELP = "Frame selector appended to the source path, e.g. [0]."


# -----------------------------
# Utilities
# -----------------------------
def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised by a command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _build_settings(
    settings_file: Path | None,
    overrides: dict[str, Any],
) -> Any:
    """Load settings from file (if given) and apply CLI overrides."""
    from magick_exec.schemas import MagickSettings, load_settings

    try:
        base = load_settings(settings_file) if settings_file else MagickSettings()
        payload = base.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return MagickSettings.model_validate(payload)
    except MagickError as exc:
        raise typer.BadParameter(str(exc)) from exc
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid settings: {exc}") from exc


def _manager(ctx: typer.Context) -> Any:
    from magick_exec.exec_manager import ExecManager

    return ExecManager(ctx.obj["settings"], diagnostics=ctx.obj["sink"])


def _flush_diagnostics(ctx: typer.Context) -> None:
    for title, content in ctx.obj["sink"].entries:
        typer.echo(f"[dim]{title}:[/dim] {content}", err=True)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False, "--debug", help="Show commands, their output and full tracebacks."
    ),
    settings_file: Path | None = typer.Option(
        None,
        "--settings",
        exists=True,
        readable=True,
        help="JSON settings file.",
    ),
    binaries_path: str | None = typer.Option(
        None, "--binaries-path", help="Directory holding convert/identify/gm."
    ),
    package: Package | None = typer.Option(
        None, "--package", help="Graphics suite to use."
    ),
    locale_name: str | None = typer.Option(
        None, "--locale", help="LC_CTYPE locale used while escaping arguments."
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug output.
    """
    from magick_exec.infrastructure.diagnostics import CollectingDiagnosticSink

    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    settings = _build_settings(
        settings_file,
        {
            "path_to_binaries": binaries_path,
            "binaries": package,
            "locale": locale_name,
            "debug": True if debug else None,
        },
    )
    ctx.obj = {"debug": debug, "settings": settings, "sink": CollectingDiagnosticSink()}


# -----------------------------
# Commands
# -----------------------------
@app.command("check-path")
def check_path_cmd(
    ctx: typer.Context,
    path: str = typer.Argument("", help="Binaries directory; empty searches PATH."),
    package: Package | None = typer.Option(
        None, "--package", help="Suite to check (defaults to the configured one)."
    ),
) -> None:
    """Verify an ImageMagick/GraphicsMagick installation by querying its version."""
    status = _manager(ctx).check_path(path, package)
    _flush_diagnostics(ctx)
    if status.errors:
        for error in status.errors:
            typer.echo(f"[red]✗[/red] {error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(status.output.rstrip())


@app.command("doctor")
def doctor_cmd(ctx: typer.Context) -> None:
    """Print toolchain versions and the configured binaries status."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("pydantic", "typer"):
        try:
            typer.echo(f"{module}: {metadata.version(module)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    manager = _manager(ctx)
    settings = ctx.obj["settings"]
    typer.echo(f"package: {manager.get_package_label()}")
    typer.echo(f"binaries: {settings.path_to_binaries or '<PATH>'}")
    status = manager.check_path(settings.path_to_binaries)
    if status.errors:
        for error in status.errors:
            typer.echo(f"[yellow]Note:[/yellow] {error}")
    else:
        first_line = status.output.strip().splitlines()[:1]
        typer.echo(f"version: {first_line[0] if first_line else '<unknown>'}")


@app.command("identify")
def identify_cmd(
    ctx: typer.Context,
    source: Path = typer.Argument(..., exists=True, readable=True, help="Image to inspect."),
    frames: str | None = typer.Option(None, "--frames", help=FRAMES_HELP),
) -> None:
    """Print format, dimensions and frame count of an image."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from magick_exec.application.use_cases import identify_image
        from magick_exec.arguments import ArgumentSet

        info = identify_image(
            _manager(ctx), ArgumentSet(source_path=str(source), source_frames=frames)
        )
    except MagickError as exc:
        _flush_diagnostics(ctx)
        raise typer.Exit(code=_print_error(exc, debug))
    _flush_diagnostics(ctx)
    typer.echo(f"format: {info.format}")
    typer.echo(f"width: {info.width}")
    typer.echo(f"height: {info.height}")
    typer.echo(f"exif_orientation: {info.exif_orientation or ''}")
    typer.echo(f"frames: {info.frames_count}")


@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    source: Path = typer.Argument(..., exists=True, readable=True, help="Input image."),
    destination: Path = typer.Argument(..., help="Where to write the output image."),
    destination_format: str = typer.Option(
        "", "--format", help="Output format (png, jpeg, jpg, gif, svg)."
    ),
    arg: list[str] | None = typer.Option(
        None, "--arg", help="Literal argument placed before the output (repeatable)."
    ),
    frames: str | None = typer.Option(None, "--frames", help=FRAMES_HELP),
) -> None:
    """Convert an image with convert (ImageMagick) or gm convert (GraphicsMagick)."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from magick_exec.application.use_cases import convert_image
        from magick_exec.arguments import ArgumentSet

        arguments = ArgumentSet(
            tokens=list(arg or []), source_path=str(source), source_frames=frames
        )
        convert_image(
            _manager(ctx),
            arguments,
            destination_path=destination,
            destination_format=destination_format,
        )
    except MagickError as exc:
        _flush_diagnostics(ctx)
        raise typer.Exit(code=_print_error(exc, debug))
    _flush_diagnostics(ctx)
    typer.echo(f"[green]✓ Saved:[/green] {destination}")


@app.command("rotate-size")
def rotate_size_cmd(
    width: int = typer.Argument(..., min=0, help="Source width."),
    height: int = typer.Argument(..., min=0, help="Source height."),
    angle: float = typer.Argument(..., help="Rotation in degrees."),
    rasterizer: Rasterizer = typer.Option(
        Rasterizer.IMAGEMAGICK, "--rasterizer", help="Sizing rules to reproduce."
    ),
    imprecision: float | None = typer.Option(
        None, "--imprecision", help="Override the imprecision constant."
    ),
) -> None:
    """Print the WIDTHxHEIGHT of an image after rotation."""
    from magick_exec.geometry import rotate

    box = rotate(width, height, angle, rasterizer=rasterizer, imprecision=imprecision)
    typer.echo(f"{box.width}x{box.height}")


@app.command("locales")
def locales_cmd(ctx: typer.Context) -> None:
    """List locales installed on this host (candidates for --locale)."""
    typer.echo(_manager(ctx).get_installed_locales().rstrip())


if __name__ == "__main__":
    app()
