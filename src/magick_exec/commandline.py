"""Per-tool command-line grammars.

- identify: ``<tokens> <source>``
- convert:  ``<source> <tokens> [<format>:]<destination>``
  (http://www.imagemagick.org/Usage/basics/#cmdline)
- gm:       ``convert <tokens> <source> <destination>``
  (http://www.graphicsmagick.org/GraphicsMagick.html)

``<source>`` is the escaped source path with its frame selector attached
before escaping, so ``a.gif[0]`` is quoted as one token.
"""

from __future__ import annotations

from collections.abc import Callable

from magick_exec.arguments import ArgumentSet
from magick_exec.types import Escaper, Tool


def _escaped_source(arguments: ArgumentSet, escape: Escaper) -> str:
    source = arguments.source_with_frames()
    return escape(source) if source else ""


def _escaped_destination(arguments: ArgumentSet, escape: Escaper) -> str:
    if not arguments.destination_path:
        return ""
    return escape(arguments.destination_path)


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def _identify(arguments: ArgumentSet, escape: Escaper) -> str:
    return _join(*arguments.tokens, _escaped_source(arguments, escape))


def _convert(arguments: ArgumentSet, escape: Escaper) -> str:
    destination = _escaped_destination(arguments, escape)
    # http://www.imagemagick.org/script/command-line-processing.php#output
    if destination and arguments.destination_format:
        destination = f"{arguments.destination_format}:{destination}"
    return _join(_escaped_source(arguments, escape), *arguments.tokens, destination)


def _gm(arguments: ArgumentSet, escape: Escaper) -> str:
    return _join(
        "convert",
        *arguments.tokens,
        _escaped_source(arguments, escape),
        _escaped_destination(arguments, escape),
    )


GRAMMARS: dict[Tool, Callable[[ArgumentSet, Escaper], str]] = {
    Tool.IDENTIFY: _identify,
    Tool.CONVERT: _convert,
    Tool.GM: _gm,
}

if set(GRAMMARS) != set(Tool):  # pragma: no cover - guards new Tool members
    raise RuntimeError("Every Tool needs a command-line grammar.")


def build_command_line(tool: Tool, arguments: ArgumentSet, escape: Escaper) -> str:
    """Build the argument string that follows the executable path.

    Parameters
    ----------
    tool : Tool
        Grammar to apply.
    arguments : ArgumentSet
        Tokens, paths and destination format.
    escape : Callable[[str], str]
        Escaper applied to the source and destination paths.

    Returns
    -------
    str
        Command-line arguments; empty slots are left out.
    """
    return GRAMMARS[Tool(tool)](arguments, escape)
