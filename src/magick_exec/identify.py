"""Format string and parser for ``identify -format`` output."""

from __future__ import annotations

from magick_exec.application.results import FrameInfo
from magick_exec.errors import OutputParseError
from magick_exec.types import SUPPORTED_FORMATS

# One record per frame, terminated by a newline interpreted by identify itself.
IDENTIFY_FORMAT = "format:%m|width:%w|height:%h|exif_orientation:%[EXIF:Orientation]\\n"

_REQUIRED_KEYS = ("format", "width", "height")


def _parse_int(key: str, value: str, line: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise OutputParseError(f"Invalid {key} '{value}' in identify output: {line!r}") from exc


def parse_frame(line: str) -> FrameInfo:
    """Parse a single ``key:value|key:value`` record."""
    data: dict[str, str] = {}
    for item in line.split("|"):
        key, sep, value = item.partition(":")
        if not sep:
            raise OutputParseError(f"Malformed identify record: {line!r}")
        data[key.strip()] = value.strip()

    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise OutputParseError(
            f"Identify output lacks {', '.join(missing)}: {line!r}"
        )

    image_format = data["format"].lower()
    if image_format not in SUPPORTED_FORMATS:
        raise OutputParseError(f"Unsupported image format '{image_format}': {line!r}")

    orientation = data.get("exif_orientation", "")
    return FrameInfo(
        format=image_format,
        width=_parse_int("width", data["width"], line),
        height=_parse_int("height", data["height"], line),
        # identify prints nothing, or "unknown" on some versions, when absent.
        exif_orientation=int(orientation) if orientation.isdigit() else None,
    )


def parse_identify_output(output: str) -> list[FrameInfo]:
    """Parse ``identify`` output into one :class:`FrameInfo` per frame.

    Raises
    ------
    OutputParseError
        If the output is empty, a record is malformed or reports an
        unsupported format.
    """
    frames = [parse_frame(line) for line in output.splitlines() if line.strip()]
    if not frames:
        raise OutputParseError("identify returned no output.")
    return frames
