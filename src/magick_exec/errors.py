"""Exception hierarchy for ImageMagick/GraphicsMagick execution."""

from __future__ import annotations


class MagickError(Exception):
    """Base class for all errors raised by this package."""

    exit_code: int = 1


class ConfigurationError(MagickError):
    """Binary path, locale or settings are unusable."""

    exit_code = 2


class SpawnError(MagickError):
    """The operating system could not start the child process."""

    exit_code = 3


class ProcessTimeoutError(MagickError):
    """The child process exceeded its deadline and was terminated."""

    exit_code = 4


class ExecutionError(MagickError):
    """The child process completed with a non-zero exit status."""

    exit_code = 5

    def __init__(self, message: str, *, return_code: int, stderr: str = "") -> None:
        super().__init__(message)
        self.return_code = return_code
        self.stderr = stderr


class OutputParseError(MagickError):
    """The tool's stdout did not match the expected structure."""

    exit_code = 6
