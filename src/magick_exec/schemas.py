"""Pydantic schemas for runtime validation of settings and operation inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from magick_exec.errors import ConfigurationError
from magick_exec.types import SUPPORTED_FORMATS, Package


class MagickSettings(BaseModel):
    """Settings supplied by the host application, read-only for this package."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path_to_binaries: str = ""
    binaries: Package = Package.IMAGEMAGICK
    locale: str | None = None
    debug: bool = False
    prepend: str = ""
    quality: int = Field(default=75, ge=0, le=100)
    use_identify: bool = True
    density: int | None = Field(default=None, ge=1)
    colorspace: Literal["RGB", "sRGB", "GRAY"] | None = None
    profile: str | None = None
    working_directory: Path | None = None
    timeout: float | None = Field(default=None, gt=0)
    path_restriction: str | None = None

    @field_validator("locale", "profile", "path_restriction", "colorspace", mode="before")
    @classmethod
    def _blank_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("density", mode="before")
    @classmethod
    def _zero_density_disables(cls, value: object) -> object:
        if value in (0, "0", ""):
            return None
        return value


class ConvertRequest(BaseModel):
    """Validated input for a convert operation."""

    model_config = ConfigDict(extra="forbid")

    source_path: Path
    destination_path: Path
    destination_format: str = ""
    source_frames: str | None = None

    @field_validator("destination_format")
    @classmethod
    def _validate_format(cls, value: str) -> str:
        value = value.strip().lower()
        if value and value not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Invalid format '{value}'. Supported: {', '.join(SUPPORTED_FORMATS)}."
            )
        return value


def load_settings(path: Path) -> MagickSettings:
    """Load settings from a JSON file.

    Raises
    ------
    ConfigurationError
        If the file cannot be read or does not validate.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
    try:
        return MagickSettings.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings in {path}: {exc}") from exc
