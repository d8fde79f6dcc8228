"""Typed option objects shared across use-cases."""

from __future__ import annotations

from dataclasses import dataclass

from magick_exec.schemas import MagickSettings


@dataclass(frozen=True)
class OutputOptions:
    """Post-processing applied to every converted image."""

    quality: int | None = None
    density: int | None = None
    colorspace: str | None = None
    profile: str | None = None

    @classmethod
    def from_settings(cls, settings: MagickSettings) -> OutputOptions:
        return cls(
            quality=settings.quality,
            density=settings.density,
            colorspace=settings.colorspace,
            profile=settings.profile,
        )
