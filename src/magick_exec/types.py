"""Shared enums and type aliases."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TypeAlias


class Tool(str, Enum):
    """Executable personality; each one has its own argument-order grammar."""

    IDENTIFY = "identify"
    CONVERT = "convert"
    GM = "gm"


class Package(str, Enum):
    """Graphics suite installed on the host."""

    IMAGEMAGICK = "imagemagick"
    GRAPHICSMAGICK = "graphicsmagick"


PACKAGE_LABELS: dict[Package, str] = {
    Package.IMAGEMAGICK: "ImageMagick",
    Package.GRAPHICSMAGICK: "GraphicsMagick",
}

SUPPORTED_FORMATS: tuple[str, ...] = ("png", "jpeg", "jpg", "gif", "svg")

Escaper: TypeAlias = Callable[[str], str]
