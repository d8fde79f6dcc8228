"""Predict image dimensions after a rotation without running the tool.

Rasterizers size rotated canvases differently, so the expected size
depends on which implementation is being matched:

- ``Rasterizer.IMAGEMAGICK``: smallest integer box enclosing the exactly
  rotated corners, e.g. 40x20 rotated by 5 degrees gives 42x24.
- ``Rasterizer.GD``: GD's ``imagerotate`` sizing (PHP >= 5.5), which
  truncates each projected side separately after a 0.5 correction, e.g.
  40x20 rotated by 5 degrees gives 41x23.

Both apply a small imprecision constant. It is calibrated against specific
versions of those libraries and can be overridden per call.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple


class Rasterizer(str, Enum):
    """Reference implementation whose output dimensions are reproduced."""

    IMAGEMAGICK = "imagemagick"
    GD = "gd"


DEFAULT_IMPRECISION: dict[Rasterizer, float] = {
    Rasterizer.IMAGEMAGICK: 1e-6,
    Rasterizer.GD: 1e-5,
}


class BoundingBox(NamedTuple):
    """Width and height of the axis-aligned box around a rotated image."""

    width: int
    height: int


def fix_imprecision(value: float, imprecision: float) -> float:
    """Nudge ``value`` by ``imprecision`` when it sits just past an integer.

    GD computes in single precision while Python uses doubles, so values such
    as ``40 * cos(60)`` come out as ``20.000000000000004`` here but as just
    under 20 in GD. Truncation then disagrees unless the value is nudged.
    """
    fraction = abs(value - math.trunc(value))
    if fraction < abs(imprecision):
        return value + imprecision
    return value


def _quarter_turn(width: int, height: int, angle: float) -> BoundingBox:
    if int(angle // 90) % 2:
        return BoundingBox(height, width)
    return BoundingBox(width, height)


def _imagemagick_box(width: int, height: int, angle: float, imprecision: float) -> BoundingBox:
    rad = math.radians(angle)
    cos = math.cos(rad)
    sin = math.sin(rad)
    # Corners (0,0), (w,0), (w,h), (0,h) rotated about the origin.
    xs = (0.0, width * cos, width * cos - height * sin, -height * sin)
    ys = (0.0, width * sin, width * sin + height * cos, height * cos)
    return BoundingBox(
        max(0, math.ceil(max(xs) - min(xs) - imprecision)),
        max(0, math.ceil(max(ys) - min(ys) - imprecision)),
    )


def _gd_box(width: int, height: int, angle: float, imprecision: float) -> BoundingBox:
    # GD misbehaves on negative angles; work in [0, 360).
    angle -= math.floor(angle / 360) * 360
    rad = math.radians(angle)
    cos = math.cos(rad)
    sin = math.sin(rad)
    magnitude = abs(imprecision)
    cos_imprecision = -math.copysign(magnitude, cos)
    sin_imprecision = -math.copysign(magnitude, sin)

    a = fix_imprecision(width * cos, cos_imprecision)
    b = fix_imprecision(height * sin + 0.5, sin_imprecision)
    c = fix_imprecision(width * sin, sin_imprecision)
    d = fix_imprecision(height * cos + 0.5, cos_imprecision)
    return BoundingBox(
        abs(math.trunc(a)) + abs(math.trunc(b)),
        abs(math.trunc(c)) + abs(math.trunc(d)),
    )


def rotate(
    width: int,
    height: int,
    angle: float,
    *,
    rasterizer: Rasterizer = Rasterizer.IMAGEMAGICK,
    imprecision: float | None = None,
) -> BoundingBox:
    """Compute the bounding box of a ``width`` x ``height`` image rotated by ``angle``.

    Parameters
    ----------
    width, height : int
        Source dimensions, non-negative.
    angle : float
        Rotation in degrees; negative and fractional angles are accepted.
    rasterizer : Rasterizer, default=Rasterizer.IMAGEMAGICK
        Implementation whose sizing is reproduced.
    imprecision : float | None, default=None
        Override for the rasterizer's imprecision constant.

    Returns
    -------
    BoundingBox
        Bounding width and height. Multiples of 90 degrees return the
        original (or swapped) dimensions exactly.

    Raises
    ------
    ValueError
        If a dimension is negative.
    """
    if width < 0 or height < 0:
        raise ValueError("width and height must be non-negative.")
    if angle % 90 == 0:
        return _quarter_turn(width, height, angle)

    rasterizer = Rasterizer(rasterizer)
    if imprecision is None:
        imprecision = DEFAULT_IMPRECISION[rasterizer]
    if rasterizer is Rasterizer.GD:
        return _gd_box(width, height, angle, imprecision)
    return _imagemagick_box(width, height, angle, imprecision)


class Rectangle:
    """Rectangle that tracks its bounding box through rotations."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        rasterizer: Rasterizer = Rasterizer.IMAGEMAGICK,
        imprecision: float | None = None,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be non-negative.")
        self.width = width
        self.height = height
        self.rasterizer = rasterizer
        self.imprecision = imprecision
        self.bounding_width = width
        self.bounding_height = height

    def rotate(self, angle: float) -> Rectangle:
        box = rotate(
            self.width,
            self.height,
            angle,
            rasterizer=self.rasterizer,
            imprecision=self.imprecision,
        )
        self.bounding_width, self.bounding_height = box
        return self
