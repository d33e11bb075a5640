"""Vectors, wall sides and colour packing shared by the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

PI = 3.14159265359

SCREEN_WIDTH = 930
SCREEN_HEIGHT = 720

BONUS_SCREEN_WIDTH = 1024
BONUS_SCREEN_HEIGHT = 776


class Side(IntEnum):
    """The face of a grid cell that a ray hit."""

    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3


@dataclass(frozen=True)
class Vec:
    """A two-dimensional vector or point in map space."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec) -> Vec:
        return Vec(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec:
        return Vec(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vec:
        return Vec(-self.x, -self.y)


def rotate_vector(src: Vec, angle: float) -> Vec:
    """Return ``src`` rotated by ``angle`` radians."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return Vec(src.x * cos_a - src.y * sin_a, src.x * sin_a + src.y * cos_a)


def gen_trgb(opacity: int, red: int, green: int, blue: int) -> int:
    """Pack four channels into a 32-bit colour; 0 if any channel exceeds 255."""
    if opacity > 255 or red > 255 or green > 255 or blue > 255:
        return 0
    return (opacity << 24 | red << 16 | green << 8 | blue) & 0xFFFFFFFF