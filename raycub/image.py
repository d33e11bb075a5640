"""In-memory 32-bit images and texture loading."""

from __future__ import annotations

import os
import sys
from array import array
from typing import Iterable

from PIL import Image as PILImage

from raycub.colors import SceneError

_MASK = 0xFFFFFFFF


class Image:
    """A width x height grid of packed 0xAARRGGBB pixels."""

    __slots__ = ("width", "height", "pixels")

    def __init__(self, width: int, height: int, pixels: Iterable[int] | None = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("image dimensions must be positive")
        self.width = width
        self.height = height
        if pixels is None:
            self.pixels = array("I", [0]) * (width * height)
        else:
            self.pixels = array("I", (value & _MASK for value in pixels))
            if len(self.pixels) != width * height:
                raise ValueError("pixel count does not match image size")

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def get(self, x: int, y: int) -> int:
        """Return the colour at (x, y)."""
        return self.pixels[self._index(x, y)]

    def put(self, x: int, y: int, color: int) -> None:
        """Set the colour at (x, y), keeping its low 32 bits."""
        self.pixels[self._index(x, y)] = color & _MASK


def load_texture(path: str | os.PathLike[str]) -> Image:
    """Load an image file (XPM, PNG, ...) as a texture."""
    try:
        with PILImage.open(path) as source:
            rgba = source.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise SceneError(f"Map error in textures: {os.fspath(path)}") from exc
    width, height = rgba.size
    pixels = array("I")
    pixels.frombytes(rgba.tobytes("raw", "BGRA"))
    if sys.byteorder == "big":
        pixels.byteswap()
    texture = Image(width, height)
    texture.pixels = pixels
    return texture