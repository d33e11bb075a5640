"""Parsing of ``R,G,B`` colour values from scene files."""

from __future__ import annotations

from itertools import takewhile

from raycub.geometry import gen_trgb

_DIGITS = frozenset("0123456789")
_MAX_DIGITS = 4


class SceneError(ValueError):
    """Raised when a scene description is malformed."""


def read_component(text: str) -> tuple[int, int]:
    """Read one colour channel from the start of ``text``.

    Returns the channel value and the number of characters consumed.
    At most four leading digits are read; the value must lie in 0..255.
    """
    digits = "".join(takewhile(lambda ch: ch in _DIGITS, text[:_MAX_DIGITS]))
    if not digits:
        raise SceneError("Map error in colors")
    value = int(digits)
    if value > 255:
        raise SceneError("Map error in colors")
    return value, len(digits)


def parse_color(text: str) -> int:
    """Parse ``R,G,B`` into an opaque 32-bit colour."""
    components: list[int] = []
    pos = 0
    while pos < len(text):
        value, used = read_component(text[pos:])
        components.append(value)
        pos += used
        if pos >= len(text):
            break
        if text[pos] == "," and len(components) < 3:
            pos += 1
        else:
            raise SceneError("Map error in colors")
    if len(components) != 3:
        raise SceneError("Map error in colors")
    red, green, blue = components
    return gen_trgb(255, red, green, blue)