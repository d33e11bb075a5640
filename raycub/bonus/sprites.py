"""Billboard sprites projected into the view and drawn against a depth buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from raycub.geometry import Vec
from raycub.image import Image

_REFERENCE_SIZE = 128
_FRAMES_PER_SECOND = 4
_USEC_PER_FRAME = 250000


@dataclass
class Sprite:
    """A sprite standing at ``position``; its texture holds ``moves`` square frames."""

    position: Vec
    texture: Image
    size: int
    moves: int
    scale: int


@dataclass
class SpriteDraw:
    """Where on screen a sprite goes and which animation frame it shows."""

    screen_x: int = 0
    side: int = 0
    floor_offset: int = 0
    move: int = 0
    start_x: int = 0
    end_x: int = 0
    start_y: int = 0
    end_y: int = 0


def make_sprite(position: Vec, texture: Image) -> Sprite:
    """A sprite whose frames are as wide as the texture is high."""
    size = texture.height
    return Sprite(
        position=position,
        texture=texture,
        size=size,
        moves=texture.width // size,
        scale=max(1, _REFERENCE_SIZE // size),
    )


def transform_sprite(sprite: Sprite, player: Vec, direction: Vec, plane: Vec) -> Vec:
    """The sprite's position in camera space: x across the view, y its depth."""
    rel = sprite.position - player
    inv_det = 1.0 / (plane.x * direction.y - direction.x * plane.y)
    return Vec(
        inv_det * (direction.y * rel.x - direction.x * rel.y),
        inv_det * (-plane.y * rel.x + plane.x * rel.y),
    )


def _animation_frame(sprite: Sprite, now: float) -> int:
    if not sprite.moves:
        return 0
    seconds = int(now)
    microseconds = int((now - seconds) * 1_000_000)
    return (seconds * _FRAMES_PER_SECOND + microseconds // _USEC_PER_FRAME) % sprite.moves


def sprite_draw(
    sprite: Sprite, transformed: Vec, now: float, width: int, height: int
) -> SpriteDraw | None:
    """Screen placement of a sprite, or None when it is behind the camera."""
    if transformed.y <= 0:
        return None
    projected = height / transformed.y
    draw = SpriteDraw(
        screen_x=int((width // 2) * (1 + transformed.x / transformed.y)),
        side=int(projected) // sprite.scale,
        floor_offset=int(projected * (1 - 1.0 / sprite.scale) / 2),
        move=_animation_frame(sprite, now),
    )
    return calc_start_end(draw, width, height)


def calc_start_end(draw: SpriteDraw, width: int, height: int) -> SpriteDraw:
    """Clip the sprite's square to the screen."""
    half = draw.side // 2
    draw.start_x = max(0, draw.screen_x - half)
    draw.end_x = min(width - 1, draw.screen_x + half)
    draw.start_y = max(0, height // 2 - half + draw.floor_offset)
    draw.end_y = min(height - 1, height // 2 + half + draw.floor_offset)
    return draw


def draw_sprite(
    image: Image, depth: float, draw: SpriteDraw, sprite: Sprite, zbuffer: Sequence[float]
) -> Image:
    """Paint the sprite's non-black pixels in columns where it is nearer than the wall."""
    if draw.side <= 0:
        return image
    frame_offset = draw.move * sprite.size
    for x in range(draw.start_x, draw.end_x):
        if not depth < zbuffer[x]:
            continue
        text_x = (x - draw.start_x) * sprite.size // draw.side + frame_offset
        for y in range(draw.start_y, draw.end_y):
            text_y = (y - draw.start_y) * sprite.size // draw.side
            color = sprite.texture.get(text_x, text_y)
            if color & 0x00FFFFFF:
                image.put(x, y, color)
    return image