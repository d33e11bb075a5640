"""Grid ray casting (DDA) and textured wall columns."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Mapping, Sequence

from raycub.geometry import Side, Vec
from raycub.image import Image
from raycub.scene import Scene

_INT_MAX = 2**31 - 1


@dataclass(frozen=True)
class Ray:
    """A ray cast from ``origin`` along ``direction``."""

    direction: Vec
    origin: Vec


@dataclass
class Dda:
    """State of a digital differential analysis walk through the grid."""

    map_x: int
    map_y: int
    side_dist_x: float = 0.0
    side_dist_y: float = 0.0
    delta_x: float = 0.0
    delta_y: float = 0.0
    step_x: int = 1
    step_y: int = 1
    side: Side = Side.NORTH
    hit: str = ""


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if y < 0 or x < 0 or y >= len(grid):
        return " "
    return grid[y][x:x + 1] or " "


def init_ray(direction: Vec, plane: Vec, player: Vec, x: int, width: int) -> Ray:
    """The ray for screen column ``x`` of a ``width``-wide view."""
    rel_pos = 2 * x / width - 1
    return Ray(direction + plane * rel_pos, player)


def init_dda(player: Vec) -> Dda:
    """A fresh walk starting in the cell that holds ``player``."""
    return Dda(map_x=int(player.x), map_y=int(player.y))


def get_deltas(ray: Ray, dda: Dda) -> Dda:
    """Fill in step directions and initial side distances for ``ray``."""
    dda.delta_x = abs(1 / ray.direction.x) if ray.direction.x else sys.float_info.max
    dda.delta_y = abs(1 / ray.direction.y) if ray.direction.y else sys.float_info.max
    if ray.direction.x < 0:
        dda.step_x = -1
        dda.side_dist_x = (ray.origin.x - dda.map_x) * dda.delta_x
    else:
        dda.side_dist_x = (dda.map_x + 1 - ray.origin.x) * dda.delta_x
    if ray.direction.y < 0:
        dda.step_y = -1
        dda.side_dist_y = (ray.origin.y - dda.map_y) * dda.delta_y
    else:
        dda.side_dist_y = (dda.map_y + 1 - ray.origin.y) * dda.delta_y
    return dda


def perform_dda(dda: Dda, grid: Sequence[str]) -> Dda:
    """Step through the grid until a cell other than '0' is reached."""
    dda.hit = ""
    while not dda.hit:
        if dda.side_dist_x < dda.side_dist_y:
            dda.side_dist_x += dda.delta_x
            dda.map_x += dda.step_x
            dda.side = Side.WEST if dda.step_x == -1 else Side.EAST
        else:
            dda.side_dist_y += dda.delta_y
            dda.map_y += dda.step_y
            dda.side = Side.NORTH if dda.step_y == -1 else Side.SOUTH
        cell = _cell(grid, dda.map_x, dda.map_y)
        if cell != "0":
            dda.hit = cell
    return dda


def calc_line_height(dda: Dda, screen_height: int) -> tuple[float, int]:
    """Perpendicular wall distance and the wall's height on screen."""
    if dda.side in (Side.WEST, Side.EAST):
        distance = dda.side_dist_x - dda.delta_x
    else:
        distance = dda.side_dist_y - dda.delta_y
    if distance <= 0:
        return distance, _INT_MAX
    return distance, int(min(screen_height / distance, _INT_MAX))


def calc_wall_texture_x(
    dda: Dda, per_wall_dist: float, player: Vec, ray: Ray, texture: Image
) -> int:
    """The texture column that the ray's hit point on the wall maps to."""
    if dda.side in (Side.WEST, Side.EAST):
        wall_x = player.y + per_wall_dist * ray.direction.y
    else:
        wall_x = player.x + per_wall_dist * ray.direction.x
    wall_x -= int(wall_x)
    texture_x = int(wall_x * texture.width)
    if dda.side in (Side.WEST, Side.EAST) and ray.direction.x > 0:
        texture_x = texture.width - texture_x - 1
    if dda.side in (Side.NORTH, Side.SOUTH) and ray.direction.y < 0:
        texture_x = texture.width - texture_x - 1
    return texture_x


def draw_line(
    image: Image,
    x: int,
    line_height: int,
    texture: Image,
    texture_x: int,
    ceiling: int,
    floor: int,
) -> None:
    """Draw screen column ``x``: ceiling, textured wall slice, then floor."""
    height = image.height
    highest = height // 2 - line_height // 2
    lowest = height // 2 + line_height // 2
    step = texture.height / line_height if line_height else math.inf
    position = -highest * step if highest < 0 else 0.0
    mask = texture.height - 1
    for y in range(height):
        if y < highest:
            color = ceiling
        elif y <= lowest:
            color = texture.get(texture_x, int(position) & mask)
            position += step
        else:
            color = floor
        image.put(x, y, color)


def draw_frame(image: Image, scene: Scene, textures: Mapping[Side, Image]) -> Image:
    """Render the scene as seen by its player into ``image``."""
    if scene.player is None:
        raise ValueError("scene has no player")
    ceiling = scene.ceiling or 0
    floor = scene.floor or 0
    for x in range(image.width):
        ray = init_ray(scene.direction, scene.plane, scene.player, x, image.width)
        dda = perform_dda(get_deltas(ray, init_dda(scene.player)), scene.rows)
        distance, line_height = calc_line_height(dda, image.height)
        texture = textures[dda.side]
        texture_x = calc_wall_texture_x(dda, distance, scene.player, ray, texture)
        draw_line(image, x, line_height, texture, texture_x, ceiling, floor)
    return image