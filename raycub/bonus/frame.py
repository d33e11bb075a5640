"""Bonus renderer: textured walls, sliding doors and the sprite behind an open door."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from raycub.bonus.doors import (
    INTERACT_DISTANCE,
    Door,
    DoorState,
    door_allows_view,
    dist_to_door,
    find_door,
)
from raycub.bonus.sprites import Sprite, draw_sprite, sprite_draw, transform_sprite
from raycub.geometry import Side, Vec
from raycub.image import Image
from raycub.raycast import Dda, Ray, draw_line, get_deltas, init_dda, init_ray

_INT_MAX = 2**31 - 1


@dataclass
class World:
    """Everything the bonus renderer needs to draw one frame."""

    rows: list[str]
    player: Vec
    direction: Vec
    plane: Vec
    textures: dict[Side, Image]
    doors: list[Door] = field(default_factory=list)
    ceiling: int = 0
    floor: int = 0
    now: float = 0.0
    zbuffer: list[float] = field(default_factory=list)
    can_open: Door | None = None
    sprite: Sprite | None = None
    redraw: bool = False


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if y < 0 or x < 0 or y >= len(grid):
        return " "
    return grid[y][x:x + 1] or " "


def _perpendicular(dda: Dda) -> float:
    if dda.side in (Side.WEST, Side.EAST):
        return dda.side_dist_x - dda.delta_x
    return dda.side_dist_y - dda.delta_y


def _line_height(distance: float, screen_height: int) -> int:
    if distance <= 0:
        return _INT_MAX
    return int(min(screen_height / distance, _INT_MAX))


def _wall_x(dda: Dda, distance: float, player: Vec, ray: Ray) -> float:
    if dda.side in (Side.WEST, Side.EAST):
        wall_x = player.y + distance * ray.direction.y
    else:
        wall_x = player.x + distance * ray.direction.x
    return wall_x - int(wall_x)


def perform_dda(dda: Dda, grid: Sequence[str]) -> Dda:
    """Walk on until a non-'0' cell is hit; a walk that has already hit stays put."""
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


def calc_wall_texture_x(
    dda: Dda, per_wall_dist: float, world: World, ray: Ray
) -> tuple[float, Image, int]:
    """Wall distance, texture and texture column for the cell the walk hit.

    A door may let the ray through, so the distance can grow.
    """
    if dda.hit == "D":
        if not world.doors:
            raise ValueError("ray hit a door but the world has no doors")
        texture = world.doors[0].texture
    else:
        texture = world.textures[dda.side]
    wall_x = _wall_x(dda, per_wall_dist, world.player, ray)
    texture_x = int(wall_x * texture.width)
    if dda.side in (Side.SOUTH, Side.WEST):
        texture_x = texture.width - texture_x - 1
    if dda.hit == "D":
        return handle_door(dda, per_wall_dist, texture_x, world, ray)
    return per_wall_dist, texture, texture_x


def handle_door(
    dda: Dda, per_wall_dist: float, texture_x: int, world: World, ray: Ray
) -> tuple[float, Image, int]:
    """Resolve a ray that hit a door: see past it, slide its texture, or offer to open it."""
    door = find_door(world.doors, dda.map_x, dda.map_y)
    if door is None:
        if not world.doors:
            raise ValueError("ray hit a door but the world has no doors")
        return per_wall_dist, world.doors[0].texture, texture_x
    if door.state != DoorState.CLOSED:
        world.sprite = door.sprite
    wall_x = _wall_x(dda, per_wall_dist, world.player, ray)
    if door_allows_view(door, wall_x, dda.side):
        beyond = perform_dda(replace(dda, hit=""), world.rows)
        return calc_wall_texture_x(beyond, _perpendicular(beyond), world, ray)
    texture = door.texture
    if door.state in (DoorState.OPENING, DoorState.CLOSING):
        shifted = int(texture_x + door.open_ratio * texture.width)
        texture_x = min(shifted, texture.width - 1)
    elif door.state == DoorState.CLOSED and dist_to_door(world.player, dda) < INTERACT_DISTANCE:
        world.can_open = door
    return per_wall_dist, texture, texture_x


def _draw_sprite(image: Image, world: World) -> None:
    sprite = world.sprite
    if sprite is None:
        return
    transformed = transform_sprite(sprite, world.player, world.direction, world.plane)
    draw = sprite_draw(sprite, transformed, world.now, image.width, image.height)
    if draw is not None:
        draw_sprite(image, transformed.y, draw, sprite, world.zbuffer)


def draw_frame(image: Image, world: World) -> Image:
    """Render walls, doors and any visible sprite into ``image``."""
    world.can_open = None
    world.sprite = None
    world.redraw = False
    world.zbuffer = [0.0] * image.width
    for x in range(image.width):
        ray = init_ray(world.direction, world.plane, world.player, x, image.width)
        dda = perform_dda(get_deltas(ray, init_dda(world.player)), world.rows)
        distance, texture, texture_x = calc_wall_texture_x(
            dda, _perpendicular(dda), world, ray
        )
        line_height = _line_height(distance, image.height)
        draw_line(image, x, line_height, texture, texture_x, world.ceiling, world.floor)
        world.zbuffer[x] = distance
    _draw_sprite(image, world)
    return image