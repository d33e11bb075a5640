"""Fixed-step movement for the bonus game; open doors can be walked through."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

from raycub.bonus.doors import Door, DoorState, find_door
from raycub.geometry import PI, Vec, rotate_vector
from raycub.player import Move

if TYPE_CHECKING:
    from raycub.bonus.frame import World

STEP_LENGTH = 0.2
TURN_ANGLE = 0.05 * PI


def can_walk(grid: Sequence[str], doors: Iterable[Door], x: int, y: int) -> bool:
    """Tell whether cell (x, y) is floor or a fully open door."""
    if y < 0 or x < 0 or y >= len(grid):
        return False
    cell = grid[y][x:x + 1]
    if cell == "0":
        return True
    if cell == "D":
        door = find_door(doors, x, y)
        return door is not None and door.state == DoorState.OPEN
    return False


def make_step(world: World, step: Vec) -> None:
    """Move by ``step``, checking each axis against the cell the player started in."""
    player = world.player
    x, y = int(player.x), int(player.y)
    new_x = int(player.x + step.x)
    new_y = int(player.y + step.y)
    moved_x, moved_y = player.x, player.y
    if can_walk(world.rows, world.doors, new_x, y):
        moved_x += step.x
    if can_walk(world.rows, world.doors, x, new_y):
        moved_y += step.y
    world.player = Vec(moved_x, moved_y)


def _heading(direction: Vec, move: Move) -> Vec:
    if move is Move.FORWARD:
        return direction
    if move is Move.BACKWARD:
        return rotate_vector(direction, PI)
    if move is Move.LEFT:
        return rotate_vector(direction, -PI / 2)
    return rotate_vector(direction, PI / 2)


def move_player(world: World, move: Move) -> None:
    """Take one fixed-length step in the ``move`` direction."""
    make_step(world, _heading(world.direction, move) * STEP_LENGTH)


def rotate_player(world: World, clockwise: bool) -> None:
    """Turn by a fixed angle; ``clockwise`` is a right turn."""
    angle = TURN_ANGLE if clockwise else -TURN_ANGLE
    world.direction = rotate_vector(world.direction, angle)
    world.plane = rotate_vector(world.plane, angle)