"""Sliding doors: state machine, lookup, visibility and creation from a scene."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Sequence

from raycub.bonus.sprites import Sprite, make_sprite
from raycub.geometry import Side, Vec
from raycub.image import Image
from raycub.raycast import Dda
from raycub.scene import Scene

DOOR_CLOSE_DELAY = 5
INTERACT_DISTANCE = 2.5

_DEFAULT_DOOR_TEXTURE = "./textures/d.xpm"
_NUMBERED_DOOR_TEXTURES = 3
_ODD_SPRITE = "./textures/ducky.xpm"
_EVEN_SPRITE = "./textures/tree.xpm"

TextureLoader = Callable[[str], Image]


class DoorState(IntEnum):
    """Where a door is in its open/close cycle."""

    CLOSED = 0
    OPENING = 1
    OPEN = 2
    CLOSING = 3


@dataclass
class Door:
    """A door on map cell (x, y) with its texture and the sprite behind it."""

    x: int
    y: int
    texture: Image
    sprite: Sprite
    state: DoorState = DoorState.CLOSED
    open_ratio: float = 0.0
    opened_at: float = 0.0

    def open(self) -> bool:
        """Start opening a closed door; return whether it started."""
        if self.state != DoorState.CLOSED:
            return False
        self.state = DoorState.OPENING
        return True


def door_texture_path(number: int) -> str:
    """Texture file for the door with 1-based ``number``."""
    if number > _NUMBERED_DOOR_TEXTURES:
        return _DEFAULT_DOOR_TEXTURE
    return f"./textures/d{number}.xpm"


def find_door(doors: Iterable[Door], x: int, y: int) -> Door | None:
    """The door on cell (x, y), if any."""
    return next((door for door in doors if door.x == x and door.y == y), None)


def door_allows_view(door: Door, wall_x: float, side: Side) -> bool:
    """Tell whether a ray hitting ``door`` at ``wall_x`` passes through the gap."""
    if door.state == DoorState.OPEN:
        return True
    if door.state == DoorState.CLOSED:
        return False
    if side in (Side.NORTH, Side.EAST):
        return wall_x > 1 - door.open_ratio
    return wall_x < door.open_ratio


def dist_to_door(player: Vec, dda: Dda) -> float:
    """Distance from the player to the hit door along the axis of the hit side."""
    if dda.side in (Side.EAST, Side.WEST):
        return abs(player.x - dda.map_x)
    return abs(player.y - dda.map_y)


def update_doors(doors: Iterable[Door], elapsed: float, now: float, player: Vec) -> bool:
    """Advance every door by ``elapsed`` seconds; return whether a redraw is due."""
    redraw = False
    player_cell = (int(player.x), int(player.y))
    for door in doors:
        if door.state == DoorState.OPENING:
            door.open_ratio += elapsed
            if door.open_ratio >= 1:
                door.open_ratio = 1.0
                door.state = DoorState.OPEN
                door.opened_at = now
            redraw = True
        if door.state == DoorState.OPEN:
            if now - door.opened_at > DOOR_CLOSE_DELAY and player_cell != (door.x, door.y):
                door.state = DoorState.CLOSING
        if door.state == DoorState.CLOSING:
            door.open_ratio -= elapsed
            if door.open_ratio <= 0:
                door.open_ratio = 0.0
                door.state = DoorState.CLOSED
            redraw = True
    return redraw


def create_doors(scene: Scene, loader: TextureLoader) -> list[Door]:
    """Build a door, with its texture and hidden sprite, for each door cell."""
    doors: list[Door] = []
    for number, (x, y) in enumerate(scene.doors, start=1):
        texture = loader(door_texture_path(number))
        sprite_path = _ODD_SPRITE if number % 2 == 1 else _EVEN_SPRITE
        sprite = make_sprite(Vec(x + 0.5, y + 0.5), loader(sprite_path))
        doors.append(Door(x=x, y=y, texture=texture, sprite=sprite))
    return doors


def doors_at(doors: Sequence[Door]) -> set[tuple[int, int]]:
    """The set of cells that hold doors."""
    return {(door.x, door.y) for door in doors}