"""Frame-rate scaled player movement and turning."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from raycub.geometry import PI, Vec, rotate_vector
from raycub.scene import Scene

_MOVE_SPEED = 5000
_TURN_SPEED = 500


class Move(Enum):
    """Movement directions, keyed by the letter that triggers them."""

    FORWARD = "w"
    BACKWARD = "s"
    LEFT = "a"
    RIGHT = "d"


def _is_floor(rows: Sequence[str], x: int, y: int) -> bool:
    return 0 <= y < len(rows) and x >= 0 and rows[y][x:x + 1] == "0"


def _require_player(scene: Scene) -> Vec:
    if scene.player is None:
        raise ValueError("scene has no player")
    return scene.player


def step_forward(scene: Scene, direction: Vec) -> None:
    """Move by whole cells along ``direction``, one axis at a time."""
    player = _require_player(scene)
    if _is_floor(scene.rows, int(player.x) + int(direction.x), int(player.y)):
        player = Vec(player.x + direction.x, player.y)
    if _is_floor(scene.rows, int(player.x), int(player.y) + int(direction.y)):
        player = Vec(player.x, player.y + direction.y)
    scene.player = player


def _step_vector(scene: Scene, move: Move) -> Vec:
    if move is Move.FORWARD:
        return scene.direction
    if move is Move.BACKWARD:
        return rotate_vector(scene.direction, PI)
    if move is Move.LEFT:
        return rotate_vector(scene.direction, -PI / 2)
    return rotate_vector(scene.direction, PI / 2)


def move_player(scene: Scene, move: Move, frames_ps: float) -> None:
    """Walk in ``move`` direction, sliding along walls per axis."""
    if frames_ps <= 0:
        raise ValueError("frames per second must be positive")
    player = _require_player(scene)
    step = _step_vector(scene, move) * (_MOVE_SPEED / frames_ps)
    if _is_floor(scene.rows, int(player.x + step.x), int(player.y)):
        player = Vec(player.x + step.x, player.y)
    if _is_floor(scene.rows, int(player.x), int(player.y + step.y)):
        player = Vec(player.x, player.y + step.y)
    scene.player = player


def rotate_player(scene: Scene, clockwise: bool, frames_ps: float) -> None:
    """Turn the view and camera plane; ``clockwise`` is a right turn."""
    if frames_ps <= 0:
        raise ValueError("frames per second must be positive")
    angle = _TURN_SPEED * PI / frames_ps
    if not clockwise:
        angle = -angle
    scene.direction = rotate_vector(scene.direction, angle)
    scene.plane = rotate_vector(scene.plane, angle)