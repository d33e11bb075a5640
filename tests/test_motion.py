import math

import pytest

from raycub.bonus.doors import Door, DoorState
from raycub.bonus.frame import World
from raycub.bonus.motion import can_walk, make_step, move_player, rotate_player
from raycub.bonus.sprites import make_sprite
from raycub.geometry import Vec
from raycub.image import Image
from raycub.player import Move

ROOM = ["11111\n", "10001\n", "10001\n", "10001\n", "11111\n"]
DOOR_ROOM = ["11111\n", "10D01\n", "10001\n", "10001\n", "11111\n"]


def solid(color, size=4):
    return Image(size, size, [color] * (size * size))


def make_door(state):
    door = Door(
        x=2, y=1, texture=solid(0xFF00FF00), sprite=make_sprite(Vec(2.5, 1.5), solid(0xFF0000FF))
    )
    door.state = state
    return door


def make_world(rows=ROOM, player=Vec(2.5, 2.5), doors=None):
    return World(
        rows=list(rows),
        player=player,
        direction=Vec(0.0, -1.0),
        plane=Vec(0.66, 0.0),
        textures={},
        doors=list(doors or []),
    )


def test_can_walk_floor_and_wall():
    assert can_walk(ROOM, [], 2, 2) is True
    assert can_walk(ROOM, [], 0, 2) is False


def test_can_walk_outside_grid():
    assert can_walk(ROOM, [], -1, 2) is False
    assert can_walk(ROOM, [], 2, 9) is False
    assert can_walk(ROOM, [], 40, 2) is False


@pytest.mark.parametrize(
    "state, expected",
    [
        (DoorState.CLOSED, False),
        (DoorState.OPENING, False),
        (DoorState.OPEN, True),
        (DoorState.CLOSING, False),
    ],
)
def test_can_walk_through_doors(state, expected):
    assert can_walk(DOOR_ROOM, [make_door(state)], 2, 1) is expected


def test_can_walk_door_cell_without_door_object():
    assert can_walk(DOOR_ROOM, [], 2, 1) is False


def test_move_forward_uses_fixed_step():
    world = make_world()
    move_player(world, Move.FORWARD)
    assert world.player.x == pytest.approx(2.5)
    assert world.player.y == pytest.approx(2.3)


def test_forward_then_backward_returns():
    world = make_world()
    move_player(world, Move.FORWARD)
    move_player(world, Move.BACKWARD)
    assert world.player.x == pytest.approx(2.5)
    assert world.player.y == pytest.approx(2.5)


def test_strafe_left_and_right_cancel():
    world = make_world()
    move_player(world, Move.LEFT)
    moved = world.player
    move_player(world, Move.RIGHT)
    assert moved.x != pytest.approx(2.5)
    assert world.player.x == pytest.approx(2.5)
    assert world.player.y == pytest.approx(2.5)


def test_wall_blocks_movement():
    world = make_world(player=Vec(1.1, 2.5))
    world.direction = Vec(-1.0, 0.0)
    move_player(world, Move.FORWARD)
    assert world.player == Vec(1.1, 2.5)


def test_make_step_slides_along_wall():
    world = make_world(player=Vec(1.5, 1.5))
    make_step(world, Vec(-0.7, 0.3))
    assert world.player.x == pytest.approx(1.5)
    assert world.player.y == pytest.approx(1.8)


def test_make_step_checks_axes_from_start_cell():
    rows = ["11111\n", "10001\n", "10111\n", "10001\n", "11111\n"]
    world = make_world(rows=rows, player=Vec(1.5, 1.5))
    make_step(world, Vec(1.0, 1.0))
    assert world.player.x == pytest.approx(2.5)
    assert world.player.y == pytest.approx(2.5)


def test_closed_door_blocks_and_open_door_admits():
    closed = make_world(rows=DOOR_ROOM, doors=[make_door(DoorState.CLOSED)])
    closed.player = Vec(2.5, 2.1)
    move_player(closed, Move.FORWARD)
    assert closed.player.y == pytest.approx(2.1)
    opened = make_world(rows=DOOR_ROOM, doors=[make_door(DoorState.OPEN)])
    opened.player = Vec(2.5, 2.1)
    move_player(opened, Move.FORWARD)
    assert opened.player.y == pytest.approx(1.9)


def test_rotation_round_trip_and_length():
    world = make_world()
    rotate_player(world, True)
    assert math.hypot(world.direction.x, world.direction.y) == pytest.approx(1.0)
    assert world.direction.x != pytest.approx(0.0)
    rotate_player(world, False)
    assert world.direction.x == pytest.approx(0.0, abs=1e-12)
    assert world.direction.y == pytest.approx(-1.0)
    assert world.plane.x == pytest.approx(0.66)
    assert world.plane.y == pytest.approx(0.0, abs=1e-12)


def test_rotation_keeps_plane_perpendicular():
    world = make_world()
    for _ in range(7):
        rotate_player(world, False)
    dot = world.direction.x * world.plane.x + world.direction.y * world.plane.y
    assert dot == pytest.approx(0.0, abs=1e-9)