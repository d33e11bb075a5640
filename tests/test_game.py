import math

import pytest

from raycub.bonus.doors import Door, DoorState
from raycub.bonus.frame import World
from raycub.bonus.game import BonusGame, main
from raycub.bonus.minimap import MinimapColors
from raycub.bonus.sprites import make_sprite
from raycub.geometry import Side, Vec
from raycub.image import Image

ROOM = ["11111\n", "10001\n", "10001\n", "10001\n", "11111\n"]
DOOR_ROOM = ["11111\n", "10D01\n", "10001\n", "10001\n", "11111\n"]
CEILING = 0xFF101010
FLOOR = 0xFF202020


def solid(color, size=4):
    return Image(size, size, [color] * (size * size))


def make_door(state=DoorState.CLOSED):
    door = Door(
        x=2, y=1, texture=solid(0xFFAA5500), sprite=make_sprite(Vec(2.5, 1.5), solid(0xFF123456))
    )
    door.state = state
    return door


def make_game(rows=ROOM, doors=None):
    world = World(
        rows=list(rows),
        player=Vec(2.5, 2.5),
        direction=Vec(0.0, -1.0),
        plane=Vec(0.66, 0.0),
        textures={side: solid(0xFF0000FF + side) for side in Side},
        doors=list(doors or []),
        ceiling=CEILING,
        floor=FLOOR,
    )
    return BonusGame(world, width=40, height=40, start=100.0)


def test_escape_closes():
    game = make_game()
    assert game.handle_key("escape") is False


def test_first_tick_draws_then_idles():
    game = make_game()
    assert game.tick(100.1) is True
    assert game.image.get(20, 0) == CEILING
    assert game.image.get(20, 39) == FLOOR
    assert game.minimap.image.get(0, 0) == MinimapColors().wall
    assert game.tick(100.2) is False


def test_move_key_moves_and_requests_redraw():
    game = make_game()
    game.tick(100.1)
    assert game.handle_key("w") is True
    assert game.world.player.y < 2.5
    assert game.world.redraw is True
    assert game.tick(100.2) is True


def test_turn_key_rotates_view():
    game = make_game()
    game.handle_key("right")
    direction = game.world.direction
    assert direction.x != pytest.approx(0.0)
    assert math.hypot(direction.x, direction.y) == pytest.approx(1.0)


def test_space_without_door_does_nothing():
    game = make_game()
    game.tick(100.1)
    assert game.handle_key("space") is True
    assert game.world.redraw is False


def test_space_opens_nearby_closed_door():
    door = make_door()
    game = make_game(rows=DOOR_ROOM, doors=[door])
    game.tick(100.1)
    assert game.world.can_open is door
    game.handle_key("space")
    assert door.state == DoorState.OPENING
    assert game.world.redraw is True


def test_space_ignores_door_already_moving():
    door = make_door(DoorState.CLOSING)
    game = make_game(rows=DOOR_ROOM, doors=[door])
    game.world.can_open = door
    game.world.redraw = False
    game.handle_key("space")
    assert door.state == DoorState.CLOSING
    assert game.world.redraw is False


def test_tick_advances_opening_door():
    door = make_door(DoorState.OPENING)
    game = make_game(rows=DOOR_ROOM, doors=[door])
    assert game.tick(100.25) is True
    assert door.open_ratio == pytest.approx(0.25)
    assert game.world.now == pytest.approx(100.25)


def test_mouse_at_centre_does_nothing():
    game = make_game()
    game.world.redraw = False
    assert game.handle_mouse(20) is False
    assert game.world.direction == Vec(0.0, -1.0)
    assert game.world.redraw is False


def test_mouse_offset_turns_view():
    game = make_game()
    assert game.handle_mouse(30) is True
    direction = game.world.direction
    assert direction.x > 0
    assert math.hypot(direction.x, direction.y) == pytest.approx(1.0)
    assert game.world.redraw is True


def test_mouse_left_and_right_cancel():
    game = make_game()
    game.handle_mouse(30)
    game.handle_mouse(10)
    assert game.world.direction.x == pytest.approx(0.0, abs=1e-12)
    assert game.world.direction.y == pytest.approx(-1.0)


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "incorrect number of arguments" in capsys.readouterr().err


def test_main_rejects_wrong_extension(capsys):
    assert main(["map.txt"]) == 1
    assert "*.cub" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert capsys.readouterr().err.startswith("Error")