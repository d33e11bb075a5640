import pytest

from raycub.bonus.doors import (
    Door,
    DoorState,
    create_doors,
    dist_to_door,
    door_allows_view,
    door_texture_path,
    find_door,
    update_doors,
)
from raycub.bonus.sprites import make_sprite
from raycub.colors import SceneError
from raycub.geometry import Side, Vec
from raycub.image import Image
from raycub.raycast import Dda
from raycub.scene import Scene


def _door(x=2, y=1, state=DoorState.CLOSED, ratio=0.0, opened_at=0.0):
    texture = Image(4, 4)
    return Door(
        x=x,
        y=y,
        texture=texture,
        sprite=make_sprite(Vec(x + 0.5, y + 0.5), Image(4, 4)),
        state=state,
        open_ratio=ratio,
        opened_at=opened_at,
    )


def test_open_closed_door_starts_opening():
    door = _door()
    assert door.open() is True
    assert door.state == DoorState.OPENING


def test_open_ignored_when_not_closed():
    door = _door(state=DoorState.OPEN, ratio=1.0)
    assert door.open() is False
    assert door.state == DoorState.OPEN


def test_door_texture_paths():
    assert door_texture_path(1) == "./textures/d1.xpm"
    assert door_texture_path(3) == "./textures/d3.xpm"
    assert door_texture_path(4) == "./textures/d.xpm"


def test_find_door():
    first, second = _door(2, 1), _door(5, 3)
    assert find_door([first, second], 5, 3) is second
    assert find_door([first, second], 5, 1) is None


def test_view_through_open_and_closed():
    assert door_allows_view(_door(state=DoorState.OPEN, ratio=1.0), 0.5, Side.NORTH)
    assert not door_allows_view(_door(state=DoorState.CLOSED), 0.5, Side.NORTH)


@pytest.mark.parametrize("side", [Side.NORTH, Side.EAST])
def test_view_partial_north_east(side):
    door = _door(state=DoorState.OPENING, ratio=0.3)
    assert door_allows_view(door, 0.8, side)
    assert not door_allows_view(door, 0.5, side)


@pytest.mark.parametrize("side", [Side.SOUTH, Side.WEST])
def test_view_partial_south_west(side):
    door = _door(state=DoorState.CLOSING, ratio=0.3)
    assert door_allows_view(door, 0.2, side)
    assert not door_allows_view(door, 0.5, side)


def test_dist_to_door_uses_axis_of_side():
    player = Vec(2.5, 1.5)
    east = Dda(map_x=4, map_y=1, side=Side.EAST)
    north = Dda(map_x=2, map_y=1, side=Side.NORTH)
    assert dist_to_door(player, east) == pytest.approx(1.5)
    assert dist_to_door(player, north) == pytest.approx(0.5)


def test_opening_progresses():
    door = _door(state=DoorState.OPENING, ratio=0.5)
    assert update_doors([door], 0.2, 10.0, Vec(1.5, 1.5)) is True
    assert door.state == DoorState.OPENING
    assert door.open_ratio == pytest.approx(0.7)


def test_opening_completes_and_stamps_time():
    door = _door(state=DoorState.OPENING, ratio=0.5)
    update_doors([door], 1.0, 42.0, Vec(1.5, 1.5))
    assert door.state == DoorState.OPEN
    assert door.open_ratio == 1.0
    assert door.opened_at == 42.0


def test_open_door_closes_after_delay():
    door = _door(state=DoorState.OPEN, ratio=1.0, opened_at=0.0)
    assert update_doors([door], 2.0, 10.0, Vec(1.5, 1.5)) is True
    assert door.state == DoorState.CLOSED
    assert door.open_ratio == 0.0


def test_open_door_stays_while_player_inside():
    door = _door(2, 1, state=DoorState.OPEN, ratio=1.0, opened_at=0.0)
    assert update_doors([door], 0.1, 100.0, Vec(2.5, 1.5)) is False
    assert door.state == DoorState.OPEN


def test_open_door_stays_before_delay():
    door = _door(state=DoorState.OPEN, ratio=1.0, opened_at=8.0)
    assert update_doors([door], 0.1, 10.0, Vec(1.5, 1.5)) is False
    assert door.state == DoorState.OPEN


def test_create_doors_loads_textures_in_order():
    requested = []

    def loader(path):
        requested.append(path)
        return Image(8, 8)

    scene = Scene(doors=[(2, 1), (3, 4)])
    doors = create_doors(scene, loader)
    assert requested == [
        "./textures/d1.xpm",
        "./textures/ducky.xpm",
        "./textures/d2.xpm",
        "./textures/tree.xpm",
    ]
    assert [(door.x, door.y) for door in doors] == [(2, 1), (3, 4)]
    assert doors[1].sprite.position == Vec(3.5, 4.5)
    assert all(door.state == DoorState.CLOSED for door in doors)


def test_create_doors_propagates_loader_error():
    def loader(path):
        raise SceneError(f"Map error in textures: {path}")

    with pytest.raises(SceneError):
        create_doors(Scene(doors=[(2, 1)]), loader)