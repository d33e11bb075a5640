"""Reading and validating ``.cub`` scene descriptions."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from itertools import takewhile
from pathlib import Path
from typing import Iterable

from raycub.colors import SceneError, parse_color
from raycub.geometry import PI, Side, Vec, rotate_vector

MAX_DOORS = 24
HEADER_ENTRIES = 6

_TEXTURE_KEYS = {
    "NO": Side.NORTH,
    "SO": Side.SOUTH,
    "EA": Side.EAST,
    "WE": Side.WEST,
}
_COLOR_KEYS = frozenset({"F", "C"})
_DIRECTIONS = {
    "N": Vec(0.0, -1.0),
    "S": Vec(0.0, 1.0),
    "E": Vec(1.0, 0.0),
    "W": Vec(-1.0, 0.0),
}
_PLANE_LENGTH = 0.66


@dataclass
class Scene:
    """Everything a scene file describes: textures, colours, map and player."""

    textures: dict[Side, str] = field(default_factory=dict)
    floor: int | None = None
    ceiling: int | None = None
    rows: list[str] = field(default_factory=list)
    player: Vec | None = None
    direction: Vec = field(default_factory=Vec)
    plane: Vec = field(default_factory=Vec)
    doors: list[tuple[int, int]] = field(default_factory=list)

    def set_player(self, x: int, y: int) -> None:
        """Place the player on cell (x, y), facing the way its letter says."""
        if self.player is not None:
            raise SceneError("Err: more than one player")
        row = self.rows[y]
        self.player = Vec(x + 0.5, y + 0.5)
        self.direction = direction_for(row[x])
        self.plane = rotate_vector(self.direction, PI / 2) * _PLANE_LENGTH
        self.rows[y] = row[:x] + "0" + row[x + 1:]


def check_map_path(path: str | os.PathLike[str]) -> Path:
    """Ensure ``path`` names a ``*.cub`` file and return it as a Path."""
    text = os.fspath(path)
    if len(text) < 5 or not text.endswith(".cub"):
        raise SceneError("Error: map file has to be of format *.cub")
    return Path(text)


def char_index(row: str, char: str) -> int:
    """Index of the first ``char`` in ``row``, or the length of ``row``."""
    index = row.find(char)
    return len(row) if index == -1 else index


def trim_newlines(rows: Iterable[str]) -> list[str]:
    """Drop blank rows after the map; a map row after a blank one is an error."""
    kept: list[str] = []
    ended = False
    for row in rows:
        blank = row.startswith("\n")
        if ended and not blank:
            raise SceneError("Error parcing the map")
        if blank:
            ended = True
        else:
            kept.append(row)
    return kept


def should_be_wall(rows: list[str], x: int, y: int) -> bool:
    """Tell whether cell (x, y) lies on the edge of the walkable area."""
    row = rows[y]
    has_above = y > 0
    has_below = y + 1 < len(rows)
    if has_above and char_index(rows[y - 1], "\n") <= x + 1:
        return True
    if has_below and char_index(rows[y + 1], "\n") <= x + 1:
        return True
    after = row[x + 1:x + 2]
    if x == 0 or after in ("\n", " ") or row[x - 1] == " ":
        return True
    if not has_below or not has_above:
        return True
    above, below = rows[y - 1], rows[y + 1]
    if above[x] == " " or below[x] == " ":
        return True
    return " " in (below[x + 1], above[x - 1], above[x + 1], below[x - 1])


def direction_for(char: str) -> Vec:
    """The unit vector a player letter (N, S, E or W) faces."""
    try:
        return _DIRECTIONS[char]
    except KeyError:
        raise SceneError(f"Err: {char!r} is not a player direction") from None


def _check_cell(scene: Scene, x: int, y: int, char: str, allow_doors: bool) -> None:
    if should_be_wall(scene.rows, x, y):
        if char not in ("1", " "):
            raise SceneError("Err: map has to be surrounded by walls")
        return
    if char in _DIRECTIONS:
        scene.set_player(x, y)
    elif allow_doors and char == "D":
        if len(scene.doors) == MAX_DOORS:
            raise SceneError("Err: too many doors")
        scene.doors.append((x, y))
    elif char not in ("0", "1", " "):
        raise SceneError("Err: not allowed chars in map")


def validate_map(scene: Scene, allow_doors: bool = False) -> Scene:
    """Check the map is closed and well formed, and place the player."""
    scene.rows = trim_newlines(scene.rows)
    for y, row in enumerate(scene.rows):
        for x, char in enumerate(takewhile(lambda ch: ch != "\n", row)):
            _check_cell(scene, x, y, char, allow_doors)
    if scene.player is None:
        raise SceneError("Err: player not set on the map")
    return scene


def _read_texture(scene: Scene, tokens: list[str]) -> None:
    side = _TEXTURE_KEYS[tokens[0]]
    if len(tokens) != 2 or side in scene.textures:
        raise SceneError("Map error in textures")
    scene.textures[side] = tokens[1]


def _read_color(scene: Scene, tokens: list[str]) -> None:
    if len(tokens) != 2:
        raise SceneError("Map error in colors")
    attribute = "floor" if tokens[0] == "F" else "ceiling"
    if getattr(scene, attribute) is not None:
        raise SceneError("Map error in colors")
    setattr(scene, attribute, parse_color(tokens[1]))


def _read_header_line(scene: Scene, line: str) -> None:
    tokens = [token for token in line.strip(" \n").split(" ") if token]
    key = tokens[0] if tokens else None
    if key in _TEXTURE_KEYS:
        _read_texture(scene, tokens)
    elif key in _COLOR_KEYS:
        _read_color(scene, tokens)
    else:
        raise SceneError("Err: incorrect input in textures and colors")


def parse_scene(lines: Iterable[str], allow_doors: bool = False) -> Scene:
    """Build and validate a scene from lines that keep their line endings."""
    scene = Scene()
    stream = iter(lines)
    entries = 0
    while entries < HEADER_ENTRIES:
        line = next(stream, None)
        if line is None:
            raise SceneError("Err: incorrect input in textures and colors")
        if line.startswith("\n"):
            continue
        _read_header_line(scene, line)
        entries += 1
    first = next((line for line in stream if not line.startswith("\n")), None)
    if first is None:
        raise SceneError("Error parcing the map")
    scene.rows = [first, *stream]
    return validate_map(scene, allow_doors)


def load_scene(path: str | os.PathLike[str], allow_doors: bool = False) -> Scene:
    """Read and validate the scene file at ``path``."""
    checked = check_map_path(path)
    with checked.open(encoding="utf-8") as handle:
        return parse_scene(handle, allow_doors)