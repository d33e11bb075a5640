"""A scaled top-down overview of the map with the player marked on it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from raycub.geometry import Vec, gen_trgb
from raycub.image import Image
from raycub.scene import char_index

_PLAYER_MARK = 3


@dataclass(frozen=True)
class MinimapColors:
    """Colours for open floor, doors, walls and the player."""

    space: int = gen_trgb(120, 76, 133, 100)
    door: int = gen_trgb(120, 225, 163, 75)
    wall: int = gen_trgb(120, 54, 64, 136)
    player: int = gen_trgb(120, 181, 64, 60)


def map_borders(rows: Sequence[str]) -> tuple[int, int]:
    """Width of the longest row (without its newline) and the number of rows."""
    width = max((char_index(row, "\n") for row in rows), default=0)
    return width, len(rows)


def minimap_size(rows: Sequence[str], screen_width: int, screen_height: int) -> tuple[int, int, int]:
    """Pixel width, height and cell scale of the minimap for ``rows``."""
    cells_x, cells_y = map_borders(rows)
    if cells_x == 0 or cells_y == 0:
        raise ValueError("map is empty")
    if cells_y > cells_x:
        scale = (screen_height // 4) // cells_y
    else:
        scale = (screen_width // 4) // cells_x
    return cells_x * scale, cells_y * scale, scale


def tile_color(value: str, after_newline: bool, colors: MinimapColors) -> tuple[int, bool]:
    """Colour of one map cell and whether the row has ended at or before it."""
    if value == "\n":
        return colors.wall, True
    if after_newline or value in ("1", " "):
        return colors.wall, after_newline
    if value == "D":
        return colors.door, after_newline
    return colors.space, after_newline


@dataclass
class Minimap:
    """The minimap image for one map, sized for a given screen."""

    rows: Sequence[str]
    screen_width: int
    screen_height: int
    colors: MinimapColors = field(default_factory=MinimapColors)

    def __post_init__(self) -> None:
        width, height, self.scale = minimap_size(self.rows, self.screen_width, self.screen_height)
        self.image = Image(width, height)

    def _row_colors(self, row: str, cells: int) -> list[int]:
        colors = []
        ended = False
        for x in range(cells):
            color, ended = tile_color(row[x:x + 1] or "\n", ended, self.colors)
            colors.append(color)
        return colors

    def draw(self, rows: Sequence[str], player: Vec) -> Image:
        """Redraw the map cells and the player marker."""
        image, scale = self.image, self.scale
        cells_x = image.width // scale
        cells_y = image.height // scale
        for cell_y in range(cells_y):
            line = [color for color in self._row_colors(rows[cell_y], cells_x) for _ in range(scale)]
            for y in range(cell_y * scale, (cell_y + 1) * scale):
                start = y * image.width
                image.pixels[start:start + image.width] = type(image.pixels)("I", line)
        left = int(player.x * scale)
        top = int(player.y * scale)
        for y in range(top, top + _PLAYER_MARK):
            for x in range(left, left + _PLAYER_MARK):
                if 0 <= x < image.width and 0 <= y < image.height:
                    image.put(x, y, self.colors.player)
        return image