# raycub

raycub is a small first-person maze explorer. It reads a scene from a `.cub`
file and draws it with grid raycasting (DDA wall stepping) in a pygame
window. Wall textures are loaded with Pillow.

## Installation

```
pip install .
```

## Running

```
raycub path/to/scene.cub
```

The bonus edition adds sliding doors, an animated sprite behind each door,
a minimap in the top-left corner and mouse look:

```
raycub-bonus path/to/scene.cub
```

Controls:

- `W` `A` `S` `D` move forward, left, back and right
- `Left` and `Right` turn
- `Esc` or closing the window quits
- bonus edition only: `Space` starts opening a closed door that the view
  rests on and that is less than 2.5 cells away; moving the mouse turns the view

In the plain edition, walking and turning speed scale with the frame rate. In
the bonus edition each key press moves 0.2 cells or turns by 0.05 π.

An open door in the bonus edition closes again once it has been open for more
than five seconds and the player is not standing in its cell. Only fully open
doors can be walked through.

When it is started without a scene file, or when the scene file is invalid or
cannot be read, the command prints an error message and exits with status 1.

## Scene files

A scene file must be named `*.cub`. Before the map it holds six definitions,
one per line, in any order. Blank lines between them are ignored:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE` and `EA` name the wall texture for each side; each may be
  given only once. Any image file Pillow can open will do. Texture heights
  should be powers of two, since texture rows wrap with a bit mask.
- `F` and `C` give the floor and ceiling colours as three components from
  0 to 255 separated by commas, each given only once.

The map follows, after any blank lines:

```
        1111111111111
        1000000000001
        1011000001101
111111111001000000001
1000000000000000000N1
111111111111111111111
```

- `0` is open floor and `1` is wall. Spaces lie outside the map.
- `N`, `S`, `E` or `W` places the player and sets the way it faces. There
  must be exactly one.
- In the bonus edition, `D` places a door; a map may hold at most 24.
- Walls must close the map in. Only blank lines may follow it.

The bonus edition loads its door and sprite images from paths relative to the
working directory: `./textures/d1.xpm`, `./textures/d2.xpm`,
`./textures/d3.xpm` for the first three doors and `./textures/d.xpm` for the
rest, and `./textures/ducky.xpm` or `./textures/tree.xpm` for the sprites,
alternating from door to door.

## Using it as a library

The parser and the renderer work without a window:

```python
from raycub.app import load_textures
from raycub.geometry import SCREEN_HEIGHT, SCREEN_WIDTH
from raycub.image import Image
from raycub.raycast import draw_frame
from raycub.scene import load_scene

scene = load_scene("maps/level.cub", allow_doors=False)
textures = load_textures(scene)
frame = draw_frame(Image(SCREEN_WIDTH, SCREEN_HEIGHT), scene, textures)
print(hex(frame.get(0, 0)))
```

- `raycub.scene` — `Scene`, `parse_scene`, `load_scene`, `validate_map`.
- `raycub.colors` — `parse_color`; invalid input raises `SceneError`.
- `raycub.geometry` — `Vec`, `Side`, `rotate_vector`, `gen_trgb`.
- `raycub.image` — `Image` (packed `0xAARRGGBB` pixels) and `load_texture`.
- `raycub.raycast` — ray setup, the DDA walk and `draw_frame`.
- `raycub.player` — `Move`, `move_player`, `rotate_player`.
- `raycub.app.Game` — a session with `handle_key`, `tick` and `render`.
- `raycub.bonus` — `doors`, `sprites`, `minimap`, `frame` (the `World` and
  its `draw_frame`), `motion` and `game` (`BonusGame`).

## Tests

```
pip install .[test]
pytest
```