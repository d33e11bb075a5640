"""The playable game: state, key handling, frame timing and the window loop."""

from __future__ import annotations

import os
import sys
import time
from typing import Mapping

from raycub.colors import SceneError
from raycub.geometry import PI, SCREEN_HEIGHT, SCREEN_WIDTH, Side
from raycub.image import Image, load_texture
from raycub.player import Move, move_player, rotate_player
from raycub.raycast import draw_frame
from raycub.scene import Scene, load_scene

_MOVE_KEYS = frozenset(move.value for move in Move)
_TURN_KEYS = {"right": True, "left": False}
_CLOSE_MESSAGE = "ESC button pressed, closing window"

__all__ = ["Game", "load_textures", "run", "main", "PI"]


class Game:
    """A running session: the scene, its textures and the frame buffer."""

    def __init__(
        self,
        scene: Scene,
        textures: Mapping[Side, Image],
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        start: float | None = None,
    ) -> None:
        self.scene = scene
        self.textures = dict(textures)
        self.image = Image(width, height)
        self.time = time.perf_counter() if start is None else start
        self.frames_ps = float("inf")

    def handle_key(self, key: str) -> bool:
        """React to a key name; return False when the game should close."""
        if key == "escape":
            return False
        if key in _MOVE_KEYS:
            move_player(self.scene, Move(key), self.frames_ps)
        elif key in _TURN_KEYS:
            rotate_player(self.scene, _TURN_KEYS[key], self.frames_ps)
        self.render()
        return True

    def tick(self, now: float) -> float:
        """Record the time of a loop pass and return the frame rate it implies."""
        elapsed = now - self.time
        self.time = now
        self.frames_ps = 1 / elapsed if elapsed > 0 else float("inf")
        return self.frames_ps

    def render(self) -> Image:
        """Draw the current view into the frame buffer."""
        return draw_frame(self.image, self.scene, self.textures)


def load_textures(scene: Scene) -> dict[Side, Image]:
    """Load the four wall textures the scene names."""
    textures = {}
    for side in Side:
        path = scene.textures.get(side)
        if path is None:
            raise SceneError("Map error in textures")
        textures[side] = load_texture(path.strip("\n"))
    return textures


def _present(pygame, screen, image: Image) -> None:
    pixel_format = "BGRA" if sys.byteorder == "little" else "ARGB"
    surface = pygame.image.frombuffer(
        image.pixels.tobytes(), (image.width, image.height), pixel_format
    )
    screen.blit(surface, (0, 0))
    pygame.display.flip()


def run(scene_path: str | os.PathLike[str]) -> None:
    """Load a scene and play it in a window until it is closed."""
    scene = load_scene(scene_path)
    textures = load_textures(scene)
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("cub3D")
        pygame.key.set_repeat(150, 30)
        game = Game(scene, textures)
        _present(pygame, screen, game.render())
        while True:
            game.tick(time.perf_counter())
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    print(_CLOSE_MESSAGE, file=sys.stderr)
                    return
                if event.type == pygame.KEYDOWN:
                    if not game.handle_key(pygame.key.name(event.key)):
                        print(_CLOSE_MESSAGE, file=sys.stderr)
                        return
                    _present(pygame, screen, game.image)
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Command entry point: ``raycub MAP.cub``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Error: incorrect number of arguments", file=sys.stderr)
        return 1
    try:
        run(args[0])
    except SceneError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc.strerror or exc}", file=sys.stderr)
        return 1
    return 0