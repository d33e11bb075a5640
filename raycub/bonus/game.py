"""The bonus game: doors, sprites, a minimap and mouse look."""

from __future__ import annotations

import os
import sys
import time
from typing import Mapping, Sequence

from raycub.app import load_textures
from raycub.bonus.doors import Door, create_doors, update_doors
from raycub.bonus.frame import World, draw_frame
from raycub.bonus.minimap import Minimap
from raycub.bonus.motion import move_player, rotate_player
from raycub.colors import SceneError
from raycub.geometry import (
    BONUS_SCREEN_HEIGHT,
    BONUS_SCREEN_WIDTH,
    PI,
    Side,
    rotate_vector,
)
from raycub.image import Image, load_texture
from raycub.player import Move
from raycub.scene import Scene, load_scene

_MOVE_KEYS = frozenset(move.value for move in Move)
_TURN_KEYS = {"right": True, "left": False}
_CLOSE_MESSAGE = "ESC button pressed, closing window"


class BonusGame:
    """A running bonus session: the world, its frame buffer and minimap."""

    def __init__(
        self,
        world: World,
        width: int = BONUS_SCREEN_WIDTH,
        height: int = BONUS_SCREEN_HEIGHT,
        start: float | None = None,
    ) -> None:
        self.world = world
        self.width = width
        self.height = height
        self.image = Image(width, height)
        self.minimap = Minimap(world.rows, width, height)
        self.time = time.time() if start is None else start
        world.now = self.time
        world.redraw = True

    def handle_key(self, key: str) -> bool:
        """React to a key name; return False when the game should close."""
        world = self.world
        if key == "escape":
            return False
        if key in _MOVE_KEYS:
            move_player(world, Move(key))
        elif key in _TURN_KEYS:
            rotate_player(world, _TURN_KEYS[key])
        elif key == "space":
            if world.can_open is None or not world.can_open.open():
                return True
        world.redraw = True
        return True

    def handle_mouse(self, x: int) -> bool:
        """Turn towards the pointer; return whether it should be re-centred."""
        centre = self.width // 2
        if x == centre:
            return False
        angle = ((x - centre) / self.width) * PI
        world = self.world
        world.direction = rotate_vector(world.direction, angle)
        world.plane = rotate_vector(world.plane, angle)
        world.redraw = True
        return True

    def tick(self, now: float) -> bool:
        """Advance doors to ``now`` and redraw if needed; return whether it drew."""
        world = self.world
        elapsed = now - self.time
        self.time = now
        world.now = now
        if update_doors(world.doors, elapsed, now, world.player):
            world.redraw = True
        if not (world.redraw or world.sprite):
            return False
        draw_frame(self.image, world)
        self.minimap.draw(world.rows, world.player)
        return True


def _build_world(scene: Scene, textures: Mapping[Side, Image], doors: Sequence[Door]) -> World:
    if scene.player is None:
        raise SceneError("Err: player not set on the map")
    return World(
        rows=scene.rows,
        player=scene.player,
        direction=scene.direction,
        plane=scene.plane,
        textures=dict(textures),
        doors=list(doors),
        ceiling=scene.ceiling or 0,
        floor=scene.floor or 0,
    )


def _surface(pygame, image: Image):
    pixel_format = "BGRA" if sys.byteorder == "little" else "ARGB"
    return pygame.image.frombuffer(
        image.pixels.tobytes(), (image.width, image.height), pixel_format
    )


def _present(pygame, screen, game: BonusGame) -> None:
    screen.blit(_surface(pygame, game.image), (0, 0))
    screen.blit(_surface(pygame, game.minimap.image), (0, 0))
    pygame.display.flip()


def _play(scene_path: str | os.PathLike[str]) -> None:
    scene = load_scene(scene_path, allow_doors=True)
    textures = load_textures(scene)
    doors = create_doors(scene, load_texture)
    world = _build_world(scene, textures, doors)
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((BONUS_SCREEN_WIDTH, BONUS_SCREEN_HEIGHT))
        pygame.display.set_caption("cub3D")
        pygame.key.set_repeat(150, 30)
        centre = (BONUS_SCREEN_WIDTH // 2, BONUS_SCREEN_HEIGHT // 2)
        pygame.mouse.set_visible(False)
        pygame.mouse.set_pos(centre)
        clock = pygame.time.Clock()
        game = BonusGame(world)
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    print(_CLOSE_MESSAGE, file=sys.stderr)
                    return
                if event.type == pygame.KEYDOWN and not game.handle_key(
                    pygame.key.name(event.key)
                ):
                    print(_CLOSE_MESSAGE, file=sys.stderr)
                    return
                if event.type == pygame.MOUSEMOTION and game.handle_mouse(event.pos[0]):
                    pygame.mouse.set_pos(centre)
            if game.tick(time.time()):
                _present(pygame, screen, game)
            clock.tick(120)
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Command entry point for the bonus game: ``MAP.cub``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Error: incorrect number of arguments", file=sys.stderr)
        return 1
    try:
        _play(args[0])
    except SceneError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc.strerror or exc}", file=sys.stderr)
        return 1
    return 0