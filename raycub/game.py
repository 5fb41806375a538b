"""The game window, its main loop and the command-line entry point."""

from __future__ import annotations

import os
import sys

import numpy as np
import pygame

from .player import Key, find_player
from .render import Textures, load_textures, render_frame
from .scenefile import MapError, Scene, load_scene
from .settings import SCREEN_HEIGHT, SCREEN_WIDTH, WINDOW_TITLE

_KEYS = {
    pygame.K_a: Key.A,
    pygame.K_d: Key.D,
    pygame.K_s: Key.S,
    pygame.K_w: Key.W,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_ESCAPE: Key.ESCAPE,
}


class Game:
    """A loaded scene with its player and textures."""

    def __init__(self, scene: Scene, textures: Textures) -> None:
        self.scene = scene
        self.textures = textures
        self.player = find_player(scene.grid)

    def tick(self) -> np.ndarray:
        """Advance the player by one frame and render the view."""
        self.player.step(self.scene.grid)
        return render_frame(self.scene, self.player, self.textures)


def _to_surface_array(frame: np.ndarray) -> np.ndarray:
    rgb = np.stack(((frame >> 16) & 0xFF, (frame >> 8) & 0xFF, frame & 0xFF), axis=-1)
    return rgb.astype(np.uint8).transpose(1, 0, 2)


def _handle_events(game: Game) -> bool:
    """Process pending window events; returns False when the game should stop."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            key = _KEYS.get(event.key)
            if key is not None and game.player.key_down(key):
                return False
        elif event.type == pygame.KEYUP:
            key = _KEYS.get(event.key)
            if key is not None:
                game.player.key_up(key)
    return True


def run(path: str | os.PathLike) -> None:
    """Load a scene file and play it in a window until it is closed."""
    scene = load_scene(path)
    textures = load_textures(scene)
    game = Game(scene, textures)
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        while _handle_events(game):
            frame = game.tick()
            pygame.surfarray.blit_array(screen, _to_surface_array(frame))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Command entry point: play the scene file named by the single argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("There must be two arguments.")
        return 1
    try:
        run(args[0])
    except MapError as exc:
        print(exc)
        return 1
    return 0