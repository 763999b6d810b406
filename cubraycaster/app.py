"""Game window, main loop and command-line entry point."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

import numpy as np

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from cubraycaster.errors import SceneError, report_error  # noqa: E402
from cubraycaster.raycast import DEFAULT_PITCH, Camera  # noqa: E402
from cubraycaster.render import load_textures, render_frame  # noqa: E402
from cubraycaster.scene import Scene, load_scene  # noqa: E402

WINDOW_WIDTH = 960
WINDOW_HEIGHT = 720
WINDOW_TITLE = "cub3D"
FRAME_RATE = 60
USAGE = "Usage: ./cub3D <file_name>.cub"
BLANK_CELL = "X"

_FORWARD_KEYS = (pygame.K_UP, pygame.K_w)
_BACKWARD_KEYS = (pygame.K_DOWN, pygame.K_s)
_RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
_LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)


def fill_map(rows: Sequence[str]) -> list[list[str]]:
    """Return a mutable copy of the map with blank cells marked 'X'."""
    return [list(row.replace(" ", BLANK_CELL)) for row in rows]


def _any_down(pressed: Sequence[bool], keys: Sequence[int]) -> bool:
    return any(pressed[key] for key in keys)


def _apply_keys(camera: Camera, grid: list[list[str]], pressed: Sequence[bool]) -> None:
    if _any_down(pressed, _FORWARD_KEYS):
        camera.move_forward(grid)
    if _any_down(pressed, _BACKWARD_KEYS):
        camera.move_backward(grid)
    if _any_down(pressed, _RIGHT_KEYS):
        camera.rotate_right()
    if _any_down(pressed, _LEFT_KEYS):
        camera.rotate_left()


def _quit_requested(pressed: Sequence[bool]) -> bool:
    if pressed[pygame.K_ESCAPE]:
        return True
    return any(event.type == pygame.QUIT for event in pygame.event.get())


def run(scene: Scene) -> None:
    """Open the game window and run the view until it is closed or Escape is pressed."""
    textures = load_textures(scene.textures)
    grid = fill_map(scene.map_rows)
    camera = Camera.from_player(scene.player_x, scene.player_y, scene.facing)
    frame = np.zeros((WINDOW_HEIGHT, WINDOW_WIDTH, 4), dtype=np.uint8)

    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        except pygame.error as exc:
            raise SceneError("mlx_init") from exc
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        while True:
            pygame.event.pump()
            pressed = pygame.key.get_pressed()
            if _quit_requested(pressed):
                return
            _apply_keys(camera, grid, pressed)
            render_frame(
                frame,
                camera,
                grid,
                textures,
                scene.ceiling,
                scene.floor,
                DEFAULT_PITCH,
            )
            surface = pygame.image.frombuffer(
                frame.tobytes(), (WINDOW_WIDTH, WINDOW_HEIGHT), "RGBA"
            )
            screen.fill((0, 0, 0))
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and show it; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        report_error(USAGE)
        return 1
    try:
        scene = load_scene(args[0])
        run(scene)
    except SceneError as exc:
        report_error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())