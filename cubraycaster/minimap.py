"""Top-down minimap drawing: map cells, grid lines and the player marker."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

import numpy as np

from cubraycaster.mapcheck import is_player
from cubraycaster.raycast import PIXELS

PLAYER_SIZE = 16
DIRECTION_LENGTH = 16

RED = 0xFF0000FF
YELLOW = 0xFFFF00FF
WHITE = 0xFFFFFFFF
BLACK = 0x000000FF
GREY = 0x00000000

_CELL_COLORS = {"1": BLACK, "0": WHITE, "X": GREY}


class Axis(IntEnum):
    """Orientation of a grid line."""

    HORIZONTAL = 0
    VERTICAL = 1


def _channels(color: int) -> tuple[int, int, int, int]:
    return ((color >> 24) & 0xFF, (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


def _put_pixel(image: np.ndarray, x: int, y: int, color: int) -> None:
    height, width = image.shape[:2]
    if not (0 <= x < width and 0 <= y < height):
        raise IndexError("Pixel is out of bounds")
    image[y, x] = _channels(color)


def check_put_pixel(image: np.ndarray, x: int, y: int) -> None:
    """Raise ValueError when ``(x, y)`` lies beyond the image's width or height."""
    height, width = image.shape[:2]
    if not 0 <= x <= width:
        raise ValueError("Invalid x")
    if not 0 <= y <= height:
        raise ValueError("Invalid y")


def draw_square(image: np.ndarray, x: int, y: int, color: int) -> None:
    """Fill the map cell whose top-left corner is ``(x, y)`` with ``color``."""
    last = PIXELS - 1
    check_put_pixel(image, x, y)
    check_put_pixel(image, x, y + last)
    check_put_pixel(image, x + last, y + last)
    height, width = image.shape[:2]
    if x + last >= width or y + last >= height:
        raise IndexError("Pixel is out of bounds")
    image[y : y + PIXELS, x : x + PIXELS] = _channels(color)


def draw_line(image: np.ndarray, x: int, y: int, axis: Axis) -> None:
    """Draw one cell-long grid line starting at ``(x, y)``.

    Bounds are always checked along the horizontal run, whichever the axis.
    """
    check_put_pixel(image, x, y)
    check_put_pixel(image, x + PIXELS - 1, y)
    for i in range(PIXELS):
        if axis == Axis.HORIZONTAL:
            _put_pixel(image, x + i, y, GREY)
        else:
            _put_pixel(image, x, y + i, GREY)


def _draw_direction(
    image: np.ndarray, px: float, py: float, dir_x: float, dir_y: float
) -> None:
    dx = (px + dir_x * DIRECTION_LENGTH) - px
    dy = (py + dir_y * DIRECTION_LENGTH) - py
    step = max(abs(dx), abs(dy))
    if step == 0:
        return
    dx /= step
    dy /= step
    x, y = px, py
    i = 1
    while i <= step:
        _put_pixel(image, int(x), int(y), RED)
        x += dx
        y += dy
        i += 1


def draw_player(
    image: np.ndarray, px: float, py: float, dir_x: float, dir_y: float
) -> None:
    """Draw the player square centred on ``(px, py)`` and its direction line."""
    centered = PLAYER_SIZE // 2
    x = int(px)
    while x - PLAYER_SIZE < px:
        y = int(py)
        while y - PLAYER_SIZE < py:
            check_put_pixel(image, x - centered, y - centered)
            _put_pixel(image, x - centered, y - centered, YELLOW)
            y += 1
        x += 1
    _draw_direction(image, px, py, dir_x, dir_y)


def draw_2d_map(
    image: np.ndarray,
    grid: Sequence[Sequence[str]],
    px: float | None,
    py: float | None,
    dir_x: float,
    dir_y: float,
) -> tuple[float, float]:
    """Draw cells, grid lines and the player; return the player's pixel position.

    When ``px`` or ``py`` is None the player is placed in the centre of the
    first player cell of the grid.
    """
    start: tuple[float, float] | None = None
    try:
        for y, row in enumerate(grid):
            for x, cell in enumerate(row):
                color = _CELL_COLORS.get(cell)
                if color is None and is_player(cell):
                    color = WHITE
                    if start is None:
                        half = PIXELS // 2
                        start = (x * PIXELS + half, y * PIXELS + half)
                if color is None:
                    raise ValueError(f"unexpected map cell {cell!r}")
                draw_square(image, x * PIXELS, y * PIXELS, color)
    except (ValueError, IndexError) as exc:
        raise ValueError("Drawing cells") from exc

    try:
        for y, row in enumerate(grid):
            for x in range(len(row)):
                draw_line(image, x * PIXELS, y * PIXELS, Axis.VERTICAL)
                draw_line(image, x * PIXELS, y * PIXELS, Axis.HORIZONTAL)
    except (ValueError, IndexError) as exc:
        raise ValueError("Drawing gridlines") from exc

    if px is None or py is None:
        if start is None:
            raise ValueError("Drawing player")
        px, py = start
    try:
        draw_player(image, px, py, dir_x, dir_y)
    except (ValueError, IndexError) as exc:
        raise ValueError("Drawing player") from exc
    return px, py