"""Camera state, DDA ray casting and player movement on a grid map."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

PIXELS = 64
ROT_SPEED = 0.025
MOV_SPEED = 0.05
DEFAULT_PITCH = 100
WALL = "1"
_NO_DELTA = 1e30

# Direction and camera plane vectors for each starting orientation.
_ORIENTATIONS = {
    "N": ((0.0, -1.00001), (0.66, 0.0)),
    "S": ((0.0, 1.00001), (-0.66, 0.0)),
    "W": ((-1.00001, 0.0), (0.0, -0.66)),
    "E": ((1.00001, 0.0), (0.0, 0.66)),
}


class Side(IntEnum):
    """Which face of a wall cell a ray struck."""

    NORTH = 0
    WEST = 1
    SOUTH = 2
    EAST = 3


@dataclass(frozen=True)
class RayHit:
    """Result of casting one screen column's ray into the map."""

    column: int
    ray_dir_x: float
    ray_dir_y: float
    map_x: int
    map_y: int
    side: Side
    perp_wall_dist: float
    line_height: int
    draw_start: int
    draw_end: int
    wall_x: float
    tex_x: int


def _is_wall(grid: Sequence[Sequence[str]], y: int, x: int) -> bool:
    """Cells outside the grid count as solid so a ray always stops."""
    if y < 0 or x < 0 or y >= len(grid):
        return True
    row = grid[y]
    if x >= len(row):
        return True
    return row[x] == WALL


def _trunc_half(value: int) -> int:
    """Integer halving that rounds toward zero."""
    return int(value / 2) if value < 0 else value // 2


@dataclass
class Camera:
    """Player position, viewing direction and camera plane in map units."""

    pos_x: float
    pos_y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float

    @classmethod
    def from_player(cls, x: int, y: int, facing: str) -> Camera:
        """Place the camera in the middle of map cell ``(x, y)`` looking ``facing``."""
        try:
            (dir_x, dir_y), (plane_x, plane_y) = _ORIENTATIONS[facing]
        except KeyError:
            raise ValueError(f"unknown facing {facing!r}") from None
        return cls(x + 0.5, y + 0.5, dir_x, dir_y, plane_x, plane_y)

    @property
    def pixel_position(self) -> tuple[float, float]:
        """Position scaled to minimap pixels."""
        return self.pos_x * PIXELS, self.pos_y * PIXELS

    def cast(
        self,
        grid: Sequence[Sequence[str]],
        column: int,
        width: int,
        height: int,
        pitch: int = DEFAULT_PITCH,
    ) -> RayHit:
        """Cast the ray for screen ``column`` and describe the wall slice it hits."""
        camera_x = 2 * column / float(width) - 1
        ray_dir_x = self.dir_x + self.plane_x * camera_x
        ray_dir_y = self.dir_y + self.plane_y * camera_x
        map_x = int(self.pos_x)
        map_y = int(self.pos_y)
        delta_x = _NO_DELTA if ray_dir_x == 0 else abs(1 / ray_dir_x)
        delta_y = _NO_DELTA if ray_dir_y == 0 else abs(1 / ray_dir_y)

        if ray_dir_x < 0:
            step_x = -1
            side_dist_x = (self.pos_x - map_x) * delta_x
        else:
            step_x = 1
            side_dist_x = (map_x + 1.0 - self.pos_x) * delta_x
        if ray_dir_y < 0:
            step_y = -1
            side_dist_y = (self.pos_y - map_y) * delta_y
        else:
            step_y = 1
            side_dist_y = (map_y + 1.0 - self.pos_y) * delta_y

        side = Side.NORTH
        while True:
            if side_dist_x < side_dist_y:
                side_dist_x += delta_x
                map_x += step_x
                side = Side.WEST if step_x == -1 else Side.EAST
            else:
                side_dist_y += delta_y
                map_y += step_y
                side = Side.NORTH if step_y == -1 else Side.SOUTH
            if _is_wall(grid, map_y, map_x):
                break

        vertical_face = side in (Side.WEST, Side.EAST)
        if vertical_face:
            perp = side_dist_x - delta_x
        else:
            perp = side_dist_y - delta_y
        line_height = int(height / perp)
        half_line = _trunc_half(line_height)
        half_screen = height // 2
        draw_start = max(-half_line + half_screen + pitch, 0)
        draw_end = half_line + half_screen + pitch
        if draw_end >= height:
            draw_end = height - 1

        if vertical_face:
            wall_x = self.pos_y + perp * ray_dir_y
        else:
            wall_x = self.pos_x + perp * ray_dir_x
        wall_x -= math.floor(wall_x)
        tex_x = int(wall_x * float(PIXELS))
        if side in (Side.EAST, Side.NORTH):
            tex_x = PIXELS - tex_x - 1

        return RayHit(
            column=column,
            ray_dir_x=ray_dir_x,
            ray_dir_y=ray_dir_y,
            map_x=map_x,
            map_y=map_y,
            side=side,
            perp_wall_dist=perp,
            line_height=line_height,
            draw_start=draw_start,
            draw_end=draw_end,
            wall_x=wall_x,
            tex_x=tex_x,
        )

    def _move(self, grid: Sequence[Sequence[str]], sign: int) -> None:
        step_x = sign * self.dir_x * MOV_SPEED
        if not _is_wall(grid, int(self.pos_y), int(self.pos_x + step_x)):
            self.pos_x += step_x
        step_y = sign * self.dir_y * MOV_SPEED
        if not _is_wall(grid, int(self.pos_y + step_y), int(self.pos_x)):
            self.pos_y += step_y

    def move_forward(self, grid: Sequence[Sequence[str]]) -> None:
        """Step along the viewing direction, sliding along walls."""
        self._move(grid, 1)

    def move_backward(self, grid: Sequence[Sequence[str]]) -> None:
        """Step against the viewing direction, sliding along walls."""
        self._move(grid, -1)

    def _rotate(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def rotate_left(self) -> None:
        """Turn the view counter-clockwise on screen."""
        self._rotate(-ROT_SPEED)

    def rotate_right(self) -> None:
        """Turn the view clockwise on screen."""
        self._rotate(ROT_SPEED)