"""Textured wall rendering into an RGBA frame buffer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from os import PathLike

import numpy as np
from PIL import Image

from cubraycaster.errors import SceneError
from cubraycaster.raycast import DEFAULT_PITCH, PIXELS, Camera, RayHit, Side
from cubraycaster.scene import Color

# Order in which texture paths are checked for readability.
_SIDE_NAMES = (
    ("north", Side.NORTH),
    ("south", Side.SOUTH),
    ("west", Side.WEST),
    ("east", Side.EAST),
)
_CHANNELS = np.arange(4)


@dataclass(frozen=True, eq=False)
class Texture:
    """A wall texture held as a flat buffer of RGBA bytes, row after row."""

    width: int
    height: int
    pixels: np.ndarray

    @classmethod
    def load(cls, path: str | PathLike[str]) -> Texture:
        """Load an image file and convert it to RGBA."""
        try:
            with Image.open(path) as image:
                rgba = image.convert("RGBA")
        except OSError as exc:
            raise SceneError("Loading textures") from exc
        pixels = np.frombuffer(rgba.tobytes(), dtype=np.uint8).copy()
        return cls(rgba.width, rgba.height, pixels)

    def _offsets(self, x: int, ys: np.ndarray) -> np.ndarray:
        offsets = (ys.astype(np.int64) * self.width + x) * 4
        if offsets.size and (offsets.min() < 0 or offsets.max() + 4 > self.pixels.size):
            raise IndexError("texture coordinate out of range")
        return offsets

    def rgba(self, x: int, y: int) -> int:
        """Return the texel at ``(x, y)`` packed as 0xRRGGBBAA."""
        (start,) = self._offsets(x, np.array([y]))
        r, g, b, a = (int(value) for value in self.pixels[start : start + 4])
        return (r << 24) | (g << 16) | (b << 8) | a

    def _column(self, x: int, ys: np.ndarray) -> np.ndarray:
        """RGBA bytes of the texels at ``x`` for every row in ``ys``."""
        offsets = self._offsets(x, ys)
        return self.pixels[offsets[:, None] + _CHANNELS]


def reverse_bits(value: int) -> int:
    """Reverse the order of the 32 bits of ``value``."""
    return int(f"{value & 0xFFFFFFFF:032b}"[::-1], 2)


def load_textures(paths: Mapping[str, str | PathLike[str]]) -> dict[Side, Texture]:
    """Load the four wall textures keyed by side name ('north', 'south', ...)."""
    for name, _ in _SIDE_NAMES:
        try:
            with open(paths[name], "rb"):
                pass
        except OSError as exc:
            raise SceneError(f"Reading {name} texture path") from exc
    return {side: Texture.load(paths[name]) for name, side in _SIDE_NAMES}


def draw_ceiling_floor(frame: np.ndarray, ceiling: Color, floor: Color) -> None:
    """Fill the top two thirds with the ceiling and the next third with the floor.

    The colours are bit-reversed and stored as native 32-bit words, so each
    pixel's bytes come out in little-endian word order.
    """
    if frame.dtype != np.uint8 or not frame.flags.c_contiguous:
        raise ValueError("frame must be a contiguous uint8 RGBA array")
    height, width = frame.shape[:2]
    words = frame.reshape(-1).view("<u4")
    ceiling_count = (height // 3 * 2) * width
    floor_count = height // 3 * width
    words[:ceiling_count] = reverse_bits(ceiling.packed())
    words[ceiling_count : ceiling_count + floor_count] = reverse_bits(floor.packed())


def draw_column(
    frame: np.ndarray,
    column: int,
    hit: RayHit,
    texture: Texture,
    pitch: int = DEFAULT_PITCH,
) -> None:
    """Draw the textured wall slice described by ``hit`` into ``column``."""
    if hit.line_height <= 0 or hit.draw_end < hit.draw_start:
        return
    height = frame.shape[0]
    step = 1.0 * PIXELS / hit.line_height
    tex_pos = (hit.draw_start - pitch - height // 2 + hit.line_height // 2) * step
    count = hit.draw_end - hit.draw_start + 1
    increments = np.full(count, step)
    increments[0] = tex_pos
    positions = np.add.accumulate(increments)
    tex_y = np.trunc(positions).astype(np.int64) & (PIXELS - 1)
    frame[hit.draw_start : hit.draw_end + 1, column] = texture._column(hit.tex_x, tex_y)


def render_frame(
    frame: np.ndarray,
    camera: Camera,
    grid: Sequence[Sequence[str]],
    textures: Mapping[Side, Texture],
    ceiling: Color,
    floor: Color,
    pitch: int = DEFAULT_PITCH,
) -> None:
    """Render the full 3D view seen by ``camera`` into ``frame``."""
    height, width = frame.shape[:2]
    draw_ceiling_floor(frame, ceiling, floor)
    for column in range(width):
        hit = camera.cast(grid, column, width, height, pitch)
        draw_column(frame, column, hit, textures[hit.side], pitch)