import numpy as np
import pytest
from PIL import Image

from cubraycaster.errors import SceneError
from cubraycaster.raycast import PIXELS, Camera, Side
from cubraycaster.render import (
    Texture,
    draw_ceiling_floor,
    draw_column,
    load_textures,
    render_frame,
    reverse_bits,
)
from cubraycaster.scene import Color

GRID = ["11111", "10001", "10N01", "10001", "11111"]


def packed(pixel):
    r, g, b, a = (int(v) for v in pixel)
    return (r << 24) | (g << 16) | (b << 8) | a


def uniform_texture(color):
    data = np.tile(np.array([color.r, color.g, color.b, color.a], dtype=np.uint8), PIXELS * PIXELS)
    return Texture(PIXELS, PIXELS, data)


def save_png(path, rgba):
    Image.new("RGBA", (PIXELS, PIXELS), rgba).save(path)
    return path


def test_reverse_bits_lowest_bit_becomes_highest():
    assert reverse_bits(1) == 0x80000000


def test_reverse_bits_round_trip():
    for value in (0, 0x12345678, 0xDEADBEEF, 0xFFFFFFFF):
        assert reverse_bits(reverse_bits(value)) == value
    assert reverse_bits(0xFFFFFFFF) == 0xFFFFFFFF


def test_texture_load_and_rgba(tmp_path):
    path = save_png(tmp_path / "t.png", (10, 20, 30, 255))
    texture = Texture.load(path)
    assert (texture.width, texture.height) == (PIXELS, PIXELS)
    assert texture.rgba(0, 0) == Color(10, 20, 30).packed()
    assert texture.rgba(PIXELS - 1, PIXELS - 1) == Color(10, 20, 30).packed()


def test_texture_rgba_out_of_range():
    texture = uniform_texture(Color(1, 2, 3))
    with pytest.raises(IndexError):
        texture.rgba(0, PIXELS)


def test_load_textures_by_side(tmp_path):
    colors = {
        "north": Color(1, 0, 0),
        "south": Color(0, 2, 0),
        "west": Color(0, 0, 3),
        "east": Color(4, 4, 4),
    }
    paths = {
        name: save_png(tmp_path / f"{name}.png", (c.r, c.g, c.b, c.a))
        for name, c in colors.items()
    }
    textures = load_textures(paths)
    assert textures[Side.NORTH].rgba(5, 5) == colors["north"].packed()
    assert textures[Side.SOUTH].rgba(5, 5) == colors["south"].packed()
    assert textures[Side.WEST].rgba(5, 5) == colors["west"].packed()
    assert textures[Side.EAST].rgba(5, 5) == colors["east"].packed()


def test_load_textures_missing_path(tmp_path):
    good = save_png(tmp_path / "ok.png", (0, 0, 0, 255))
    paths = {"north": tmp_path / "missing.png", "south": good, "west": good, "east": good}
    with pytest.raises(SceneError, match="Reading north texture path"):
        load_textures(paths)


def test_load_textures_not_an_image(tmp_path):
    good = save_png(tmp_path / "ok.png", (0, 0, 0, 255))
    bad = tmp_path / "bad.png"
    bad.write_text("not an image")
    paths = {"north": good, "south": good, "west": bad, "east": good}
    with pytest.raises(SceneError, match="Loading textures"):
        load_textures(paths)


def test_ceiling_and_floor_thirds():
    frame = np.zeros((6, 4, 4), dtype=np.uint8)
    draw_ceiling_floor(frame, Color(255, 255, 255), Color(0, 0, 0))
    assert {packed(p) for p in frame[:4].reshape(-1, 4)} == {Color(255, 255, 255).packed()}
    assert {packed(p) for p in frame[4:].reshape(-1, 4)} == {Color(0, 0, 0).packed()}


def test_ceiling_floor_leaves_remainder_rows():
    frame = np.zeros((7, 3, 4), dtype=np.uint8)
    draw_ceiling_floor(frame, Color(255, 255, 255), Color(0, 0, 0))
    assert not frame[6].any()
    assert frame[5].any()


def test_ceiling_bits_are_reversed_within_channels():
    frame = np.zeros((3, 1, 4), dtype=np.uint8)
    draw_ceiling_floor(frame, Color(1, 0, 0), Color(0, 0, 0))
    assert frame[0, 0].tolist() == [128, 0, 0, 255]


def test_draw_column_paints_wall_slice_only():
    camera = Camera.from_player(2, 2, "N")
    color = Color(10, 20, 30)
    frame = np.zeros((30, 20, 4), dtype=np.uint8)
    hit = camera.cast(GRID, 10, 20, 30, 0)
    assert hit.draw_start <= hit.draw_end
    draw_column(frame, 10, hit, uniform_texture(color), 0)
    wall = frame[hit.draw_start : hit.draw_end + 1, 10]
    assert {packed(p) for p in wall} == {color.packed()}
    assert not frame[: hit.draw_start, 10].any()
    assert not frame[hit.draw_end + 1 :, 10].any()
    assert not np.delete(frame, 10, axis=1).any()


def test_render_frame_uses_texture_of_hit_side():
    camera = Camera.from_player(2, 2, "N")
    colors = {
        Side.NORTH: Color(200, 0, 0),
        Side.SOUTH: Color(0, 200, 0),
        Side.WEST: Color(0, 0, 200),
        Side.EAST: Color(200, 200, 0),
    }
    textures = {side: uniform_texture(c) for side, c in colors.items()}
    height, width = 40, 32
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    render_frame(frame, camera, GRID, textures, Color(255, 255, 255), Color(0, 0, 0), 0)
    for column in range(width):
        hit = camera.cast(GRID, column, width, height, 0)
        assert packed(frame[hit.draw_start, column]) == colors[hit.side].packed()