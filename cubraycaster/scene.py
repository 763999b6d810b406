"""Reading and validating ``.cub`` scene files."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from cubraycaster.errors import SceneError
from cubraycaster.mapcheck import check_map_content, check_walls, max_line_len
from cubraycaster.text import atoi, split, trim

SCENE_EXTENSION = ".cub"
TEXTURE_EXTENSION = ".png"
IDENTIFIER_ROWS = 6

_TEXTURE_IDS = {
    "N": "north",
    "NO": "north",
    "S": "south",
    "SO": "south",
    "W": "west",
    "WE": "west",
    "E": "east",
    "EA": "east",
}
_SIDES = ("north", "south", "west", "east")
_CHECK_ORDER = ("north", "south", "east", "west")


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def packed(self) -> int:
        """Return the colour as a 32-bit value laid out as 0xRRGGBBAA."""
        return (self.r << 24) | (self.g << 16) | (self.b << 8) | self.a


@dataclass(frozen=True)
class Scene:
    """A validated scene: wall textures, floor and ceiling colours, map and player."""

    north_texture: str
    south_texture: str
    west_texture: str
    east_texture: str
    floor: Color
    ceiling: Color
    map_rows: tuple[str, ...]
    player_x: int
    player_y: int
    facing: str

    @property
    def height(self) -> int:
        """Number of map rows."""
        return len(self.map_rows)

    @property
    def width(self) -> int:
        """Length of the longest map row."""
        return max_line_len(self.map_rows)

    @property
    def textures(self) -> dict[str, str]:
        """Texture paths keyed by side name."""
        return {
            "north": self.north_texture,
            "south": self.south_texture,
            "west": self.west_texture,
            "east": self.east_texture,
        }


def check_extension(file_name: str, extension: str) -> None:
    """Raise SceneError unless ``file_name`` ends with ``extension``.

    The first character of the extension is not compared, so a name ending
    in ``cub`` is accepted for ``.cub``.
    """
    if not file_name.endswith(extension[1:]):
        raise SceneError("Incorrect file extension")


def check_color_range(r: int, g: int, b: int) -> bool:
    """Tell whether all three channels lie in 0..255."""
    return all(0 <= channel <= 255 for channel in (r, g, b))


def check_rgb_values(values: Sequence[str]) -> None:
    """Raise SceneError unless the first three values hold only digits and spaces."""
    if len(values) < 3:
        raise SceneError("Invalid color value")
    for value in values[:3]:
        if any(not (ch.isascii() and ch.isdigit()) and ch != " " for ch in value):
            raise SceneError("Invalid color value")


@dataclass
class _Identifiers:
    textures: dict[str, str] = field(default_factory=dict)
    floor: Color | None = None
    ceiling: Color | None = None
    duplicate_texture: bool = False
    bare_texture_id: bool = False

    @property
    def colors_defined(self) -> bool:
        return self.floor is not None or self.ceiling is not None

    @property
    def all_textures(self) -> bool:
        return all(side in self.textures for side in _SIDES)

    def read_textures(self, line: str) -> None:
        tokens = split(line, " ")
        if not tokens:
            return
        ident = tokens[0]
        if len(ident) > 2:
            return
        side = _TEXTURE_IDS.get(ident)
        if side is not None and len(tokens) > 1:
            if side in self.textures:
                self.duplicate_texture = True
            self.textures[side] = tokens[1]
        if ident[0] in "NSWE" and len(tokens) == 1:
            self.bare_texture_id = True

    def read_color(self, line: str) -> None:
        kind = line[:1]
        if kind not in ("F", "C") or line[1:2] != " ":
            return
        values = split(line[1:], ",")
        check_rgb_values(values)
        r, g, b = (atoi(trim(value, " ")) for value in values[:3])
        if len(values) > 3:
            raise SceneError("Invalid color value")
        current = self.floor if kind == "F" else self.ceiling
        if current is not None:
            raise SceneError("Duplicate color identifier")
        if not check_color_range(r, g, b):
            raise SceneError("Color value out of range")
        if kind == "F":
            self.floor = Color(r, g, b)
        else:
            self.ceiling = Color(r, g, b)


def _read_identifiers(rows: Sequence[str]) -> _Identifiers:
    ids = _Identifiers()
    for line in rows:
        if ids.colors_defined and not ids.all_textures:
            raise SceneError("Colors are defined but not textures")
        ids.read_textures(line)
        ids.read_color(line)
    if ids.duplicate_texture:
        raise SceneError("Duplicate texture identifier")
    if ids.bare_texture_id:
        raise SceneError("Missing textures")
    if ids.floor is None or ids.ceiling is None:
        raise SceneError("Missing ceiling or floor identifier")
    if any(row.startswith("1") for row in rows[:IDENTIFIER_ROWS]):
        raise SceneError("Scene file starts with map content")
    return ids


def _check_texture_paths(textures: dict[str, str]) -> None:
    if not all(side in textures for side in _SIDES):
        raise SceneError("Fetching path of textures")
    for side in _CHECK_ORDER:
        try:
            check_extension(textures[side], TEXTURE_EXTENSION)
        except SceneError as exc:
            raise SceneError("Wrong extension (.png required)") from exc


def parse_scene(text: str) -> Scene:
    """Parse and validate the contents of a scene file."""
    rows = split(text, "\n")
    ids = _read_identifiers(rows)
    map_rows = tuple(rows[IDENTIFIER_ROWS:])
    _check_texture_paths(ids.textures)
    check_map_content(map_rows)
    x, y, facing = check_walls(map_rows)
    assert ids.floor is not None and ids.ceiling is not None
    return Scene(
        north_texture=ids.textures["north"],
        south_texture=ids.textures["south"],
        west_texture=ids.textures["west"],
        east_texture=ids.textures["east"],
        floor=ids.floor,
        ceiling=ids.ceiling,
        map_rows=map_rows,
        player_x=x,
        player_y=y,
        facing=facing,
    )


def load_scene(path: str | PathLike[str]) -> Scene:
    """Read a ``.cub`` file from disk and parse it."""
    check_extension(str(path), SCENE_EXTENSION)
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise SceneError("Opening scene file") from exc
    return parse_scene(data.decode("utf-8", errors="replace"))