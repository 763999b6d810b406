"""Validation of the map part of a scene: content, player and enclosure."""

from __future__ import annotations

from collections.abc import Sequence

from cubraycaster.errors import SceneError

PLAYER_CHARS = "NSWE"
VALID_CHARS = " 10" + PLAYER_CHARS
VISITED = "V"
_OPEN = "0 "


def is_player(char: str) -> bool:
    """Tell whether ``char`` is a player start marker."""
    return len(char) == 1 and char in PLAYER_CHARS


def max_line_len(rows: Sequence[str]) -> int:
    """Length of the longest row, 0 for an empty map."""
    return max((len(row) for row in rows), default=0)


def format_map(rows: Sequence[str]) -> str:
    """Render the map with a space after every cell and a blank line at the end."""
    lines = ("".join(f"{cell} " for cell in row) + "\n" for row in rows)
    return "".join(lines) + "\n"


def check_map_content(rows: Sequence[str]) -> None:
    """Raise SceneError unless every cell is valid and there is exactly one player."""
    player_count = 0
    for row in rows:
        for cell in row:
            if cell not in VALID_CHARS:
                raise SceneError("Invalid character found in map")
            if is_player(cell):
                player_count += 1
    if player_count != 1:
        raise SceneError("There's more or less than one player in the map")


def find_player(rows: Sequence[str]) -> tuple[int, int, str]:
    """Return ``(x, y, facing)`` of the first player marker in the map."""
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if is_player(cell):
                return x, y, cell
    raise SceneError("Finding player position")


def _on_border(grid: list[list[str]], y: int, x: int) -> bool:
    return y in (0, len(grid) - 1) or x in (0, len(grid[y]) - 1)


def _is_open(grid: list[list[str]], y: int, x: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[y]) and grid[y][x] in _OPEN


def flood_fill(grid: list[list[str]], y: int, x: int) -> bool:
    """Mark every cell reachable from ``(y, x)`` and report whether it is enclosed.

    Floor and blank cells are walkable. Reaching a cell on the first or last
    row, or on the first or last column of its own row, means the area is
    open. Visited cells are overwritten with 'V'; border cells are left as is.
    """
    if _on_border(grid, y, x):
        return False
    enclosed = True
    grid[y][x] = VISITED
    stack = [(y, x)]
    while stack:
        cy, cx = stack.pop()
        for ny, nx in ((cy - 1, cx), (cy + 1, cx), (cy, cx - 1), (cy, cx + 1)):
            if not _is_open(grid, ny, nx):
                continue
            if _on_border(grid, ny, nx):
                enclosed = False
                continue
            grid[ny][nx] = VISITED
            stack.append((ny, nx))
    return enclosed


def check_walls(rows: Sequence[str]) -> tuple[int, int, str]:
    """Check that the player's area is closed by walls; return the player."""
    if not rows:
        raise SceneError("Getting nb of rows")
    x, y, facing = find_player(rows)
    grid = [list(row) for row in rows]
    if not flood_fill(grid, y, x):
        raise SceneError("Surrounding walls required")
    return x, y, facing