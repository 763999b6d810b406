import pytest

from cubraycaster.errors import SceneError
from cubraycaster.mapcheck import (
    check_map_content,
    check_walls,
    find_player,
    flood_fill,
    format_map,
    is_player,
    max_line_len,
)

CLOSED = ["1111", "1N01", "1111"]
LEAKY = ["1111", "1N00", "1111"]


@pytest.mark.parametrize("char", ["N", "S", "W", "E"])
def test_is_player_true(char):
    assert is_player(char) is True


@pytest.mark.parametrize("char", ["0", "1", " ", "X", "n", ""])
def test_is_player_false(char):
    assert is_player(char) is False


def test_max_line_len():
    rows = ["11", "1111", "1"]
    assert max_line_len(rows) == len("1111")


def test_max_line_len_empty():
    assert max_line_len([]) == 0


def test_format_map():
    assert format_map(["10", "01"]) == "1 0 \n0 1 \n\n"


def test_format_map_line_count():
    text = format_map(CLOSED)
    assert text.count("\n") == len(CLOSED) + 1


@pytest.mark.parametrize("rows", [CLOSED, ["111 ", "1S01", " 111"]])
def test_check_map_content_valid(rows):
    check_map_content(rows)
    broken = rows[:1] + [rows[1].replace("1", "2", 1)] + rows[2:]
    with pytest.raises(SceneError, match="Invalid character found in map"):
        check_map_content(broken)


def test_check_map_content_invalid_char():
    with pytest.raises(SceneError, match="Invalid character found in map"):
        check_map_content(["1111", "1N21", "1111"])


def test_check_map_content_two_players():
    with pytest.raises(SceneError, match="more or less than one player"):
        check_map_content(["11111", "1NS01", "11111"])


def test_check_map_content_no_player():
    with pytest.raises(SceneError, match="more or less than one player"):
        check_map_content(["111", "101", "111"])


def test_find_player():
    assert find_player(["11111", "100W1", "11111"]) == (3, 1, "W")


def test_find_player_missing():
    with pytest.raises(SceneError, match="Finding player position"):
        find_player(["111", "101", "111"])


def test_flood_fill_enclosed_marks_cells():
    grid = [list(row) for row in CLOSED]
    assert flood_fill(grid, 1, 1) is True
    assert grid[1][1] == "V"
    assert grid[1][2] == "V"
    assert grid[0] == list(CLOSED[0])


def test_flood_fill_open_area():
    grid = [list(row) for row in LEAKY]
    assert flood_fill(grid, 1, 1) is False


def test_flood_fill_start_on_border():
    grid = [list(row) for row in ["N01", "111"]]
    assert flood_fill(grid, 0, 0) is False


def test_flood_fill_spaces_are_walkable():
    grid = [list(row) for row in ["11111", "1N  1", "11111"]]
    assert flood_fill(grid, 1, 1) is True
    assert "".join(grid[1]) == "1VVV1"


def test_flood_fill_space_leading_out():
    grid = [list(row) for row in ["11111", "1N   ", "11111"]]
    assert flood_fill(grid, 1, 1) is False


def test_flood_fill_shorter_row_is_not_a_leak():
    grid = [list(row) for row in ["11111", "1N001", "111"]]
    assert flood_fill(grid, 1, 1) is True


def test_check_walls_returns_player():
    assert check_walls(CLOSED) == (1, 1, "N")


def test_check_walls_does_not_modify_rows():
    rows = list(CLOSED)
    check_walls(rows)
    assert rows == CLOSED


def test_check_walls_open():
    with pytest.raises(SceneError, match="Surrounding walls required"):
        check_walls(LEAKY)


def test_check_walls_empty():
    with pytest.raises(SceneError, match="Getting nb of rows"):
        check_walls([])