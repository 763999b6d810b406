import pytest

from cubraycaster.text import atoi, split, trim


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("  255", 255),
        ("+7", 7),
        ("-13", -13),
        ("0", 0),
        ("\t\n 100", 100),
    ],
)
def test_atoi_valid(text, expected):
    assert atoi(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "12a", "12 ", "+", "-", "--3", "1.5"])
def test_atoi_invalid_returns_minus_one(text):
    assert atoi(text) == -1


def test_atoi_one_collides_with_failure_value():
    assert atoi("1") == -1
    assert atoi("-1") == -1
    assert atoi("+1") == -1


def test_split_drops_empty_pieces():
    assert split(",,a,,b,", ",") == ["a", "b"]


def test_split_no_separator():
    assert split("abc", ",") == ["abc"]


def test_split_only_separators():
    assert split("   ", " ") == []
    assert split("", ",") == []


def test_split_join_round_trip():
    pieces = ["220", "100", "0"]
    assert split(",".join(pieces), ",") == pieces


def test_trim_both_ends():
    assert trim("  12 ", " ") == "12"


def test_trim_keeps_inner_characters():
    assert trim(" 1 2 ", " ") == "1 2"


def test_trim_all_characters_in_set():
    assert trim("   ", " ") == ""


def test_trim_multiple_chars():
    assert trim("xyhixy", "xy") == "hi"


def test_trim_empty_set_unchanged():
    assert trim(" a ", "") == " a "