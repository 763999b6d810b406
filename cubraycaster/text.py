"""Small string helpers with the exact semantics the scene parser relies on."""

from __future__ import annotations

_WHITESPACE = "\t\n\v\f\r "
_DIGITS = "0123456789"

INVALID = -1


def atoi(text: str) -> int:
    """Convert a decimal integer, returning -1 when the text is not one.

    Leading whitespace and a single sign are accepted; the digits must run
    to the end of the text. Because -1 doubles as the failure value, an
    unsigned or negative ``1`` also comes back as -1.
    """
    rest = text.lstrip(_WHITESPACE)
    negative = False
    if rest[:1] in ("-", "+"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if not rest or any(ch not in _DIGITS for ch in rest):
        return INVALID
    magnitude = int(rest)
    # The converter's intermediate result is the negated magnitude; when that
    # happens to equal the failure value the whole conversion reports failure.
    if -magnitude == INVALID:
        return INVALID
    return -magnitude if negative else magnitude


def split(text: str, sep: str) -> list[str]:
    """Split on ``sep``, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def trim(text: str, chars: str) -> str:
    """Remove any of ``chars`` from both ends of ``text``."""
    if not chars:
        return text
    return text.strip(chars)