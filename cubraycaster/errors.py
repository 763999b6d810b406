"""Error type and error reporting for scene handling."""

from __future__ import annotations

import sys
from typing import TextIO


class SceneError(Exception):
    """Raised when a scene file or its map cannot be accepted."""


def format_error(message: str | None) -> str:
    """Return the text reported for an error: an 'Error' line, then the message."""
    text = "Error\n"
    if message:
        text += f"{message}\n"
    return text


def report_error(message: str | None, stream: TextIO | None = None) -> None:
    """Write the formatted error to ``stream``, standard error by default."""
    target = sys.stderr if stream is None else stream
    target.write(format_error(message))
    target.flush()