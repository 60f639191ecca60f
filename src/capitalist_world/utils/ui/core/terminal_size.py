"""
Terminal size helpers.

The frame renderer re-queries the size on every render instead of listening
for resize signals, so these helpers report failure as ``None`` rather than
inventing a fallback size that could misplace the frame.
"""

from __future__ import annotations

import os
from typing import Callable, Optional, TextIO, Tuple

TerminalSize = Tuple[int, int]
SizeProvider = Callable[[], Optional[TerminalSize]]


def query_terminal_size(stream: TextIO) -> Optional[TerminalSize]:
    """
    Get the size of the terminal attached to a stream.

    Args:
        stream: Output stream the frame is painted on

    Returns:
        Tuple of (columns, rows), or None if the size cannot be determined
    """
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None

    try:
        size = os.get_terminal_size(fd)
    except OSError:
        return None

    if size.columns <= 0 or size.lines <= 0:
        return None
    return (size.columns, size.lines)


def size_provider_for(stream: TextIO) -> SizeProvider:
    """Return a zero-argument callable that queries the stream's terminal."""

    def provider() -> Optional[TerminalSize]:
        return query_terminal_size(stream)

    return provider


def fit_to_width(text: str, columns: Optional[int]) -> str:
    """
    Truncate text so it never wraps onto the next row.

    The last column is left free because some terminals wrap as soon as it is
    written.

    Args:
        text: Single-line text to place on a row
        columns: Terminal width, or None when unknown

    Returns:
        Possibly truncated text
    """
    if columns is None:
        return text
    width = max(columns - 1, 0)
    if len(text) <= width:
        return text
    return text[:width]
