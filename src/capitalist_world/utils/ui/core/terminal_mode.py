"""
Input mode control for the interactive prompt.

Hides the echo of control characters (``^C``, ``^[[A``) while leaving
canonical line editing to the terminal driver. Output contents belong to the
frame renderer; this module only touches input attributes.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, List, Optional, TextIO

logger = logging.getLogger(__name__)


class TerminalModeController:
    """Capture, modify and restore the stdin terminal attributes."""

    def __init__(self, stdin: Optional[TextIO] = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._lock = threading.Lock()
        self._fd: Optional[int] = None
        self._original: Optional[List[Any]] = None

    @property
    def is_configured(self) -> bool:
        """True while modified attributes are applied and need restoring."""
        with self._lock:
            return self._original is not None

    def configure(self) -> bool:
        """
        Suppress control character echo on stdin.

        Returns:
            False if the attributes could not be read or applied, True otherwise
            (including when stdin is not a terminal and nothing was changed)
        """
        with self._lock:
            if self._original is not None:
                return True
            if sys.platform == "win32":
                return True

            try:
                if not self._stdin.isatty():
                    return True
                fd = self._stdin.fileno()
            except (AttributeError, OSError, ValueError):
                return True

            import termios

            try:
                original = termios.tcgetattr(fd)
            except termios.error as exc:
                logger.warning("Could not read terminal attributes: %s", exc)
                return False

            modified = list(original)
            modified[3] = modified[3] & ~getattr(termios, "ECHOCTL", 0)
            try:
                termios.tcsetattr(fd, termios.TCSANOW, modified)
            except termios.error as exc:
                logger.warning("Could not apply terminal attributes: %s", exc)
                return False

            self._fd = fd
            self._original = original
            logger.debug("Control character echo disabled on fd %d", fd)
            return True

    def restore(self) -> None:
        """Restore the captured attributes. Safe to call any number of times."""
        with self._lock:
            if self._original is None or self._fd is None:
                return

            import termios

            original, fd = self._original, self._fd
            self._original = None
            self._fd = None
            try:
                termios.tcsetattr(fd, termios.TCSANOW, original)
            except termios.error as exc:
                logger.warning("Could not restore terminal attributes: %s", exc)
