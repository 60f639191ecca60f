"""
Terminal UI: the pinned frame, the status line and scrolling output styles.
"""

from .core import FrameRenderer, TerminalModeController
from .status_line import PromptSnapshot, StatusLine
from .theme import ICONS, THEME

__all__ = [
    "FrameRenderer",
    "ICONS",
    "PromptSnapshot",
    "StatusLine",
    "TerminalModeController",
    "THEME",
]
