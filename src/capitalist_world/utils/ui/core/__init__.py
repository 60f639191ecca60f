"""
Core terminal rendering infrastructure.

Only this package writes cursor control sequences. Higher-level UI modules
hand it prompt and status text rather than printing directly.
"""

from .frame_renderer import FrameRenderer
from .terminal_mode import TerminalModeController

__all__ = ["FrameRenderer", "TerminalModeController"]
