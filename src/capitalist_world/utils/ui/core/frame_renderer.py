"""
Frame renderer for the pinned prompt and status line.

The frame occupies the last four rows of the terminal:

    R-3  prompt (cursor is left at the end of it)
    R-2  status line
    R-1  padding
    R    cursor parking row

All cursor movement and escape sequences live here. Ordinary scrolling
output goes through :meth:`FrameRenderer.append`, which tears the frame down
first so the two never fight over the same rows.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Optional, TextIO

from rich.console import Console, RenderableType
from rich.text import Text

from .terminal_mode import TerminalModeController
from .terminal_size import SizeProvider, TerminalSize, fit_to_width, size_provider_for

logger = logging.getLogger(__name__)

CLEAR_LINE = "\033[2K"
SAVE_CURSOR = "\0337"
RESTORE_CURSOR = "\0338"

FRAME_ROWS = 4
MIN_FRAME_ROWS = 4
MIN_STATUS_ROWS = 3

PROMPT_OFFSET = 3
STATUS_OFFSET = 2


def move_to(row: int, column: int = 1) -> str:
    """Return the sequence that places the cursor at a 1-based row/column."""
    return f"\033[{row};{column}H"


class FrameRenderer:
    """Paint and update the bottom-of-screen frame."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        size_provider: Optional[SizeProvider] = None,
        mode_controller: Optional[TerminalModeController] = None,
        force_ansi: bool = False,
        disable_ansi: bool = False,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._size_provider = size_provider or size_provider_for(self._stream)
        self._mode = mode_controller or TerminalModeController()
        self._force_ansi = force_ansi
        self._disable_ansi = disable_ansi
        self._render_lock = threading.Lock()

        self._ansi_capable = False
        self._frame_active = False
        self._status_region_active = False
        self._last_status: Optional[str] = None
        self._suspended = False

        self.console = Console(file=self._stream, highlight=False)

    @property
    def ansi_capable(self) -> bool:
        return self._ansi_capable

    @property
    def frame_active(self) -> bool:
        return self._frame_active

    @property
    def status_region_active(self) -> bool:
        return self._status_region_active

    @property
    def suspended(self) -> bool:
        return self._suspended

    def configure(self) -> bool:
        """
        Detect ANSI support and prepare the input device.

        Returns:
            Whether the input mode was configured (False is non-fatal)
        """
        with self._render_lock:
            try:
                supports_ansi = bool(self._stream.isatty())
            except (AttributeError, ValueError):
                supports_ansi = False

            if self._force_ansi:
                supports_ansi = True
            if self._disable_ansi:
                supports_ansi = False

            self._ansi_capable = supports_ansi
            self.console = Console(
                file=self._stream,
                force_terminal=supports_ansi,
                no_color=not supports_ansi,
                highlight=False,
            )
            logger.debug("Frame renderer configured (ansi=%s)", supports_ansi)

        configured = self._mode.configure()
        if not configured:
            logger.warning("Terminal input mode left unchanged")
        return configured

    def restore(self) -> None:
        """Revert the input device mode. Idempotent and writes nothing."""
        self._mode.restore()

    def render_full(self, prompt: str, status: str) -> None:
        """
        Paint the prompt and status line as a fresh frame.

        Args:
            prompt: Prompt text; the cursor is left at its end
            status: Status line text
        """
        with self._render_lock:
            self._suspended = False
            if self._ansi_capable:
                size = self._query_size()
                if size is not None and size[1] >= MIN_FRAME_ROWS:
                    self._render_positioned(prompt, status, size)
                    return
                logger.debug("Terminal size %s too small for frame, falling back", size)
            self._render_fallback(prompt, status)

    def update_status_only(self, status: str) -> bool:
        """
        Rewrite the status row in place, keeping the cursor where it is.

        Args:
            status: New status line text

        Returns:
            True if anything was written
        """
        with self._render_lock:
            if (
                not self._frame_active
                or not self._status_region_active
                or self._suspended
            ):
                return False
            if status == self._last_status:
                return False

            size = self._query_size()
            if size is None or size[1] < MIN_STATUS_ROWS:
                logger.debug("Disabling status updates for terminal size %s", size)
                self._status_region_active = False
                return False

            columns, rows = size
            self._write(
                SAVE_CURSOR
                + move_to(rows - STATUS_OFFSET)
                + CLEAR_LINE
                + fit_to_width(status, columns)
                + RESTORE_CURSOR
            )
            self._last_status = status
            return True

    def suspend(self) -> None:
        """Tear down the frame so ordinary output can scroll freely."""
        with self._render_lock:
            self._suspend_locked()

    def resume(self) -> None:
        """Allow the next full render to repaint the frame."""
        with self._render_lock:
            self._suspended = False

    def append(self, renderable: RenderableType) -> None:
        """Print scrolling output below the (torn down) frame."""
        with self._render_lock:
            if self._frame_active:
                self._suspend_locked()
            self.console.print(renderable)
            self._stream.flush()

    def write_input_prompt(self, prompt: str) -> bool:
        """
        Give plain output a line to type on below the status line.

        A positioned frame already leaves the cursor after its prompt, so
        this only writes after a fallback render.

        Args:
            prompt: Prompt text

        Returns:
            True if the prompt was written
        """
        with self._render_lock:
            if not self._frame_active or self._status_region_active:
                return False
            self._write(f"\n{prompt}")
            return True

    def append_text(self, content: str) -> None:
        """Append rich markup text to the output."""
        self.append(Text.from_markup(content))

    def _query_size(self) -> Optional[TerminalSize]:
        try:
            return self._size_provider()
        except Exception:
            logger.debug("Terminal size query failed", exc_info=True)
            return None

    def _render_positioned(self, prompt: str, status: str, size: TerminalSize) -> None:
        columns, rows = size
        prompt_row = rows - PROMPT_OFFSET
        status_row = rows - STATUS_OFFSET
        prompt_text = fit_to_width(prompt, columns)

        parts = ["\r", "\n" * (FRAME_ROWS - 1)]
        for row in range(prompt_row, rows + 1):
            parts.append(move_to(row) + CLEAR_LINE)
        parts.append(move_to(status_row) + fit_to_width(status, columns))
        parts.append(move_to(prompt_row) + prompt_text)
        self._write("".join(parts))

        self._frame_active = True
        self._status_region_active = True
        self._last_status = status

    def _render_fallback(self, prompt: str, status: str) -> None:
        self._write(f"{prompt}\n{status}")
        self._frame_active = True
        self._status_region_active = False
        self._last_status = status

    def _suspend_locked(self) -> None:
        if self._ansi_capable:
            if self._frame_active:
                size = self._query_size()
                if size is not None and size[1] >= MIN_FRAME_ROWS:
                    rows = size[1]
                    parts = [
                        move_to(row) + CLEAR_LINE
                        for row in range(rows, rows - FRAME_ROWS, -1)
                    ]
                    parts.append(move_to(rows))
                    self._write("".join(parts))
                else:
                    self._write("\r\n")
        else:
            self._write("\n")

        self._suspended = True
        self._frame_active = False
        self._status_region_active = False
        self._last_status = None

    def _write(self, data: str) -> None:
        self._stream.write(data)
        self._stream.flush()
