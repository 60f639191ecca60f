"""
Status line orchestration.

StatusLine is the clock's observer. It owns the prompt snapshot (labels and
business values supplied by the application), formats the status columns and
drives the frame renderer. Every render runs on the serial callback queue, so
clock notifications and foreground prompt renders never interleave.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional, Protocol

from ...simulation.clock import SimulationClock
from ..threading.callback_queue import SerialCallbackQueue
from .formatters import format_columns, format_simulated_date, format_speed

logger = logging.getLogger(__name__)


class _FrameSink(Protocol):
    def render_full(self, prompt: str, status: str) -> None: ...

    def update_status_only(self, status: str) -> bool: ...


@dataclass(frozen=True)
class PromptSnapshot:
    """Text the application supplies for the next render."""

    prompt_text: str = "capitalist> "
    balance_label: str = "Balance"
    balance_value: str = ""
    profits_label: str = "Profits"
    profits_value: str = ""
    date_label: str = "Date"
    speed_label: str = "Speed"


class StatusLine:
    """Format the status columns and push them to the frame renderer."""

    def __init__(
        self,
        clock: SimulationClock,
        renderer: _FrameSink,
        callback_queue: SerialCallbackQueue,
        snapshot: Optional[PromptSnapshot] = None,
    ) -> None:
        self._clock = clock
        self._renderer = renderer
        self._queue = callback_queue
        self._snapshot = snapshot or PromptSnapshot()
        self._snapshot_lock = threading.Lock()

        self._last_status_line: Optional[str] = None
        self._has_rendered_prompt = False

    @property
    def snapshot(self) -> PromptSnapshot:
        with self._snapshot_lock:
            return self._snapshot

    def update_snapshot(self, **changes: Any) -> None:
        """Replace fields of the prompt snapshot used by later renders."""
        with self._snapshot_lock:
            self._snapshot = replace(self._snapshot, **changes)

    def build_status_line(self, simulated_time: datetime) -> str:
        """
        Build the status line for a simulated time.

        Args:
            simulated_time: Time to show in the date column

        Returns:
            Columns joined into a single line
        """
        snapshot = self.snapshot
        columns = [
            (snapshot.balance_label, snapshot.balance_value),
            (snapshot.profits_label, snapshot.profits_value),
            (snapshot.date_label, format_simulated_date(simulated_time)),
            (snapshot.speed_label, format_speed(self._clock.current_speed())),
        ]
        return format_columns(columns)

    def render_prompt(self, synchronous: bool = True) -> None:
        """
        Paint a fresh frame with the current prompt and status.

        Args:
            synchronous: Wait until the frame has been written
        """
        simulated_time = self._clock.current_time()
        if synchronous:
            self._queue.run_sync(self._render, simulated_time, True)
        else:
            self._queue.submit(self._render, simulated_time, True)

    def on_clock_advanced(
        self, clock: SimulationClock, simulated_time: datetime
    ) -> None:
        """Clock observer hook; runs on the callback queue."""
        _ = clock
        self._render(simulated_time, False)

    def _render(self, simulated_time: datetime, force_full: bool) -> None:
        status_line = self.build_status_line(simulated_time)

        if not force_full and status_line == self._last_status_line:
            return

        if force_full or not self._has_rendered_prompt:
            self._renderer.render_full(self.snapshot.prompt_text, status_line)
            self._has_rendered_prompt = True
        else:
            self._renderer.update_status_only(status_line)

        self._last_status_line = status_line
