"""
Real-time driven simulation clock.

Simulated time advances at the rate of the current :class:`Speed` while a
background thread ticks every ``tick_interval`` seconds. Readers always see an
up-to-date value because every accessor advances the clock first.
"""

from __future__ import annotations

import logging
import threading
import time
import weakref
from datetime import datetime, timedelta
from typing import Callable, Optional, Protocol

from ..utils.threading.callback_queue import SerialCallbackQueue
from .speed import Speed

logger = logging.getLogger(__name__)

TimeSource = Callable[[], float]


class SimulationClockObserver(Protocol):
    def on_clock_advanced(
        self, clock: "SimulationClock", simulated_time: datetime
    ) -> None: ...


class SimulationClock:
    """Thread-safe simulated clock with weakly held observer."""

    def __init__(
        self,
        reference_time: datetime,
        tick_interval: float = 0.1,
        callback_queue: Optional[SerialCallbackQueue] = None,
        time_source: TimeSource = time.monotonic,
        initial_speed: Speed = Speed.X0,
        autostart: bool = True,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive")

        self._lock = threading.Lock()
        self._time_source = time_source
        self._tick_interval = tick_interval
        self._owns_queue = callback_queue is None
        self._callback_queue = callback_queue or SerialCallbackQueue("clock-callbacks")

        self._speed = initial_speed
        self._simulated_time = reference_time
        self._last_real_update = time_source()

        self._observer: Optional["weakref.ref[SimulationClockObserver]"] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        if autostart:
            self.start()

    def set_observer(
        self, observer: Optional[SimulationClockObserver]
    ) -> None:
        """Register the observer without keeping it alive."""
        with self._lock:
            self._observer = weakref.ref(observer) if observer is not None else None

    def set_speed(self, speed: Speed) -> None:
        """
        Change the speed, applying the old speed to the time elapsed so far.

        Args:
            speed: Already validated speed level
        """
        with self._lock:
            self._advance_locked(self._time_source())
            previous = self._speed
            self._speed = speed
            self._notify_locked()
        logger.info("Simulation speed %s -> %s", previous.label, speed.label)

    def current_time(self) -> datetime:
        """Return the simulated time after catching up with real time."""
        with self._lock:
            self._advance_locked(self._time_source())
            return self._simulated_time

    def current_speed(self) -> Speed:
        with self._lock:
            return self._speed

    def tick(self) -> bool:
        """
        Advance once and notify the observer if time moved.

        Returns:
            True if simulated time advanced
        """
        with self._lock:
            advanced = self._advance_locked(self._time_source())
            if advanced:
                self._notify_locked()
            return advanced

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start the background tick thread. Returns False if already running."""
        if self.is_running:
            return False
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop, name="simulation-clock", daemon=True
        )
        self._thread.start()
        return True

    def stop(self, timeout: float = 2.0) -> bool:
        """Stop the background tick thread. Returns False if not running."""
        thread = self._thread
        if thread is None:
            return False
        self._stop_event.set()
        if thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self._thread = None
        return True

    def close(self) -> None:
        """Stop ticking and release the callback queue if the clock created it."""
        self.stop()
        if self._owns_queue:
            self._callback_queue.shutdown(wait=False)

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self._tick_interval):
            self.tick()

    def _advance_locked(self, now: float) -> bool:
        elapsed = now - self._last_real_update
        self._last_real_update = now

        if elapsed <= 0:
            return False
        if self._speed.is_paused:
            return False
        ratio = self._speed.simulated_seconds_per_real_second

        self._simulated_time += timedelta(seconds=elapsed * ratio)
        return True

    def _notify_locked(self) -> None:
        # Enqueued under the lock so deliveries keep the order of the changes.
        observer_ref = self._observer
        if observer_ref is None:
            return
        self._callback_queue.submit(
            self._deliver, observer_ref, self._simulated_time
        )

    def _deliver(
        self,
        observer_ref: "weakref.ref[SimulationClockObserver]",
        simulated_time: datetime,
    ) -> None:
        observer = observer_ref()
        if observer is None:
            return
        observer.on_clock_advanced(self, simulated_time)
