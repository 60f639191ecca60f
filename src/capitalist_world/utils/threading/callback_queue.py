"""Serial callback context shared by the clock and the status line."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class SerialCallbackQueue:
    """
    Run callables one at a time, in submission order, on a single worker thread.

    Submissions made after :meth:`shutdown` are dropped, which is how clock
    notifications addressed to a torn down consumer become silent no-ops.
    """

    def __init__(self, name: str = "callback-queue") -> None:
        self._name = name
        self._worker_ident: Optional[int] = None
        self._lock = threading.Lock()
        self._closed = False
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=name,
            initializer=self._register_worker,
        )

    def _register_worker(self) -> None:
        self._worker_ident = threading.get_ident()

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def is_worker_thread(self) -> bool:
        """Return True if the caller is running on the queue's worker."""
        return (
            self._worker_ident is not None
            and threading.get_ident() == self._worker_ident
        )

    def submit(
        self, func: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Optional[Future]:
        """
        Schedule a callable without waiting for it.

        Returns:
            A future for the result, or None if the queue is shut down
        """
        with self._lock:
            if self._closed:
                logger.debug("%s closed, dropping %r", self._name, func)
                return None
            return self._executor.submit(self._invoke, func, *args, **kwargs)

    def run_sync(
        self,
        func: Callable[..., Any],
        *args: Any,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Run a callable on the queue and wait for its result.

        Executes inline when already on the worker thread or when the queue
        has been shut down.
        """
        if self.is_worker_thread():
            return func(*args, **kwargs)

        future = self.submit(func, *args, **kwargs)
        if future is None:
            return func(*args, **kwargs)
        return future.result(timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; optionally wait for queued work to finish."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait and not self.is_worker_thread())

    def _invoke(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception:
            logger.exception("Callback %r failed on %s", func, self._name)
            raise
