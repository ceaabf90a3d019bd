"""
Cancellable fixed-rate task.

RepeatingTask calls a function on a background thread at a fixed interval
until stopped. Calls never overlap: ticks that fall due while the previous
call is still running are skipped, not queued, so a slow call delays
nothing but itself.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

LOG = logging.getLogger(__name__)


class RepeatingTask:
    """
    Run `func` every `interval` seconds on a daemon thread.

    The first call happens as soon as the task starts. `stop()` prevents
    further calls; a call already in progress is allowed to finish.
    """

    def __init__(
        self,
        func: Callable[[], object],
        interval: float,
        *,
        name: str = "repeating-task",
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._func = func
        self._interval = float(interval)
        self._name = name

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()

        self._missed_ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def missed_ticks(self) -> int:
        """Ticks skipped because the previous call overran its slot."""
        return self._missed_ticks

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> bool:
        """Start ticking. Returns False if already running."""
        with self._state_lock:
            if self.is_running:
                return False
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name=self._name,
                daemon=True,
            )
            self._thread.start()
            return True

    def stop(self, wait: bool = False, timeout: Optional[float] = None) -> bool:
        """
        Stop ticking. Returns False if the task was not running.

        With `wait=True`, block until the worker thread exits (or `timeout`
        elapses). Waiting from inside `func` itself is a no-op.
        """
        with self._state_lock:
            thread = self._thread
            if thread is None or self._stop_event.is_set():
                return False
            self._stop_event.set()

        if wait and thread is not threading.current_thread():
            thread.join(timeout)
        return True

    def _run(self, stop_event: threading.Event) -> None:
        next_tick = time.monotonic()
        while not stop_event.is_set():
            delay = next_tick - time.monotonic()
            if delay > 0 and stop_event.wait(delay):
                break

            try:
                self._func()
            except Exception:  # noqa: BLE001
                LOG.exception("Unhandled error in %s", self._name)

            next_tick += self._interval
            now = time.monotonic()
            if now > next_tick:
                missed = int((now - next_tick) // self._interval) + 1
                next_tick += missed * self._interval
                self._missed_ticks += missed
                LOG.debug("%s overran; skipped %d tick(s)", self._name, missed)


__all__ = ["RepeatingTask"]
