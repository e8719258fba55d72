"""Single foreground execution context: FIFO task queue plus pump.

Background threads hand work over with ``invoke_later``; only the thread
running the pump executes it, in submission order.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from queue import Empty, Queue

logger = logging.getLogger(__name__)

Task = Callable[[], object]


class ForegroundExecutor:
    """Serialize tasks onto whichever thread pumps this executor."""

    def __init__(self) -> None:
        self._tasks: Queue[Task | None] = Queue()
        self._stopped = threading.Event()
        self._pump_thread: int | None = None

    def invoke_later(self, task: Task) -> None:
        """Queue ``task`` without waiting for it to run."""
        self._tasks.put(task)

    def is_foreground_thread(self) -> bool:
        """Return whether the caller is the thread currently pumping tasks."""
        return self._pump_thread == threading.get_ident()

    def ensure_foreground(self, what: str) -> None:
        if not self.is_foreground_thread():
            raise RuntimeError(f"{what} must run on the foreground executor")

    def _run(self, task: Task) -> None:
        try:
            task()
        except Exception:
            logger.exception("foreground task failed")

    def run_pending(self) -> int:
        """Run every queued task on the calling thread; return how many ran."""
        ran = 0
        previous = self._pump_thread
        self._pump_thread = threading.get_ident()
        try:
            while True:
                try:
                    task = self._tasks.get_nowait()
                except Empty:
                    break
                if task is None:
                    continue
                self._run(task)
                ran += 1
        finally:
            self._pump_thread = previous
        return ran

    def run_until_stopped(self, poll_seconds: float = 0.25) -> None:
        """Pump tasks on the calling thread until ``stop`` is called."""
        self._pump_thread = threading.get_ident()
        try:
            while not self._stopped.is_set():
                try:
                    task = self._tasks.get(timeout=poll_seconds)
                except Empty:
                    continue
                if task is None:
                    continue
                self._run(task)
        finally:
            self._pump_thread = None

    def stop(self) -> None:
        """Ask ``run_until_stopped`` to return; safe from any thread."""
        self._stopped.set()
        # Wake a pump blocked on an empty queue.
        self._tasks.put(None)

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def pending_count(self) -> int:
        return self._tasks.qsize()


__all__ = ["ForegroundExecutor", "Task"]
