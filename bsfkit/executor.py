"""Run callables on a bounded number of worker threads."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any


class ParallelExecutor:
    """Run callables concurrently, at most ``max_workers`` at a time.

    ``add`` blocks until a worker slot is free. ``wait`` joins every task and
    raises the first exception any of them raised; the outcome is remembered,
    so later calls to ``wait`` behave the same way.
    """

    def __init__(self, max_workers: int) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._guard = threading.BoundedSemaphore(max_workers)
        self._lock = threading.Lock()
        self._wait_lock = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._first_error: BaseException | None = None
        self._done = False
        self._error: BaseException | None = None
        self._finished = 0

    def add(self, fn: Callable[[], Any]) -> None:
        """Start ``fn`` on a worker, blocking until one is available."""
        self._guard.acquire()
        thread = threading.Thread(target=self._run, args=(fn,), daemon=True)
        with self._lock:
            self._threads.append(thread)
        try:
            thread.start()
        except BaseException:
            self._guard.release()
            raise

    def _run(self, fn: Callable[[], Any]) -> None:
        try:
            fn()
        except Exception as exc:
            with self._lock:
                if self._first_error is None:
                    self._first_error = exc
        finally:
            with self._lock:
                self._finished += 1
            self._guard.release()

    def wait(self) -> int:
        """Wait for all tasks and return how many ran.

        Raises the first exception one of the tasks raised.
        """
        with self._wait_lock:
            if not self._done:
                with self._lock:
                    threads = list(self._threads)
                for thread in threads:
                    thread.join()
                with self._lock:
                    self._error = self._first_error
                self._done = True
            if self._error is not None:
                raise self._error
            with self._lock:
                return self._finished