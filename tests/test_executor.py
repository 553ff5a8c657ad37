import threading
import time

import pytest

from bsfkit.executor import ParallelExecutor


def test_all_tasks_run():
    executor = ParallelExecutor(3)
    results = []
    lock = threading.Lock()

    def make(n):
        def task():
            with lock:
                results.append(n)

        return task

    for n in range(10):
        executor.add(make(n))
    assert executor.wait() == 10
    assert sorted(results) == list(range(10))


def test_concurrency_is_bounded():
    executor = ParallelExecutor(2)
    lock = threading.Lock()
    state = {"running": 0, "peak": 0}

    def task():
        with lock:
            state["running"] += 1
            state["peak"] = max(state["peak"], state["running"])
        time.sleep(0.02)
        with lock:
            state["running"] -= 1

    for _ in range(6):
        executor.add(task)
    assert executor.wait() == 6
    assert 1 <= state["peak"] <= 2
    assert state["running"] == 0


def test_wait_without_tasks():
    assert ParallelExecutor(1).wait() == 0


def test_error_is_raised_from_wait():
    executor = ParallelExecutor(2)

    def failing():
        raise RuntimeError("boom")

    executor.add(lambda: None)
    executor.add(failing)
    with pytest.raises(RuntimeError, match="boom"):
        executor.wait()


def test_wait_result_is_cached():
    executor = ParallelExecutor(1)
    error = ValueError("bad")

    def failing():
        raise error

    executor.add(failing)
    with pytest.raises(ValueError) as first:
        executor.wait()
    with pytest.raises(ValueError) as second:
        executor.wait()
    assert first.value is error
    assert second.value is error


def test_invalid_worker_count():
    with pytest.raises(ValueError):
        ParallelExecutor(0)