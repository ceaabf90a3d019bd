import threading
import time

import pytest

from guidepost.guidance.scheduler import RepeatingTask


def wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_first_tick_runs_immediately() -> None:
    fired = threading.Event()
    task = RepeatingTask(fired.set, 60.0, name="test-task")
    assert task.start() is True
    try:
        assert fired.wait(2.0)
    finally:
        assert task.stop(wait=True, timeout=2.0) is True


def test_ticks_repeat_until_stopped() -> None:
    calls = []
    task = RepeatingTask(lambda: calls.append(time.monotonic()), 0.01)
    task.start()
    assert wait_for(lambda: len(calls) >= 3)
    task.stop(wait=True, timeout=2.0)

    count = len(calls)
    time.sleep(0.05)
    assert len(calls) == count
    assert task.is_running is False


def test_start_and_stop_are_idempotent() -> None:
    task = RepeatingTask(lambda: None, 60.0)
    assert task.stop() is False
    assert task.start() is True
    assert task.start() is False
    assert task.stop(wait=True, timeout=2.0) is True
    assert task.stop() is False


def test_exceptions_do_not_kill_the_worker() -> None:
    calls = []

    def flaky() -> None:
        calls.append(1)
        raise RuntimeError("boom")

    task = RepeatingTask(flaky, 0.01)
    task.start()
    assert wait_for(lambda: len(calls) >= 3)
    task.stop(wait=True, timeout=2.0)


def test_overrunning_call_skips_ticks() -> None:
    calls = []

    def slow() -> None:
        calls.append(1)
        time.sleep(0.06)

    task = RepeatingTask(slow, 0.02)
    task.start()
    assert wait_for(lambda: len(calls) >= 2)
    task.stop(wait=True, timeout=2.0)
    assert task.missed_ticks >= 1


def test_stop_from_inside_callback() -> None:
    calls = []

    def once() -> None:
        calls.append(1)
        task.stop(wait=True)

    task = RepeatingTask(once, 0.01)
    task.start()
    assert wait_for(lambda: not task.is_running)
    time.sleep(0.05)
    assert calls == [1]


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RepeatingTask(lambda: None, 0)
