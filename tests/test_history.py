import pytest

from guidepost.guidance.history import BoundedHistory


def test_oldest_entries_drop_silently() -> None:
    history = BoundedHistory(3)
    for i in range(10):
        history.append(i)
        assert len(history) <= 3
    assert history.snapshot() == [7, 8, 9]
    assert history.latest() == 9
    assert history.capacity == 3


def test_snapshot_limit_and_copy() -> None:
    history = BoundedHistory(5)
    for i in range(5):
        history.append(i)
    assert history.snapshot(2) == [3, 4]
    assert history.snapshot(0) == []
    assert history.snapshot(50) == [0, 1, 2, 3, 4]

    snap = history.snapshot()
    snap.append(99)
    assert history.snapshot() == [0, 1, 2, 3, 4]


def test_clear() -> None:
    history = BoundedHistory(2)
    history.append("a")
    history.clear()
    assert len(history) == 0
    assert history.latest() is None


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        BoundedHistory(0)
