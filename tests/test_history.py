"""Tests for the bounded undo/redo manager.

Updates:
  v0.2.0 - 2026-10-19 - Cover checkpoint and rollback of both stacks.
  v0.1.0 - 2026-10-04 - Cover undo/redo inversion, redo invalidation, and capacity.
"""

from __future__ import annotations

import pytest

from core.history import HistoryManager


class _Counter:
    def __init__(self) -> None:
        self.value = 0

    def capture(self) -> int:
        return self.value

    def restore(self, value: int) -> None:
        self.value = value


def _manager(counter: _Counter, limit: int = 20) -> HistoryManager[int]:
    return HistoryManager(counter.capture, counter.restore, limit=limit)


def test_undo_and_redo_on_empty_history_are_noops() -> None:
    counter = _Counter()
    history = _manager(counter)

    assert history.undo() is False
    assert history.redo() is False
    assert counter.value == 0


def test_undo_then_redo_restores_state() -> None:
    counter = _Counter()
    history = _manager(counter)

    history.snapshot()
    counter.value = 1
    history.snapshot()
    counter.value = 2

    assert history.undo() is True
    assert counter.value == 1
    assert history.undo() is True
    assert counter.value == 0
    assert history.redo() is True
    assert counter.value == 1
    assert history.redo() is True
    assert counter.value == 2
    assert not history.can_redo


def test_new_snapshot_clears_redo_stack() -> None:
    counter = _Counter()
    history = _manager(counter)
    history.snapshot()
    counter.value = 5
    history.undo()
    assert history.can_redo

    history.snapshot()
    counter.value = 7

    assert history.redo_depth == 0
    assert history.redo() is False


def test_capacity_drops_oldest_snapshot() -> None:
    counter = _Counter()
    history = _manager(counter, limit=3)
    for value in range(1, 6):
        history.snapshot()
        counter.value = value

    assert history.undo_depth == 3
    while history.undo():
        pass
    assert counter.value == 2


def test_limit_must_be_positive() -> None:
    counter = _Counter()
    with pytest.raises(ValueError):
        _manager(counter, limit=0)


def test_clear_discards_both_stacks() -> None:
    counter = _Counter()
    history = _manager(counter)
    history.snapshot()
    history.snapshot()
    history.undo()

    history.clear()

    assert not history.can_undo
    assert not history.can_redo


def test_rollback_restores_evicted_entry_and_redo() -> None:
    counter = _Counter()
    history = _manager(counter, limit=2)
    for value in range(1, 4):
        history.snapshot()
        counter.value = value
    history.undo()
    checkpoint = history.checkpoint()

    history.snapshot()
    history.snapshot()
    history.rollback(checkpoint)

    assert (history.undo_depth, history.redo_depth) == (1, 1)
    assert history.redo() is True
    assert counter.value == 3
    assert history.undo_depth == 2
    while history.undo():
        pass
    assert counter.value == 1
