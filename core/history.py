"""Linear undo/redo over whole-state snapshots.

Updates:
  v0.3.0 - 2026-10-19 - Add checkpoint/rollback so a failed save can discard a pushed entry.
  v0.2.0 - 2026-10-12 - Capture and restore via callables so category nodes join snapshots.
  v0.1.0 - 2026-10-04 - Introduce bounded undo stack with redo invalidation.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger("prompt_vault.history")

DEFAULT_HISTORY_LIMIT = 20

StateT = TypeVar("StateT")


class HistoryManager(Generic[StateT]):
    """Keep bounded undo and redo stacks of immutable state snapshots.

    ``capture`` must return a value that later mutations cannot alter (a deep
    copy); ``restore`` replaces the live state with a previously captured one.
    """

    def __init__(
        self,
        capture: Callable[[], StateT],
        restore: Callable[[StateT], None],
        *,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        if limit <= 0:
            raise ValueError("history limit must be greater than zero")
        self._capture = capture
        self._restore = restore
        self._limit = limit
        self._undo: deque[StateT] = deque(maxlen=limit)
        self._redo: list[StateT] = []

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def snapshot(self) -> None:
        """Record the current state and drop any pending redo history."""
        # deque(maxlen) evicts the oldest entry from the left once full.
        self._undo.append(self._capture())
        self._redo.clear()

    def undo(self) -> bool:
        """Restore the previous state; return False when nothing to undo."""
        if not self._undo:
            return False
        self._redo.append(self._capture())
        self._restore(self._undo.pop())
        logger.debug("Undo applied (%d remaining)", len(self._undo))
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone state; return False when none."""
        if not self._redo:
            return False
        self._undo.append(self._capture())
        self._restore(self._redo.pop())
        logger.debug("Redo applied (%d remaining)", len(self._redo))
        return True

    def checkpoint(self) -> tuple[tuple[StateT, ...], tuple[StateT, ...]]:
        """Return the current undo and redo stacks for a later :meth:`rollback`."""
        return tuple(self._undo), tuple(self._redo)

    def rollback(self, checkpoint: tuple[tuple[StateT, ...], tuple[StateT, ...]]) -> None:
        """Reset both stacks to a value returned by :meth:`checkpoint`."""
        undo, redo = checkpoint
        self._undo = deque(undo, maxlen=self._limit)
        self._redo = list(redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()


__all__ = ["DEFAULT_HISTORY_LIMIT", "HistoryManager"]
