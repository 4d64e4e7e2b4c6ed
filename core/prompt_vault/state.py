"""Shared state, history snapshots, and persistence for the prompt vault.

Updates:
  v0.3.0 - 2026-10-19 - Roll back in-memory state when autosave fails; save all keys in one write.
  v0.2.0 - 2026-10-12 - Capture category nodes alongside records in history snapshots.
  v0.1.0 - 2026-10-05 - Extract load/save and mutation bookkeeping into mixin.
"""

from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from models.category_model import PromptCategory
from models.prompt_model import Prompt

from ..exceptions import StorageError
from ..notifications import ChangeKind, VaultChange

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Callable, Iterable, Iterator
    from datetime import datetime

    from ..category_tree import CategoryTree
    from ..history import HistoryManager
    from ..notifications import ChangeNotifier
    from ..search_index import SearchIndex
    from ..storage import DurableStore

logger = logging.getLogger("prompt_vault.store")

PROMPTS_KEY = "prompts"
FAVORITES_KEY = "favorites"
CATEGORIES_KEY = "categories"

__all__ = ["CATEGORIES_KEY", "FAVORITES_KEY", "PROMPTS_KEY", "VaultSnapshot", "VaultStateMixin"]


@dataclass(slots=True, frozen=True)
class VaultSnapshot:
    """Immutable copy of the undoable vault state."""

    records: tuple[Prompt, ...]
    categories: tuple[PromptCategory, ...]


class VaultStateMixin:
    """Own the live collections and the bookkeeping every mutation shares."""

    _store: DurableStore
    _records: list[Prompt]
    _favorites: dict[str, None]
    _selection: dict[str, None]
    _category_tree: CategoryTree
    _history: HistoryManager[VaultSnapshot]
    _search_index: SearchIndex
    _notifier: ChangeNotifier
    _clock: Callable[[], datetime]
    _autosave: bool

    # History ---------------------------------------------------------- #

    def _capture_state(self) -> VaultSnapshot:
        return VaultSnapshot(
            records=tuple(copy.deepcopy(self._records)),
            categories=self._category_tree.snapshot(),
        )

    def _restore_state(self, snapshot: VaultSnapshot) -> None:
        self._records = copy.deepcopy(list(snapshot.records))
        self._category_tree.restore(snapshot.categories)
        self._prune_dangling_ids()

    def _prune_dangling_ids(self) -> None:
        existing = {prompt.id for prompt in self._records}
        self._favorites = {key: None for key in self._favorites if key in existing}
        self._selection = {key: None for key in self._selection if key in existing}

    def undo(self) -> bool:
        """Restore the state before the most recent undoable mutation."""
        with self._mutation():
            if not self._history.undo():
                return False
            self._finish_mutation(
                VaultChange(ChangeKind.HISTORY_RESTORED, metadata={"op": "undo"})
            )
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone mutation."""
        with self._mutation():
            if not self._history.redo():
                return False
            self._finish_mutation(
                VaultChange(ChangeKind.HISTORY_RESTORED, metadata={"op": "redo"})
            )
        return True

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    # Mutation bookkeeping -------------------------------------------- #

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        """Restore the pre-mutation state if the wrapped block fails to save.

        Prompts are replaced rather than edited, so a shallow copy of the record
        list is enough. The tree is snapshotted because undo restores it in place.
        """
        records = list(self._records)
        tree = self._category_tree
        nodes = tree.snapshot()
        favorites = dict(self._favorites)
        selection = dict(self._selection)
        history = self._history.checkpoint()
        try:
            yield
        except StorageError:
            self._records = records
            tree.restore(nodes)
            self._category_tree = tree
            self._favorites = favorites
            self._selection = selection
            self._history.rollback(history)
            self._search_index.invalidate()
            logger.error("Autosave failed; in-memory changes rolled back")
            raise

    def _finish_mutation(self, change: VaultChange, *, invalidate: bool = True) -> None:
        """Invalidate derived caches, autosave, then notify subscribers."""
        if invalidate:
            self._search_index.invalidate()
        if self._autosave:
            self.save()
        self._notifier.publish(change)

    def _now(self) -> datetime:
        return self._clock()

    # Persistence ------------------------------------------------------ #

    def save(self) -> None:
        """Write categories, records, and favorites to the durable store in one step."""
        self._store.save_many(
            {
                CATEGORIES_KEY: self._category_tree.to_records(),
                PROMPTS_KEY: [prompt.to_record() for prompt in self._records],
                FAVORITES_KEY: list(self._favorites),
            }
        )
        logger.debug("Vault saved (%d prompts)", len(self._records))

    def _load_categories(self) -> list[PromptCategory] | None:
        payload = self._store.load(CATEGORIES_KEY)
        if payload is None:
            return None
        if not isinstance(payload, list):
            raise StorageError("Stored categories must be a list")
        categories: list[PromptCategory] = []
        for entry in cast("list[Any]", payload):
            if not isinstance(entry, dict):
                logger.warning("Skipping stored category that is not a mapping")
                continue
            try:
                categories.append(PromptCategory.from_record(cast("dict[str, Any]", entry)))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping invalid stored category: %s", exc)
        return categories

    def _load_records(self) -> None:
        payload = self._store.load(PROMPTS_KEY) or []
        if not isinstance(payload, list):
            raise StorageError("Stored prompts must be a list")
        records: list[Prompt] = []
        seen: set[str] = set()
        for entry in cast("list[Any]", payload):
            if not isinstance(entry, dict):
                logger.warning("Skipping stored prompt that is not a mapping")
                continue
            try:
                prompt = Prompt.from_record(cast("dict[str, Any]", entry))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping invalid stored prompt: %s", exc)
                continue
            if prompt.id in seen:
                logger.warning("Skipping stored prompt with duplicate id %s", prompt.id)
                continue
            seen.add(prompt.id)
            prompt.category = self._category_tree.resolve_or_default(prompt.category)
            records.append(prompt)
        self._records = records

        stored_favorites = self._store.load(FAVORITES_KEY) or []
        if not isinstance(stored_favorites, list):
            raise StorageError("Stored favorites must be a list")
        self._favorites = {
            str(key): None for key in cast("Iterable[Any]", stored_favorites) if str(key) in seen
        }
        logger.info(
            "Loaded %d prompts and %d favorites from store",
            len(self._records),
            len(self._favorites),
        )
