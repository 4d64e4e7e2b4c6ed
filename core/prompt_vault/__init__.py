"""Prompt Vault package facade and orchestration layer.

``PromptVault`` is the single owner of the record collection, favorites,
selection, category tree, undo history, and search cache. Every mutation is
validated first, then snapshotted, then applied, after which the search cache
is invalidated, the state autosaved, and a :class:`VaultChange` published.

Updates:
  v0.3.0 - 2026-10-13 - Add catalogue import modes and shared-prompt import.
  v0.2.0 - 2026-10-12 - Include category nodes in undo history.
  v0.1.1 - 2026-10-06 - Split lifecycle, category, search, and maintenance APIs into mixins.
  v0.1.0 - 2026-10-05 - Introduce the vault facade over an injected durable store.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ..category_tree import CategoryTree, load_category_definitions
from ..history import DEFAULT_HISTORY_LIMIT, HistoryManager
from ..notifications import ChangeNotifier, ChangeSubscription, VaultChange
from ..search_index import DEFAULT_SUGGESTION_LIMIT, SearchIndex
from ..storage import DurableStore, MemoryStore
from ..view_pipeline import DEFAULT_RECENT_DAYS
from .categories import CategorySupport
from .lifecycle import PromptLifecycleMixin
from .maintenance import MaintenanceMixin
from .search import PromptSearchMixin
from .state import VaultSnapshot, VaultStateMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from models.category_model import PromptCategory

logger = logging.getLogger("prompt_vault.store")

DEFAULT_PAGE_SIZE = 12


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PromptVault(
    PromptLifecycleMixin,
    CategorySupport,
    PromptSearchMixin,
    MaintenanceMixin,
    VaultStateMixin,
):
    """In-memory prompt store with derived views over a durable store."""

    def __init__(
        self,
        store: DurableStore | None = None,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        recent_days: int = DEFAULT_RECENT_DAYS,
        page_size: int = DEFAULT_PAGE_SIZE,
        autosave: bool = True,
        category_definitions: Sequence[PromptCategory] | None = None,
        clock: Callable[[], datetime] | None = None,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        """Initialise the vault and hydrate it from *store*.

        Args:
            store: Durable key/value collaborator; defaults to a MemoryStore.
            history_limit: Maximum number of undo entries kept.
            suggestion_limit: Default number of autocomplete suggestions.
            recent_days: Window used by the ``recent`` filter and statistics.
            page_size: Default page size for queries built by ``view_query``.
            autosave: Persist after every successful mutation when True.
            category_definitions: Seed categories used when the store has none.
            clock: Callable returning the current aware datetime (tests inject one).
            notifier: Optional ChangeNotifier shared with presentation layers.
        """
        if recent_days <= 0:
            raise ValueError("recent_days must be greater than zero")
        if page_size <= 0:
            raise ValueError("page_size must be greater than zero")
        self._store = store if store is not None else MemoryStore()
        self._clock = clock or _utc_now
        self._autosave = autosave
        self._recent_days = recent_days
        self._page_size = page_size
        self._notifier = notifier or ChangeNotifier()
        self._records = []
        self._favorites = {}
        self._selection = {}

        stored_categories = self._load_categories()
        if stored_categories is None:
            stored_categories = (
                list(category_definitions)
                if category_definitions is not None
                else load_category_definitions()
            )
        self._category_tree = CategoryTree(stored_categories)
        self._load_records()

        self._history: HistoryManager[VaultSnapshot] = HistoryManager(
            self._capture_state,
            self._restore_state,
            limit=history_limit,
        )
        self._search_index = SearchIndex(
            lambda: self._records,
            lambda: iter(self._category_tree),
            suggestion_limit=suggestion_limit,
        )

    @property
    def store(self) -> DurableStore:
        return self._store

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def page_size(self) -> int:
        return self._page_size

    def subscribe(self, callback: Callable[[VaultChange], None]) -> ChangeSubscription:
        """Register *callback* for every published vault change."""
        return self._notifier.subscribe(callback)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return (
            f"PromptVault(prompts={len(self._records)}, "
            f"categories={len(self._category_tree)}, favorites={len(self._favorites)})"
        )


__all__ = ["PromptVault", "VaultSnapshot"]
