"""Search, view, and analysis APIs for the prompt vault.

Updates:
  v0.2.1 - 2026-10-19 - Surface invalid suggestion limits as InvalidInputError.
  v0.2.0 - 2026-10-11 - Route list views through the filter/sort/paginate pipeline.
  v0.1.0 - 2026-10-05 - Extract search and suggestion APIs into mixin.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.view_model import SortKey, ViewFilter, ViewQuery

from ..analytics import LibraryStats, build_library_stats
from ..duplicates import DEFAULT_DUPLICATE_THRESHOLD, DuplicatePair, find_duplicates
from ..exceptions import InvalidInputError
from ..notifications import ChangeKind, VaultChange
from ..view_pipeline import filter_prompts, resolve_view

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Callable
    from datetime import datetime

    from models.prompt_model import Prompt
    from models.view_model import ViewResult

    from ..category_tree import CategoryTree
    from ..notifications import ChangeNotifier
    from ..search_index import SearchIndex

logger = logging.getLogger("prompt_vault.search")

__all__ = ["PromptSearchMixin"]


class PromptSearchMixin:
    """Read-side operations derived from the live record collection."""

    _records: list[Prompt]
    _favorites: dict[str, None]
    _category_tree: CategoryTree
    _search_index: SearchIndex
    _notifier: ChangeNotifier
    _recent_days: int
    _page_size: int

    _now: Callable[[], datetime]

    def search(self, term: str | None) -> set[str]:
        """Return ids of prompts whose title, content, tags, or notes contain *term*."""
        return set(self._search_index.search(term))

    def suggest(self, term: str | None, limit: int | None = None) -> list[str]:
        """Return autocomplete suggestions for *term* (empty below two characters)."""
        try:
            return self._search_index.suggest(term, limit)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

    def clear_cache(self) -> None:
        """Drop memoised search and suggestion results."""
        self._search_index.clear_cache()
        logger.info("Search cache cleared")
        self._notifier.publish(VaultChange(ChangeKind.CACHE_CLEARED))

    def resolve_view(self, query: ViewQuery | None = None) -> ViewResult:
        """Return one page of prompts for *query* plus the unpaginated total."""
        return resolve_view(
            self._records,
            query or ViewQuery(),
            favorites=self._favorites,
            now=self._now(),
            search=self._search_index.search,
            recent_days=self._recent_days,
        )

    def view_query(
        self,
        *,
        view_filter: ViewFilter | str = ViewFilter.ALL,
        category: str | None = None,
        sort_key: SortKey | str = SortKey.NEWEST,
        search_term: str = "",
        page: int = 1,
        page_size: int | None = None,
        include_subcategories: bool = False,
    ) -> ViewQuery:
        """Build a validated :class:`ViewQuery`, raising ``InvalidInputError``."""
        try:
            return ViewQuery(
                filter=ViewFilter(view_filter),
                category=category,
                sort_key=SortKey(sort_key),
                search_term=search_term,
                page=page,
                page_size=page_size or self._page_size,
                include_subcategories=include_subcategories,
            )
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

    def find_duplicates(
        self, threshold: float = DEFAULT_DUPLICATE_THRESHOLD
    ) -> list[DuplicatePair]:
        """Report prompt pairs whose content similarity exceeds *threshold*."""
        try:
            return find_duplicates(self._records, threshold)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

    def stats(self, query: ViewQuery | None = None) -> LibraryStats:
        """Return library statistics; word and token totals follow *query*."""
        now = self._now()
        scope = None
        if query is not None:
            scope = filter_prompts(
                self._records,
                query,
                favorites=self._favorites,
                now=now,
                search=self._search_index.search,
                recent_days=self._recent_days,
            )
        return build_library_stats(
            self._records,
            favorites=self._favorites,
            category_paths=self._category_tree.paths,
            now=now,
            scope=scope,
            recent_days=self._recent_days,
        )
