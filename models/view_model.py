"""View query and result models for the prompt list pipeline.

Updates:
  v0.1.2 - 2026-10-19 - Reject non-integer page and page_size values.
  v0.1.1 - 2026-10-12 - Allow opting into subtree matching for category filters.
  v0.1.0 - 2026-10-05 - Introduce ViewQuery, ViewFilter, SortKey, and ViewResult.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .prompt_model import Prompt

DEFAULT_PAGE_SIZE = 12


class ViewFilter(str, Enum):
    """Record subsets a view can be restricted to."""

    ALL = "all"
    FAVORITES = "favorites"
    CATEGORY = "category"
    RECENT = "recent"
    WITH_ATTACHMENTS = "with_attachments"


class SortKey(str, Enum):
    """Orderings supported by the view pipeline."""

    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE = "title"
    RATING = "rating"
    COMPLEXITY = "complexity"


def _empty_prompts() -> list[Prompt]:
    return []


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(slots=True, frozen=True)
class ViewQuery:
    """Ephemeral description of the list a consumer wants to see."""

    filter: ViewFilter = ViewFilter.ALL
    category: str | None = None
    sort_key: SortKey = SortKey.NEWEST
    search_term: str = ""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    include_subcategories: bool = False

    def __post_init__(self) -> None:
        """Coerce enum values and validate paging bounds."""
        object.__setattr__(self, "filter", ViewFilter(self.filter))
        object.__setattr__(self, "sort_key", SortKey(self.sort_key))
        object.__setattr__(self, "search_term", self.search_term or "")
        if self.filter is ViewFilter.CATEGORY:
            category = (self.category or "").strip().lower()
            if not category:
                raise ValueError("category filter requires a category path")
            object.__setattr__(self, "category", category)
        if not _is_int(self.page) or self.page < 1:
            raise ValueError("page must be an integer >= 1")
        if not _is_int(self.page_size) or self.page_size < 1:
            raise ValueError("page_size must be an integer > 0")

    @classmethod
    def for_category(cls, path: str, **kwargs: object) -> ViewQuery:
        """Return a query restricted to the category at *path*."""
        return cls(filter=ViewFilter.CATEGORY, category=path, **kwargs)  # type: ignore[arg-type]


@dataclass(slots=True)
class ViewResult:
    """One page of records plus the pre-pagination match count."""

    items: list[Prompt] = field(default_factory=_empty_prompts)
    total_count: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size else 0


__all__ = ["DEFAULT_PAGE_SIZE", "SortKey", "ViewFilter", "ViewQuery", "ViewResult"]
