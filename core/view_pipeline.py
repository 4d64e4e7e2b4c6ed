"""Filter, sort, and paginate stages for prompt list views.

Updates:
  v0.2.0 - 2026-10-12 - Support subtree-inclusive category filtering as an opt-in.
  v0.1.0 - 2026-10-05 - Introduce the filter/sort/paginate pipeline.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Sequence
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from models.category_model import is_within
from models.view_model import SortKey, ViewFilter, ViewQuery, ViewResult

from .metrics import complexity

if TYPE_CHECKING:
    from models.prompt_model import Prompt

DEFAULT_RECENT_DAYS = 7


def filter_prompts(
    prompts: Iterable[Prompt],
    query: ViewQuery,
    *,
    favorites: Collection[str],
    now: datetime,
    search: Callable[[str], Collection[str]] | None = None,
    recent_days: int = DEFAULT_RECENT_DAYS,
) -> list[Prompt]:
    """Return prompts passing the query filter and optional search term."""
    selected = list(prompts)
    if query.filter is ViewFilter.FAVORITES:
        selected = [prompt for prompt in selected if prompt.id in favorites]
    elif query.filter is ViewFilter.CATEGORY:
        path = query.category or ""
        if query.include_subcategories:
            selected = [prompt for prompt in selected if is_within(prompt.category, path)]
        else:
            selected = [prompt for prompt in selected if prompt.category == path]
    elif query.filter is ViewFilter.RECENT:
        cutoff = now - timedelta(days=recent_days)
        selected = [prompt for prompt in selected if prompt.created_at > cutoff]
    elif query.filter is ViewFilter.WITH_ATTACHMENTS:
        selected = [prompt for prompt in selected if prompt.attachments]

    if query.search_term.strip() and search is not None:
        matched = search(query.search_term)
        selected = [prompt for prompt in selected if prompt.id in matched]
    return selected


def sort_prompts(prompts: Sequence[Prompt], sort_key: SortKey) -> list[Prompt]:
    """Return a stably sorted copy of *prompts*."""
    if sort_key is SortKey.NEWEST:
        return sorted(prompts, key=lambda prompt: prompt.created_at, reverse=True)
    if sort_key is SortKey.OLDEST:
        return sorted(prompts, key=lambda prompt: prompt.created_at)
    if sort_key is SortKey.TITLE:
        return sorted(prompts, key=lambda prompt: prompt.title.casefold())
    if sort_key is SortKey.RATING:
        return sorted(prompts, key=lambda prompt: prompt.rating, reverse=True)
    return sorted(prompts, key=complexity, reverse=True)


def paginate(prompts: Sequence[Prompt], page: int, page_size: int) -> list[Prompt]:
    """Return the slice for a 1-based *page*; pages past the end are empty."""
    start = (page - 1) * page_size
    return list(prompts[start : start + page_size])


def resolve_view(
    prompts: Iterable[Prompt],
    query: ViewQuery,
    *,
    favorites: Collection[str],
    now: datetime,
    search: Callable[[str], Collection[str]] | None = None,
    recent_days: int = DEFAULT_RECENT_DAYS,
) -> ViewResult:
    """Run the filter, sort, and paginate stages for *query*."""
    filtered = filter_prompts(
        prompts,
        query,
        favorites=favorites,
        now=now,
        search=search,
        recent_days=recent_days,
    )
    ordered = sort_prompts(filtered, query.sort_key)
    return ViewResult(
        items=paginate(ordered, query.page, query.page_size),
        total_count=len(ordered),
        page=query.page,
        page_size=query.page_size,
    )


__all__ = [
    "DEFAULT_RECENT_DAYS",
    "filter_prompts",
    "paginate",
    "resolve_view",
    "sort_prompts",
]
