"""Substring search and autocomplete suggestions with a query cache.

Search is synchronous; debouncing interactive input is the caller's concern.
Cached results are keyed by the normalised (trimmed, lower-cased) query and
are dropped wholesale whenever the record store changes.

Updates:
  v0.2.1 - 2026-10-19 - Reject non-positive suggestion limits instead of falling back.
  v0.2.0 - 2026-10-10 - Add category suggestions and cache hit counters.
  v0.1.0 - 2026-10-04 - Introduce substring search, suggestions, and query cache.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.category_model import PromptCategory
    from models.prompt_model import Prompt

logger = logging.getLogger("prompt_vault.search")

DEFAULT_SUGGESTION_LIMIT = 8
MIN_SUGGESTION_LENGTH = 2
FRAGMENT_LENGTH = 50
TAG_PREFIX = "Tag: "
CATEGORY_PREFIX = "Category: "

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def normalise_query(term: str | None) -> str:
    """Return the cache key form of *term*."""
    return (term or "").strip().lower()


def matches(prompt: Prompt, needle: str) -> bool:
    """Return True when *needle* occurs in the title, content, tags, or notes."""
    if not needle:
        return True
    if needle in prompt.title.lower() or needle in prompt.content.lower():
        return True
    if any(needle in tag.lower() for tag in prompt.tags):
        return True
    return bool(prompt.notes) and needle in prompt.notes.lower()


def _content_fragment(content: str, needle: str) -> str | None:
    for sentence in _SENTENCE_SPLIT.split(content):
        if needle in sentence.lower():
            return sentence.strip()[:FRAGMENT_LENGTH] + "..."
    return None


class SearchIndex:
    """Case-insensitive search over the live record collection."""

    def __init__(
        self,
        records: Callable[[], Sequence[Prompt]],
        categories: Callable[[], Iterable[PromptCategory]] | None = None,
        *,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> None:
        if suggestion_limit <= 0:
            raise ValueError("suggestion_limit must be greater than zero")
        self._records = records
        self._categories = categories
        self._suggestion_limit = suggestion_limit
        self._search_cache: dict[str, frozenset[str]] = {}
        self._suggest_cache: dict[tuple[str, int], tuple[str, ...]] = {}
        self.hits = 0
        self.misses = 0

    @property
    def cache_size(self) -> int:
        return len(self._search_cache) + len(self._suggest_cache)

    def search(self, term: str | None) -> frozenset[str]:
        """Return ids of records matching *term*; an empty term matches all."""
        key = normalise_query(term)
        cached = self._search_cache.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        result = frozenset(prompt.id for prompt in self._records() if matches(prompt, key))
        self._search_cache[key] = result
        return result

    def suggest(self, term: str | None, limit: int | None = None) -> list[str]:
        """Return up to *limit* distinct suggestions in collection order."""
        if limit is not None and limit <= 0:
            raise ValueError("suggestion limit must be greater than zero")
        key = normalise_query(term)
        if len(key) < MIN_SUGGESTION_LENGTH:
            return []
        size = self._suggestion_limit if limit is None else limit
        cached = self._suggest_cache.get((key, size))
        if cached is not None:
            self.hits += 1
            return list(cached)
        self.misses += 1
        suggestions = tuple(self._iter_suggestions(key, size))
        self._suggest_cache[(key, size)] = suggestions
        return list(suggestions)

    def invalidate(self) -> None:
        """Drop every cached query result."""
        if self._search_cache or self._suggest_cache:
            logger.debug("Search cache invalidated (%d entries)", self.cache_size)
        self._search_cache.clear()
        self._suggest_cache.clear()

    def clear_cache(self) -> None:
        """Drop cached results and reset the hit counters."""
        self.invalidate()
        self.hits = 0
        self.misses = 0

    def _iter_suggestions(self, needle: str, limit: int) -> list[str]:
        found: dict[str, None] = {}

        def add(value: str) -> bool:
            found.setdefault(value, None)
            return len(found) >= limit

        for prompt in self._records():
            if needle in prompt.title.lower() and add(prompt.title):
                return list(found)
            for tag in prompt.tags:
                if needle in tag.lower() and add(f"{TAG_PREFIX}{tag}"):
                    return list(found)
            if needle in prompt.content.lower():
                fragment = _content_fragment(prompt.content, needle)
                if fragment and add(fragment):
                    return list(found)
        if self._categories is not None:
            for category in self._categories():
                if needle in category.label.lower() and add(f"{CATEGORY_PREFIX}{category.label}"):
                    break
        return list(found)


__all__ = [
    "CATEGORY_PREFIX",
    "DEFAULT_SUGGESTION_LIMIT",
    "SearchIndex",
    "TAG_PREFIX",
    "matches",
    "normalise_query",
]
