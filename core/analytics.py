"""Library statistics for dashboards and the CLI summary.

Updates:
  v0.1.1 - 2026-10-19 - Count "created today" on the UTC calendar day.
  v0.1.0 - 2026-10-08 - Introduce library totals, category counts, and text volume.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING

from .metrics import token_estimate, word_count
from .view_pipeline import DEFAULT_RECENT_DAYS

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence

    from models.prompt_model import Prompt


def _empty_counts() -> dict[str, int]:
    return {}


@dataclass(slots=True, frozen=True)
class LibraryStats:
    """Aggregate counters describing the prompt library."""

    total_prompts: int
    total_favorites: int
    total_categories: int
    created_today: int
    recent: int
    with_attachments: int
    total_words: int
    total_tokens: int
    category_counts: dict[str, int] = field(default_factory=_empty_counts)

    def to_dict(self) -> dict[str, object]:
        return {
            "total_prompts": self.total_prompts,
            "total_favorites": self.total_favorites,
            "total_categories": self.total_categories,
            "created_today": self.created_today,
            "recent": self.recent,
            "with_attachments": self.with_attachments,
            "total_words": self.total_words,
            "total_tokens": self.total_tokens,
            "category_counts": dict(self.category_counts),
        }


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(UTC).date()


def build_library_stats(
    prompts: Sequence[Prompt],
    *,
    favorites: Collection[str],
    category_paths: Iterable[str],
    now: datetime,
    scope: Sequence[Prompt] | None = None,
    recent_days: int = DEFAULT_RECENT_DAYS,
) -> LibraryStats:
    """Return statistics over *prompts*; word/token totals cover *scope*."""
    paths = list(category_paths)
    counts = Counter(prompt.category for prompt in prompts)
    cutoff = now - timedelta(days=recent_days)
    today = _utc_date(now)
    measured = prompts if scope is None else scope
    return LibraryStats(
        total_prompts=len(prompts),
        total_favorites=len(favorites),
        total_categories=len(paths),
        created_today=sum(1 for prompt in prompts if _utc_date(prompt.created_at) == today),
        recent=sum(1 for prompt in prompts if prompt.created_at > cutoff),
        with_attachments=sum(1 for prompt in prompts if prompt.attachments),
        total_words=sum(word_count(prompt.content) for prompt in measured),
        total_tokens=sum(token_estimate(prompt.content) for prompt in measured),
        category_counts={path: counts.get(path, 0) for path in paths},
    )


__all__ = ["LibraryStats", "build_library_stats"]
