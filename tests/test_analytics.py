"""Tests for library statistics.

Updates:
  v0.1.1 - 2026-10-19 - Cover UTC day boundaries for imported offsets.
  v0.1.0 - 2026-10-08 - Cover totals, recent window, and scoped text volume.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from core.analytics import build_library_stats
from models.prompt_model import Prompt

NOW = datetime(2026, 10, 15, 12, 0, tzinfo=UTC)


def _prompt(pid: str, content: str, *, days_old: float, category: str = "other") -> Prompt:
    stamp = NOW - timedelta(days=days_old)
    return Prompt(
        id=pid,
        title=pid,
        content=content,
        category=category,
        created_at=stamp,
        updated_at=stamp,
    )


def test_build_library_stats_counts_everything() -> None:
    prompts = [
        _prompt("a", "one two three", days_old=0, category="code"),
        _prompt("b", "four five", days_old=2, category="code"),
        _prompt("c", "six", days_old=20),
    ]

    stats = build_library_stats(
        prompts,
        favorites={"a"},
        category_paths=["code", "art", "other"],
        now=NOW,
    )

    assert stats.total_prompts == 3
    assert stats.total_favorites == 1
    assert stats.total_categories == 3
    assert stats.created_today == 1
    assert stats.recent == 2
    assert stats.with_attachments == 0
    assert stats.total_words == 6
    assert stats.category_counts == {"code": 2, "art": 0, "other": 1}


def test_scope_limits_word_and_token_totals_only() -> None:
    prompts = [
        _prompt("a", "one two three", days_old=0),
        _prompt("b", "four five", days_old=0),
    ]

    stats = build_library_stats(
        prompts,
        favorites=set(),
        category_paths=["other"],
        now=NOW,
        scope=prompts[:1],
    )

    assert stats.total_prompts == 2
    assert stats.total_words == 3
    assert stats.total_tokens == 4


def test_to_dict_is_json_ready() -> None:
    stats = build_library_stats([], favorites=(), category_paths=["other"], now=NOW)

    payload = stats.to_dict()

    assert payload["total_prompts"] == 0
    assert payload["category_counts"] == {"other": 0}


def test_created_today_uses_utc_calendar_day() -> None:
    plus_five = timezone(timedelta(hours=5))
    minus_five = timezone(timedelta(hours=-5))
    minus_one = timezone(timedelta(hours=-1))
    stamps = {
        "east": datetime(2026, 10, 16, 1, 0, tzinfo=plus_five),
        "west": datetime(2026, 10, 14, 22, 0, tzinfo=minus_five),
        "tomorrow": datetime(2026, 10, 15, 23, 30, tzinfo=minus_one),
    }
    prompts = [
        Prompt(id=pid, title=pid, content="text", created_at=stamp, updated_at=stamp)
        for pid, stamp in stamps.items()
    ]

    stats = build_library_stats(prompts, favorites=set(), category_paths=["other"], now=NOW)

    assert stats.created_today == 2
