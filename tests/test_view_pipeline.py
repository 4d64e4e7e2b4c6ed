"""Tests for the filter/sort/paginate view pipeline.

Updates:
  v0.2.1 - 2026-10-19 - Reject float page values.
  v0.2.0 - 2026-10-12 - Cover subtree-inclusive category filtering.
  v0.1.0 - 2026-10-05 - Cover filters, sort keys, and pagination totals.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from core.search_index import SearchIndex
from core.view_pipeline import paginate, resolve_view, sort_prompts
from models.prompt_model import Prompt
from models.view_model import SortKey, ViewFilter, ViewQuery, ViewResult

NOW = datetime(2026, 10, 15, 12, 0, tzinfo=UTC)


def _prompt(pid: str, title: str, *, days_old: int = 0, **extra: object) -> Prompt:
    stamp = NOW - timedelta(days=days_old)
    return Prompt(
        id=pid,
        title=title,
        content=extra.pop("content", f"content for {title}"),  # type: ignore[arg-type]
        created_at=stamp,
        updated_at=stamp,
        **extra,  # type: ignore[arg-type]
    )


@pytest.fixture
def records() -> list[Prompt]:
    return [
        _prompt("1", "banana", days_old=1, category="art", rating=3),
        _prompt("2", "Apple", days_old=10, category="art/portrait", rating=5),
        _prompt(
            "3",
            "cherry",
            days_old=3,
            category="code",
            attachments=[{"kind": "result", "data": "img://x"}],
        ),
        _prompt("4", "date", days_old=30, category="other", rating=1),
    ]


def _resolve(
    records: list[Prompt], query: ViewQuery, favorites: set[str] | None = None
) -> ViewResult:
    index = SearchIndex(lambda: records)
    return resolve_view(
        records,
        query,
        favorites=favorites or set(),
        now=NOW,
        search=index.search,
    )


def test_all_filter_newest_first(records: list[Prompt]) -> None:
    result = _resolve(records, ViewQuery())

    assert [prompt.id for prompt in result.items] == ["1", "3", "2", "4"]
    assert result.total_count == 4


def test_favorites_filter(records: list[Prompt]) -> None:
    result = _resolve(records, ViewQuery(filter=ViewFilter.FAVORITES), favorites={"2", "4"})

    assert {prompt.id for prompt in result.items} == {"2", "4"}


def test_category_filter_is_exact_by_default(records: list[Prompt]) -> None:
    exact = _resolve(records, ViewQuery.for_category("art"))
    subtree = _resolve(records, ViewQuery.for_category("art", include_subcategories=True))

    assert [prompt.id for prompt in exact.items] == ["1"]
    assert {prompt.id for prompt in subtree.items} == {"1", "2"}


def test_recent_filter_uses_seven_day_window(records: list[Prompt]) -> None:
    result = _resolve(records, ViewQuery(filter=ViewFilter.RECENT))

    assert {prompt.id for prompt in result.items} == {"1", "3"}


def test_with_attachments_filter(records: list[Prompt]) -> None:
    result = _resolve(records, ViewQuery(filter=ViewFilter.WITH_ATTACHMENTS))

    assert [prompt.id for prompt in result.items] == ["3"]


def test_search_term_intersects_with_filter(records: list[Prompt]) -> None:
    result = _resolve(
        records,
        ViewQuery.for_category("art", include_subcategories=True, search_term="APPLE"),
    )

    assert [prompt.id for prompt in result.items] == ["2"]


@pytest.mark.parametrize(
    ("sort_key", "expected"),
    [
        (SortKey.OLDEST, ["4", "2", "3", "1"]),
        (SortKey.TITLE, ["2", "1", "3", "4"]),
        (SortKey.RATING, ["2", "1", "4", "3"]),
    ],
)
def test_sort_keys(records: list[Prompt], sort_key: SortKey, expected: list[str]) -> None:
    assert [prompt.id for prompt in sort_prompts(records, sort_key)] == expected


def test_complexity_sort_is_descending_and_stable(records: list[Prompt]) -> None:
    ordered = sort_prompts(records, SortKey.COMPLEXITY)

    assert ordered[0].id == "3"
    assert [prompt.id for prompt in ordered[1:]] == ["1", "2", "4"]


def test_pagination_total_counts_whole_filtered_set(records: list[Prompt]) -> None:
    first = _resolve(records, ViewQuery(page=1, page_size=3))
    second = _resolve(records, ViewQuery(page=2, page_size=3))
    beyond = _resolve(records, ViewQuery(page=5, page_size=3))

    assert len(first.items) == 3
    assert len(second.items) == 1
    assert beyond.items == []
    assert first.total_count == second.total_count == beyond.total_count == 4
    assert first.page_count == 2


def test_paginate_slices_one_based_pages() -> None:
    assert paginate([1, 2, 3, 4, 5], 2, 2) == [3, 4]  # type: ignore[list-item]


def test_view_query_validation() -> None:
    with pytest.raises(ValueError):
        ViewQuery(page=0)
    with pytest.raises(ValueError):
        ViewQuery(page_size=0)
    with pytest.raises(ValueError):
        ViewQuery(filter=ViewFilter.CATEGORY)
    with pytest.raises(ValueError):
        ViewQuery(filter="bogus")  # type: ignore[arg-type]
    for bad_page in (1.0, True, "2"):
        with pytest.raises(ValueError):
            ViewQuery(page=bad_page)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        ViewQuery(page_size=12.0)  # type: ignore[arg-type]


def test_view_query_accepts_string_enums() -> None:
    query = ViewQuery(filter="recent", sort_key="title")  # type: ignore[arg-type]

    assert query.filter is ViewFilter.RECENT
    assert query.sort_key is SortKey.TITLE
