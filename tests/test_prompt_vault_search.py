"""Tests for search, views, duplicates, and statistics on the prompt vault.

Updates:
  v0.2.1 - 2026-10-19 - Cover float page values and zero suggestion limits.
  v0.2.0 - 2026-10-11 - Cover view queries routed through the pipeline.
  v0.1.0 - 2026-10-05 - Cover search, suggestions, and cache clearing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from core.exceptions import InvalidInputError
from core.notifications import ChangeKind, VaultChange
from core.prompt_vault import PromptVault
from models.view_model import SortKey, ViewFilter

if TYPE_CHECKING:
    from conftest import FrozenClock


def test_fan_suggestion_and_cache_clear_keep_results(vault: PromptVault) -> None:
    prompt = vault.create_prompt(
        title="Fantasy Landscape",
        content="Mountains and rivers",
        category="art",
    )
    events: list[VaultChange] = []
    vault.subscribe(events.append)

    assert "Fantasy Landscape" in vault.suggest("fan")
    first = vault.search("fan")

    vault.clear_cache()

    assert vault.search("fan") == first == {prompt.id}
    assert events[-1].kind is ChangeKind.CACHE_CLEARED


def test_mutations_invalidate_cached_search(vault: PromptVault) -> None:
    prompt = vault.create_prompt(title="Alpha", content="body")
    assert vault.search("beta") == set()

    vault.update_prompt(prompt.id, title="Beta")

    assert vault.search("beta") == {prompt.id}


def test_search_matches_notes_and_tags(vault: PromptVault) -> None:
    tagged = vault.create_prompt(title="One", content="x", tags=["Marketing"])
    noted = vault.create_prompt(title="Two", content="y", notes="for MARKETING team")

    assert vault.search("marketing") == {tagged.id, noted.id}
    assert vault.search("") == {tagged.id, noted.id}


def test_short_terms_produce_no_suggestions(vault: PromptVault) -> None:
    vault.create_prompt(title="Fantasy", content="x")

    assert vault.suggest("f") == []


def test_view_query_builds_validated_query(vault: PromptVault) -> None:
    query = vault.view_query(view_filter="favorites", sort_key="title")

    assert query.filter is ViewFilter.FAVORITES
    assert query.sort_key is SortKey.TITLE
    assert query.page_size == vault.page_size

    with pytest.raises(InvalidInputError):
        vault.view_query(page=0)
    with pytest.raises(InvalidInputError):
        vault.view_query(view_filter="category")
    with pytest.raises(InvalidInputError):
        vault.view_query(sort_key="popularity")
    with pytest.raises(InvalidInputError):
        vault.view_query(page=1.0)  # type: ignore[arg-type]
    with pytest.raises(InvalidInputError):
        vault.suggest("report", limit=0)


def test_resolve_view_combines_filter_search_and_paging(
    vault: PromptVault, clock: FrozenClock
) -> None:
    ids: list[str] = []
    for index in range(5):
        ids.append(vault.create_prompt(title=f"Report {index}", content="quarterly").id)
        clock.advance(minutes=1)
    vault.create_prompt(title="Unrelated", content="misc")
    for prompt_id in ids[:3]:
        vault.toggle_favorite(prompt_id)

    result = vault.resolve_view(
        vault.view_query(view_filter="favorites", search_term="report", page_size=2)
    )

    assert result.total_count == 3
    assert [prompt.id for prompt in result.items] == [ids[2], ids[1]]


def test_resolve_view_defaults_to_all_prompts(vault: PromptVault) -> None:
    vault.create_prompt(title="A", content="a")

    result = vault.resolve_view()

    assert result.total_count == 1
    assert result.page_size == 12


def test_find_duplicates_through_vault(vault: PromptVault) -> None:
    vault.create_prompt(title="A", content="Create a Python script")
    vault.create_prompt(title="B", content="Create a Python scripts")

    pairs = vault.find_duplicates(0.7)

    assert len(pairs) == 1
    assert pairs[0].similarity_pct >= 90
    with pytest.raises(InvalidInputError):
        vault.find_duplicates(2.0)


def test_stats_reflect_library_and_scope(vault: PromptVault) -> None:
    a = vault.create_prompt(title="A", content="one two", category="code")
    vault.create_prompt(
        title="B",
        content="three",
        attachments=[{"kind": "result", "data": "img://r"}],
    )
    vault.toggle_favorite(a.id)

    stats = vault.stats()
    scoped = vault.stats(vault.view_query(view_filter="favorites"))

    assert stats.total_prompts == 2
    assert stats.total_favorites == 1
    assert stats.with_attachments == 1
    assert stats.created_today == 2
    assert stats.total_words == 3
    assert stats.category_counts["code"] == 1
    assert stats.category_counts["other"] == 1
    assert stats.total_categories == len(vault.list_categories())
    assert scoped.total_words == 2
