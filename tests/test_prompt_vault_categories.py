"""Tests for category edits cascading through the prompt vault.

Updates:
  v0.2.0 - 2026-10-12 - Cover atomic rename/delete cascades and category undo.
  v0.1.0 - 2026-10-06 - Cover category creation through the vault facade.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from core.exceptions import (
    CategoryNotFoundError,
    DuplicateCategoryError,
    InvalidParentError,
    ProtectedCategoryError,
)
from core.notifications import ChangeKind, VaultChange
from core.prompt_vault import PromptVault
from models.category_model import PromptCategory

if TYPE_CHECKING:
    from conftest import FrozenClock


def _add(vault: PromptVault, title: str, category: str) -> str:
    return vault.create_prompt(title=title, content=f"{title} body", category=category).id


def test_create_category_is_undoable(vault: PromptVault) -> None:
    path = vault.create_category("Portrait", "art", color="#abcdef", icon="fas fa-user")

    assert path == "art/portrait"
    node = vault.get_category(path)
    assert (node.color, node.icon) == ("#abcdef", "fas fa-user")
    assert vault.undo()
    assert path not in vault.category_tree
    assert vault.redo()
    assert path in vault.category_tree


def test_create_category_failures_leave_state_untouched(vault: PromptVault) -> None:
    before = [category.path for category in vault.list_categories()]

    with pytest.raises(InvalidParentError):
        vault.create_category("Child", "nope")
    with pytest.raises(DuplicateCategoryError):
        vault.create_category("Art")
    with pytest.raises(ProtectedCategoryError):
        vault.create_category("Favorites")

    assert [category.path for category in vault.list_categories()] == before
    assert not vault.can_undo


def test_delete_category_moves_subtree_records_to_other(
    vault: PromptVault, clock: FrozenClock
) -> None:
    vault.create_category("Portrait", "art")
    first = _add(vault, "One", "art")
    second = _add(vault, "Two", "art")
    third = _add(vault, "Three", "art/portrait")
    untouched = _add(vault, "Four", "code")
    clock.advance(minutes=5)

    moved = vault.delete_category("art")

    assert moved == 3
    for prompt_id in (first, second, third):
        prompt = vault.get_prompt(prompt_id)
        assert prompt.category == "other"
        assert prompt.updated_at == clock.now
    assert vault.get_prompt(untouched).category == "code"
    assert "art" not in vault.category_tree
    assert "art/portrait" not in vault.category_tree


def test_undo_category_delete_restores_nodes_and_records(vault: PromptVault) -> None:
    vault.create_category("Portrait", "art")
    prompt_id = _add(vault, "Face", "art/portrait")
    paths_before = vault.category_tree.paths

    vault.delete_category("art")
    assert vault.undo()

    assert vault.category_tree.paths == paths_before
    assert vault.get_prompt(prompt_id).category == "art/portrait"


def test_rename_category_rewrites_descendant_records(vault: PromptVault) -> None:
    vault.create_category("Landscape", "art")
    root = _add(vault, "Root", "art")
    nested = _add(vault, "Nested", "art/landscape")
    other = _add(vault, "Other", "writing")

    new_path = vault.rename_category("art", "Visual Art")

    assert new_path == "visual-art"
    assert vault.get_prompt(root).category == "visual-art"
    assert vault.get_prompt(nested).category == "visual-art/landscape"
    assert vault.get_prompt(other).category == "writing"
    assert vault.get_category("visual-art").label == "Visual Art"
    with pytest.raises(CategoryNotFoundError):
        vault.get_category("art")


def test_rename_collision_is_rejected_without_changes(vault: PromptVault) -> None:
    prompt_id = _add(vault, "Root", "art")

    with pytest.raises(DuplicateCategoryError):
        vault.rename_category("art", "Code")

    assert vault.get_prompt(prompt_id).category == "art"
    assert "art" in vault.category_tree


@pytest.mark.parametrize("operation", ["rename", "delete"])
def test_reserved_category_is_protected(vault: PromptVault, operation: str) -> None:
    with pytest.raises(ProtectedCategoryError):
        if operation == "rename":
            vault.rename_category("other", "Misc")
        else:
            vault.delete_category("other")


def test_category_events_carry_moved_prompt_ids(vault: PromptVault) -> None:
    prompt_id = _add(vault, "Root", "art")
    events: list[VaultChange] = []
    vault.subscribe(events.append)

    vault.rename_category("art", "Drawing")
    vault.delete_category("drawing")

    assert [event.kind for event in events] == [
        ChangeKind.CATEGORY_RENAMED,
        ChangeKind.CATEGORY_DELETED,
    ]
    assert events[0].prompt_ids == (prompt_id,)
    assert events[0].metadata == {"old_path": "art", "new_path": "drawing"}
    assert events[1].metadata["removed"] == ["drawing"]


def test_custom_category_definitions_seed_empty_store(clock: FrozenClock) -> None:
    vault = PromptVault(
        category_definitions=[PromptCategory(key="travel", label="Travel")],
        clock=clock,
    )

    assert vault.category_tree.paths == ["travel", "other"]
    assert vault.resolve_category("art") == "other"
