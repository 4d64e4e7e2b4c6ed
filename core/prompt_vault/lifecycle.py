"""Prompt lifecycle helpers for the prompt vault.

Updates:
  v0.2.1 - 2026-10-19 - Roll mutations back when the autosave fails.
  v0.2.0 - 2026-10-10 - Add selection set and bulk delete over the selection.
  v0.1.1 - 2026-10-07 - Preserve attachments when an update patch omits them.
  v0.1.0 - 2026-10-05 - Extract prompt CRUD and favorites into mixin.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from models.prompt_model import Prompt

from ..exceptions import InvalidInputError, PromptNotFoundError
from ..notifications import ChangeKind, VaultChange

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Callable, Iterable
    from contextlib import AbstractContextManager
    from datetime import datetime

    from ..category_tree import CategoryTree
    from ..history import HistoryManager
    from ..notifications import ChangeNotifier
    from .state import VaultSnapshot

logger = logging.getLogger("prompt_vault.store")

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "content",
        "category",
        "tags",
        "notes",
        "rating",
        "attachments",
        "engine",
        "usage_count",
    }
)

__all__ = ["PromptLifecycleMixin", "UPDATABLE_FIELDS"]


class PromptLifecycleMixin:
    """Prompt CRUD, favorites, and selection operations."""

    _records: list[Prompt]
    _favorites: dict[str, None]
    _selection: dict[str, None]
    _category_tree: CategoryTree
    _history: HistoryManager[VaultSnapshot]
    _notifier: ChangeNotifier

    _mutation: Callable[[], AbstractContextManager[None]]
    _finish_mutation: Callable[..., None]
    _now: Callable[[], datetime]

    # Reads ------------------------------------------------------------ #

    def get_prompt(self, prompt_id: str) -> Prompt:
        """Return the prompt stored under *prompt_id*."""
        return self._records[self._index_of(prompt_id)]

    def list_prompts(self) -> list[Prompt]:
        """Return every prompt, most recently created first."""
        return list(self._records)

    @property
    def prompt_count(self) -> int:
        return len(self._records)

    def __contains__(self, prompt_id: object) -> bool:
        return any(prompt.id == prompt_id for prompt in self._records)

    # Mutations -------------------------------------------------------- #

    def create_prompt(
        self,
        *,
        title: str,
        content: str,
        category: str | None = None,
        tags: Iterable[str] | str | None = None,
        notes: str | None = None,
        rating: int | None = None,
        attachments: Iterable[Any] | None = None,
        engine: str | None = None,
    ) -> Prompt:
        """Validate fields, stamp id and timestamps, and insert at the front."""
        try:
            prompt = Prompt.create(
                title=title,
                content=content,
                category=self._resolve_category(category),
                tags=tags,
                notes=notes,
                rating=rating,
                attachments=attachments,
                engine=engine,
                now=self._now(),
            )
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc
        return self._insert_prompt(prompt)

    def update_prompt(self, prompt_id: str, **patch: Any) -> Prompt:
        """Merge *patch* over the stored prompt and refresh ``updated_at``.

        Fields absent from *patch* (or passed as ``None``) keep their current
        values, attachments included.
        """
        index = self._index_of(prompt_id)
        unknown = sorted(set(patch) - UPDATABLE_FIELDS)
        if unknown:
            raise InvalidInputError(f"Cannot update field(s): {', '.join(unknown)}")
        changes = {name: value for name, value in patch.items() if value is not None}
        if "category" in changes:
            changes["category"] = self._resolve_category(changes["category"])
        if "attachments" in changes:
            changes["attachments"] = list(changes["attachments"])
        current = self._records[index]
        try:
            updated = replace(current, **changes, updated_at=self._now())
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(str(exc)) from exc

        with self._mutation():
            self._history.snapshot()
            self._records[index] = updated
            logger.debug("Updated prompt %s (%s)", prompt_id, ", ".join(sorted(changes)))
            self._finish_mutation(
                VaultChange(ChangeKind.PROMPT_UPDATED, (prompt_id,), {"fields": sorted(changes)})
            )
        return updated

    def delete_prompt(self, prompt_id: str) -> None:
        """Remove a prompt and prune it from favorites and the selection."""
        self._index_of(prompt_id)
        self._remove_prompts({prompt_id})

    def bulk_delete(self, prompt_ids: Iterable[str]) -> int:
        """Delete every listed prompt in one undoable step; unknown ids are ignored."""
        wanted = set(prompt_ids)
        present = {prompt.id for prompt in self._records if prompt.id in wanted}
        if not present:
            return 0
        return self._remove_prompts(present)

    def toggle_favorite(self, prompt_id: str) -> bool:
        """Flip favorite membership and return the new state (not undoable)."""
        self._index_of(prompt_id)
        with self._mutation():
            if prompt_id in self._favorites:
                del self._favorites[prompt_id]
                state = False
            else:
                self._favorites[prompt_id] = None
                state = True
            logger.debug("Favorite %s -> %s", prompt_id, state)
            self._finish_mutation(
                VaultChange(ChangeKind.FAVORITE_TOGGLED, (prompt_id,), {"favorite": state}),
                invalidate=False,
            )
        return state

    def is_favorite(self, prompt_id: str) -> bool:
        return prompt_id in self._favorites

    @property
    def favorites(self) -> list[str]:
        return list(self._favorites)

    # Selection -------------------------------------------------------- #

    @property
    def selected_ids(self) -> list[str]:
        return list(self._selection)

    def select(self, prompt_id: str) -> None:
        self._index_of(prompt_id)
        if prompt_id not in self._selection:
            self._selection[prompt_id] = None
            self._publish_selection()

    def deselect(self, prompt_id: str) -> None:
        if prompt_id in self._selection:
            del self._selection[prompt_id]
            self._publish_selection()

    def toggle_selection(self, prompt_id: str) -> bool:
        """Flip selection membership and return the new state."""
        if prompt_id in self._selection:
            self.deselect(prompt_id)
            return False
        self.select(prompt_id)
        return True

    def select_all(self, prompt_ids: Iterable[str] | None = None) -> int:
        """Select *prompt_ids* (every prompt when omitted); unknown ids are skipped."""
        known = [prompt.id for prompt in self._records]
        if prompt_ids is not None:
            wanted = set(prompt_ids)
            known = [key for key in known if key in wanted]
        for key in known:
            self._selection.setdefault(key, None)
        self._publish_selection()
        return len(self._selection)

    def clear_selection(self) -> None:
        if self._selection:
            self._selection.clear()
            self._publish_selection()

    def delete_selected(self) -> int:
        """Bulk delete the current selection."""
        return self.bulk_delete(list(self._selection))

    # Internals -------------------------------------------------------- #

    def _index_of(self, prompt_id: str) -> int:
        for index, prompt in enumerate(self._records):
            if prompt.id == prompt_id:
                return index
        raise PromptNotFoundError(f"Prompt {prompt_id} not found")

    def _resolve_category(self, category: str | None) -> str:
        return self._category_tree.resolve_or_default((category or "").strip().lower())

    def _insert_prompt(self, prompt: Prompt) -> Prompt:
        if prompt.id in self:
            raise InvalidInputError(f"Prompt id {prompt.id} already exists")
        with self._mutation():
            self._history.snapshot()
            self._records.insert(0, prompt)
            logger.debug("Created prompt %s", prompt.id)
            self._finish_mutation(VaultChange(ChangeKind.PROMPT_CREATED, (prompt.id,)))
        return prompt

    def _remove_prompts(self, prompt_ids: set[str]) -> int:
        before = len(self._records)
        with self._mutation():
            self._history.snapshot()
            self._records = [prompt for prompt in self._records if prompt.id not in prompt_ids]
            for key in prompt_ids:
                self._favorites.pop(key, None)
                self._selection.pop(key, None)
            removed = before - len(self._records)
            logger.debug("Deleted %d prompt(s)", removed)
            self._finish_mutation(
                VaultChange(ChangeKind.PROMPTS_DELETED, tuple(sorted(prompt_ids)))
            )
        return removed

    def _publish_selection(self) -> None:
        self._notifier.publish(
            VaultChange(ChangeKind.SELECTION_CHANGED, tuple(self._selection))
        )
