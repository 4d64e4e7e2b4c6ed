"""Category management helpers for the prompt vault.

Tree edits are validated on a working copy of the taxonomy; history is only
snapshotted once the edit is known to succeed, after which the copy and the
rewritten records are swapped in together.

Updates:
  v0.2.1 - 2026-10-19 - Roll category edits back when the autosave fails.
  v0.2.0 - 2026-10-12 - Cascade rename/delete onto records atomically and make edits undoable.
  v0.1.0 - 2026-10-05 - Extract category APIs into mixin.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from ..notifications import ChangeKind, VaultChange

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Callable
    from contextlib import AbstractContextManager
    from datetime import datetime

    from models.category_model import PromptCategory
    from models.prompt_model import Prompt

    from ..category_tree import CategoryRemoval, CategoryRename, CategoryTree
    from ..history import HistoryManager
    from .state import VaultSnapshot

logger = logging.getLogger("prompt_vault.categories")

__all__ = ["CategorySupport"]


class CategorySupport:
    """Mixin exposing the category tree and its cascading edits."""

    _records: list[Prompt]
    _category_tree: CategoryTree
    _history: HistoryManager[VaultSnapshot]

    _mutation: Callable[[], AbstractContextManager[None]]
    _finish_mutation: Callable[..., None]
    _now: Callable[[], datetime]

    @property
    def category_tree(self) -> CategoryTree:
        return self._category_tree

    def list_categories(self) -> list[PromptCategory]:
        """Return every category node in creation order."""
        return list(self._category_tree)

    def get_category(self, path: str) -> PromptCategory:
        """Return the node at *path* or raise ``CategoryNotFoundError``."""
        return self._category_tree.require(path)

    def resolve_category(self, path: str | None) -> str:
        """Return *path* when a node exists there, else ``other``."""
        return self._category_tree.resolve_or_default(path)

    def create_category(
        self,
        name: str,
        parent_path: str | None = None,
        *,
        color: str | None = None,
        icon: str | None = None,
    ) -> str:
        """Create a category beneath *parent_path* and return its path."""
        working = self._category_tree.copy()
        path = working.create(parent_path, name, color=color, icon=icon, now=self._now())
        with self._mutation():
            self._history.snapshot()
            self._category_tree = working
            self._finish_mutation(
                VaultChange(ChangeKind.CATEGORY_CREATED, metadata={"path": path})
            )
        return path

    def rename_category(self, path: str, new_name: str) -> str:
        """Rename a category, moving its subtree and every affected record."""
        working = self._category_tree.copy()
        plan = working.rename(path, new_name)
        records, moved = self._rewrite_categories(plan)
        with self._mutation():
            self._history.snapshot()
            self._category_tree = working
            self._records = records
            logger.info(
                "Category %s renamed to %s; %d prompt(s) moved",
                plan.old_path,
                plan.new_path,
                len(moved),
            )
            self._finish_mutation(
                VaultChange(
                    ChangeKind.CATEGORY_RENAMED,
                    moved,
                    {"old_path": plan.old_path, "new_path": plan.new_path},
                )
            )
        return plan.new_path

    def delete_category(self, path: str) -> int:
        """Delete a category subtree and reassign its records to ``other``.

        Returns the number of prompts that were reassigned.
        """
        working = self._category_tree.copy()
        plan = working.delete(path)
        records, moved = self._rewrite_categories(plan)
        with self._mutation():
            self._history.snapshot()
            self._category_tree = working
            self._records = records
            logger.info(
                "Category %s deleted (%d nodes); %d prompt(s) reassigned",
                plan.path,
                len(plan.removed),
                len(moved),
            )
            self._finish_mutation(
                VaultChange(
                    ChangeKind.CATEGORY_DELETED,
                    moved,
                    {"path": plan.path, "removed": list(plan.removed)},
                )
            )
        return len(moved)

    def _rewrite_categories(
        self, plan: CategoryRename | CategoryRemoval
    ) -> tuple[list[Prompt], tuple[str, ...]]:
        """Return the record list with category paths rewritten by *plan*."""
        now = self._now()
        records: list[Prompt] = []
        moved: list[str] = []
        for prompt in self._records:
            target = plan.rewrite(prompt.category)
            if target == prompt.category:
                records.append(prompt)
                continue
            records.append(replace(prompt, category=target, updated_at=now))
            moved.append(prompt.id)
        return records, tuple(moved)
