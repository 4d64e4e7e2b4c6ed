"""Hierarchical category taxonomy with cascading rename and delete.

Categories are addressed by slash-delimited paths built from normalised keys
(``art/landscape``). Two keys are reserved: ``other`` is the catch-all node
records fall back to, and ``favorites`` names the virtual favourites filter and
is never a node.

Updates:
  v0.3.0 - 2026-10-12 - Return rewrite plans so record cascades stay atomic.
  v0.2.0 - 2026-10-06 - Replace flat slug registry with path-addressed tree.
  v0.1.0 - 2026-10-02 - Introduce default category definitions and loader.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import cast

from models.category_model import (
    PromptCategory,
    is_within,
    join_path,
    replace_prefix,
    slugify_category,
)

from .exceptions import (
    CategoryNotFoundError,
    DuplicateCategoryError,
    InvalidInputError,
    InvalidParentError,
    ProtectedCategoryError,
)

logger = logging.getLogger("prompt_vault.categories")

OTHER_CATEGORY = "other"
FAVORITES_KEY = "favorites"
RESERVED_KEYS = frozenset({OTHER_CATEGORY, FAVORITES_KEY})

DEFAULT_CATEGORY_DEFINITIONS: Sequence[Mapping[str, str]] = (
    {"key": "art", "name": "Art & Images", "color": "#ef476f", "icon": "fas fa-palette"},
    {"key": "writing", "name": "Writing", "color": "#ffd166", "icon": "fas fa-pen-fancy"},
    {"key": "code", "name": "Code & Technical", "color": "#06d6a0", "icon": "fas fa-code"},
    {"key": "analysis", "name": "Analysis", "color": "#118ab2", "icon": "fas fa-chart-bar"},
    {"key": "creative", "name": "Creative", "color": "#7209b7", "icon": "fas fa-lightbulb"},
    {"key": "other", "name": "Other", "color": "#6c757d", "icon": "fas fa-folder"},
)


def _other_category() -> PromptCategory:
    return PromptCategory.from_record(DEFAULT_CATEGORY_DEFINITIONS[-1])


def load_category_definitions(
    inline_definitions: Sequence[Mapping[str, object]] | None = None,
    *,
    path: Path | None = None,
) -> list[PromptCategory]:
    """Return PromptCategory definitions from defaults plus overrides."""

    catalog: dict[str, PromptCategory] = {}
    for entry in DEFAULT_CATEGORY_DEFINITIONS:
        category = PromptCategory.from_record(entry)
        catalog[category.path] = category

    payloads: list[Mapping[str, object]] = []
    if path is not None:
        try:
            text = path.expanduser().read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Category definitions file missing at %s", path)
        except OSError as exc:
            logger.warning("Unable to read categories file %s: %s", path, exc)
        else:
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError as exc:
                logger.warning("Invalid category JSON in %s: %s", path, exc)
            else:
                if isinstance(parsed, list):
                    for raw_entry in cast("Sequence[object]", parsed):
                        if isinstance(raw_entry, Mapping):
                            payloads.append(dict(cast("Mapping[str, object]", raw_entry)))
                else:
                    logger.warning("Expected a list of category mappings in %s", path)

    if inline_definitions:
        payloads.extend(inline_definitions)

    for payload in payloads:
        try:
            category = PromptCategory.from_record(payload)
        except (ValueError, TypeError) as exc:
            logger.warning("Skipping invalid category definition: %s", exc)
            continue
        catalog[category.path] = category
    return list(catalog.values())


@dataclass(slots=True, frozen=True)
class CategoryRename:
    """Outcome of a rename: the moved subtree and how to rewrite record paths."""

    old_path: str
    new_path: str
    moved: Mapping[str, str]

    def rewrite(self, category: str) -> str:
        return replace_prefix(category, self.old_path, self.new_path)


@dataclass(slots=True, frozen=True)
class CategoryRemoval:
    """Outcome of a delete: the removed subtree and the record fallback."""

    path: str
    removed: tuple[str, ...]

    def rewrite(self, category: str) -> str:
        return OTHER_CATEGORY if is_within(category, self.path) else category


class CategoryTree:
    """Path-indexed category nodes with reserved roots."""

    def __init__(self, categories: Iterable[PromptCategory] | None = None) -> None:
        self._nodes: dict[str, PromptCategory] = {}
        self._load(categories or ())

    # Queries ---------------------------------------------------------- #

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path in self._nodes

    def __iter__(self) -> Iterator[PromptCategory]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def paths(self) -> list[str]:
        return list(self._nodes)

    def get(self, path: str | None) -> PromptCategory | None:
        """Return the node at *path*, if any."""
        if not path:
            return None
        return self._nodes.get(path.strip().lower())

    def require(self, path: str) -> PromptCategory:
        """Return the node at *path* or raise if missing."""
        category = self.get(path)
        if category is None:
            raise CategoryNotFoundError(f"Category '{path}' does not exist.")
        return category

    def children(self, path: str | None) -> list[PromptCategory]:
        """Return direct children of *path* (root nodes for None)."""
        parent = path.strip().lower() if path else None
        return [node for node in self._nodes.values() if node.parent_path == parent]

    def resolve_or_default(self, path: str | None) -> str:
        """Return *path* when a node exists there, else the catch-all path."""
        if path and path in self._nodes:
            return path
        return OTHER_CATEGORY

    def label_for(self, path: str | None) -> str:
        category = self.get(path)
        return category.label if category else self._nodes[OTHER_CATEGORY].label

    # Mutations -------------------------------------------------------- #

    def create(
        self,
        parent_path: str | None,
        display_name: str,
        *,
        color: str | None = None,
        icon: str | None = None,
        now: datetime | None = None,
    ) -> str:
        """Create a node beneath *parent_path* and return its full path."""
        key = slugify_category(display_name)
        if not key:
            raise InvalidInputError("Category name cannot be empty.")
        parent = parent_path.strip().lower() if parent_path else None
        if parent is not None and parent not in self._nodes:
            raise InvalidParentError(f"Parent category '{parent_path}' does not exist.")
        if parent is None and key == FAVORITES_KEY:
            raise ProtectedCategoryError(f"'{key}' is a reserved category name.")
        path = join_path(parent, key)
        if path in self._nodes:
            raise DuplicateCategoryError(f"Category '{path}' already exists.")
        self._nodes[path] = PromptCategory(
            key=key,
            label=display_name,
            parent_path=parent,
            color=color,
            icon=icon,
            created_at=now or datetime.now(UTC),
        )
        logger.debug("Created category %s", path)
        return path

    def rename(self, path: str, new_display_name: str) -> CategoryRename:
        """Rename the node at *path*, moving its whole subtree."""
        old_path = self._require_mutable(path)
        node = self._nodes[old_path]
        new_key = slugify_category(new_display_name)
        if not new_key:
            raise InvalidInputError("Category name cannot be empty.")
        if node.parent_path is None and new_key in RESERVED_KEYS:
            raise ProtectedCategoryError(f"'{new_key}' is a reserved category name.")
        new_path = join_path(node.parent_path, new_key)
        if new_path != old_path and new_path in self._nodes:
            raise DuplicateCategoryError(f"Category '{new_path}' already exists.")

        rebuilt: dict[str, PromptCategory] = {}
        moved: dict[str, str] = {}
        for current_path, current in self._nodes.items():
            if current_path == old_path:
                updated = replace(current, key=new_key, label=new_display_name)
            elif is_within(current_path, old_path):
                updated = replace(
                    current,
                    parent_path=replace_prefix(current.parent_path or "", old_path, new_path),
                )
            else:
                rebuilt[current_path] = current
                continue
            moved[current_path] = updated.path
            rebuilt[updated.path] = updated
        self._nodes = rebuilt
        logger.info("Renamed category %s -> %s (%d nodes)", old_path, new_path, len(moved))
        return CategoryRename(old_path=old_path, new_path=new_path, moved=moved)

    def delete(self, path: str) -> CategoryRemoval:
        """Remove the node at *path* together with its descendants."""
        target = self._require_mutable(path)
        removed = tuple(current for current in self._nodes if is_within(current, target))
        self._nodes = {
            current: node for current, node in self._nodes.items() if current not in removed
        }
        logger.info("Deleted category %s (%d nodes)", target, len(removed))
        return CategoryRemoval(path=target, removed=removed)

    def merge(self, categories: Iterable[PromptCategory]) -> list[str]:
        """Add nodes whose path is unknown, parents first; return added paths."""
        added: list[str] = []
        for category in sorted(categories, key=lambda item: item.depth):
            path = category.path
            if path in self._nodes or (
                category.parent_path is None and category.key == FAVORITES_KEY
            ):
                continue
            if category.parent_path and category.parent_path not in self._nodes:
                logger.warning("Skipping category %s with unknown parent", path)
                continue
            self._nodes[path] = replace(category)
            added.append(path)
        return added

    # Snapshots -------------------------------------------------------- #

    def snapshot(self) -> tuple[PromptCategory, ...]:
        """Return copies of every node in insertion order."""
        return tuple(replace(node) for node in self._nodes.values())

    def restore(self, categories: Iterable[PromptCategory]) -> None:
        """Replace all nodes with previously snapshotted *categories*, keeping order."""
        self._nodes = {node.path: replace(node) for node in categories}
        if OTHER_CATEGORY not in self._nodes:
            self._nodes[OTHER_CATEGORY] = _other_category()

    def copy(self) -> CategoryTree:
        """Return an independent tree with the same nodes in the same order."""
        clone = CategoryTree()
        clone.restore(self._nodes.values())
        return clone

    def to_records(self) -> list[dict[str, object]]:
        return [node.to_record() for node in self._nodes.values()]

    # Helpers ---------------------------------------------------------- #

    def _require_mutable(self, path: str) -> str:
        normalised = (path or "").strip().lower()
        if normalised in RESERVED_KEYS:
            raise ProtectedCategoryError(f"Category '{normalised}' is protected.")
        return self.require(normalised).path

    def _load(self, categories: Iterable[PromptCategory]) -> None:
        self.merge(categories)
        if OTHER_CATEGORY not in self._nodes:
            self._nodes[OTHER_CATEGORY] = _other_category()


__all__ = [
    "CategoryRemoval",
    "CategoryRename",
    "CategoryTree",
    "DEFAULT_CATEGORY_DEFINITIONS",
    "FAVORITES_KEY",
    "OTHER_CATEGORY",
    "RESERVED_KEYS",
    "load_category_definitions",
]
