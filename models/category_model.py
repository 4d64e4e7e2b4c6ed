"""Category node models and path helpers.

Updates:
  v0.2.0 - 2026-10-06 - Address categories by slash-delimited paths with parent links.
  v0.1.0 - 2026-10-02 - Introduce PromptCategory dataclass and helpers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Mapping, Optional

PATH_SEPARATOR = "/"

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def slugify_category(value: Optional[str]) -> str:
    """Return the normalised key derived from a display name."""

    text = (value or "").strip().lower()
    if not text:
        return ""
    slug = _SLUG_PATTERN.sub("-", text).strip("-")
    return slug


def join_path(parent_path: Optional[str], key: str) -> str:
    """Return the full path of *key* below *parent_path*."""

    if not parent_path:
        return key
    return f"{parent_path}{PATH_SEPARATOR}{key}"


def parent_of(path: str) -> Optional[str]:
    """Return the parent path of *path*, or None for root nodes."""

    head, sep, _ = path.rpartition(PATH_SEPARATOR)
    return head if sep else None


def is_within(path: str, ancestor: str) -> bool:
    """Return True when *path* equals *ancestor* or lies beneath it."""

    return path == ancestor or path.startswith(ancestor + PATH_SEPARATOR)


def replace_prefix(path: str, old_prefix: str, new_prefix: str) -> str:
    """Swap *old_prefix* for *new_prefix*, keeping the relative suffix."""

    if path == old_prefix:
        return new_prefix
    if path.startswith(old_prefix + PATH_SEPARATOR):
        return new_prefix + path[len(old_prefix) :]
    return path


def _parse_datetime(value: Any) -> datetime:
    """Return a timezone-aware datetime from unstructured inputs."""

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if value is None or value == "":
        return _utc_now()
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Strip whitespace from optional string inputs."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(slots=True)
class PromptCategory:
    """A node in the category taxonomy."""

    key: str
    label: str
    parent_path: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Normalise the key and label, rejecting empty keys."""

        self.key = slugify_category(self.key or self.label)
        if not self.key:
            raise ValueError("category key cannot be empty")
        label = (self.label or "").strip()
        if not label:
            label = self.key.replace("-", " ").title()
        self.label = label
        self.parent_path = _clean_optional_text(self.parent_path)
        if self.parent_path:
            self.parent_path = self.parent_path.lower()
        self.color = _clean_optional_text(self.color)
        self.icon = _clean_optional_text(self.icon)

    @property
    def path(self) -> str:
        return join_path(self.parent_path, self.key)

    @property
    def depth(self) -> int:
        return self.path.count(PATH_SEPARATOR)

    def to_record(self) -> dict[str, Any]:
        """Serialize the category into a plain dictionary."""

        return {
            "path": self.path,
            "key": self.key,
            "name": self.label,
            "parent": self.parent_path,
            "color": self.color,
            "icon": self.icon,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "PromptCategory":
        """Hydrate a PromptCategory from a mapping.

        Accepts both the path-addressed export form and the flat legacy form
        (``{id, name, color, icon}``) where ``id`` doubles as the key.
        """

        path = str(data.get("path") or data.get("id") or data.get("key") or "")
        parent = data.get("parent", data.get("parent_path"))
        if parent is None and path:
            parent = parent_of(path)
        key = str(data.get("key") or path.rpartition(PATH_SEPARATOR)[2])
        label = str(data.get("name") or data.get("label") or key)
        return cls(
            key=key,
            label=label,
            parent_path=_clean_optional_text(parent),
            color=_clean_optional_text(data.get("color")),
            icon=_clean_optional_text(data.get("icon")),
            created_at=_parse_datetime(data.get("createdAt", data.get("created_at"))),
        )


__all__ = [
    "PATH_SEPARATOR",
    "PromptCategory",
    "is_within",
    "join_path",
    "parent_of",
    "replace_prefix",
    "slugify_category",
]
