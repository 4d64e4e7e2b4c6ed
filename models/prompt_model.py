"""Prompt record data model definitions.

Updates:
  v0.3.0 - 2026-10-14 - Accept legacy ``images`` payloads when hydrating records.
  v0.2.0 - 2026-10-09 - Add attachment bounds and the engine/usage metadata fields.
  v0.1.0 - 2026-10-02 - Initial Prompt record schema with serialization helpers.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, cast

OTHER_CATEGORY = "other"
MAX_RATING = 5
MAX_INPUT_ATTACHMENTS = 3
MAX_RESULT_ATTACHMENTS = 5

SHAREABLE_FIELDS: tuple[str, ...] = ("title", "category", "tags", "content", "notes", "rating")


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def new_prompt_id() -> str:
    """Return a fresh opaque record identifier."""
    return str(uuid.uuid4())


def _ensure_datetime(value: Any, default: datetime | None = None) -> datetime:
    """Parse incoming datetime values (isoformat strings or datetime)."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if value is None or (isinstance(value, str) and not value.strip()):
        return default or _utc_now()
    text = str(value).strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _isoformat(value: datetime) -> str:
    return value.isoformat()


def normalise_tags(value: Iterable[Any] | str | None) -> list[str]:
    """Return stripped, non-empty tags without duplicates, first occurrence wins."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    tags: list[str] = []
    seen: set[str] = set()
    for raw in value:
        text = str(raw).strip()
        if not text or text in seen:
            continue
        seen.add(text)
        tags.append(text)
    return tags


def normalise_rating(value: Any) -> int:
    """Coerce *value* into a rating between 0 and ``MAX_RATING``."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError("rating must be an integer between 0 and 5")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("rating must be an integer between 0 and 5")
        value = int(value)
    try:
        rating = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("rating must be an integer between 0 and 5") from exc
    if rating < 0 or rating > MAX_RATING:
        raise ValueError("rating must be an integer between 0 and 5")
    return rating


class AttachmentKind(str, Enum):
    """Role an image attachment plays for its prompt."""

    INPUT = "input"
    RESULT = "result"


@dataclass(slots=True, frozen=True)
class PromptAttachment:
    """Opaque image reference attached to a prompt."""

    kind: AttachmentKind
    data: str

    def to_record(self) -> dict[str, str]:
        return {"kind": self.kind.value, "data": self.data}

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> PromptAttachment:
        """Hydrate an attachment from ``{kind, data}`` or legacy ``{type, url}`` mappings."""
        raw_kind = data.get("kind", data.get("type"))
        try:
            kind = AttachmentKind(str(raw_kind).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown attachment kind: {raw_kind!r}") from exc
        payload = data.get("data", data.get("url"))
        if not isinstance(payload, str) or not payload.strip():
            raise ValueError("attachment data must be a non-empty string")
        return cls(kind=kind, data=payload)


def normalise_attachments(value: Iterable[Any] | None) -> list[PromptAttachment]:
    """Validate attachment inputs and enforce the input/result bounds."""
    attachments: list[PromptAttachment] = []
    if value is None:
        return attachments
    for raw in value:
        if isinstance(raw, PromptAttachment):
            attachments.append(raw)
        elif isinstance(raw, Mapping):
            attachments.append(PromptAttachment.from_record(cast("Mapping[str, Any]", raw)))
        else:
            raise ValueError("attachments must be mappings with kind and data")
    inputs = sum(1 for item in attachments if item.kind is AttachmentKind.INPUT)
    results = len(attachments) - inputs
    if inputs > MAX_INPUT_ATTACHMENTS:
        raise ValueError(f"at most {MAX_INPUT_ATTACHMENTS} input attachments are allowed")
    if results > MAX_RESULT_ATTACHMENTS:
        raise ValueError(f"at most {MAX_RESULT_ATTACHMENTS} result attachments are allowed")
    return attachments


def _required_text(value: Any, field_name: str) -> str:
    text = "" if value is None else str(value)
    if not text.strip():
        raise ValueError(f"{field_name} must not be empty")
    return text.strip()


@dataclass(slots=True)
class Prompt:
    """Dataclass representation of a prompt record."""

    id: str
    title: str
    content: str
    category: str = OTHER_CATEGORY
    tags: list[str] = field(default_factory=list)
    notes: str = ""
    rating: int = 0
    attachments: list[PromptAttachment] = field(default_factory=list)
    engine: str | None = None
    usage_count: int = 0
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate required text and normalise collection fields."""
        if not str(self.id or "").strip():
            raise ValueError("id must not be empty")
        self.id = str(self.id)
        self.title = _required_text(self.title, "title")
        self.content = _required_text(self.content, "content")
        self.category = (self.category or OTHER_CATEGORY).strip().lower() or OTHER_CATEGORY
        self.tags = normalise_tags(self.tags)
        self.notes = (self.notes or "").strip()
        self.rating = normalise_rating(self.rating)
        self.attachments = normalise_attachments(self.attachments)
        self.engine = (self.engine or "").strip() or None
        self.usage_count = max(0, int(self.usage_count or 0))

    @classmethod
    def create(
        cls,
        *,
        title: str,
        content: str,
        category: str | None = None,
        tags: Iterable[str] | str | None = None,
        notes: str | None = None,
        rating: int | None = None,
        attachments: Iterable[Any] | None = None,
        engine: str | None = None,
        now: datetime | None = None,
    ) -> Prompt:
        """Return a new prompt with a generated id and fresh timestamps."""
        stamp = now or _utc_now()
        return cls(
            id=new_prompt_id(),
            title=title,
            content=content,
            category=category or OTHER_CATEGORY,
            tags=normalise_tags(tags),
            notes=notes or "",
            rating=rating or 0,
            attachments=list(attachments or []),
            engine=engine,
            created_at=stamp,
            updated_at=stamp,
        )

    @property
    def has_attachments(self) -> bool:
        return bool(self.attachments)

    def to_record(self) -> dict[str, Any]:
        """Return a plain JSON-ready dictionary representation."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "tags": list(self.tags),
            "content": self.content,
            "notes": self.notes,
            "rating": self.rating,
            "attachments": [attachment.to_record() for attachment in self.attachments],
            "engine": self.engine,
            "usageCount": self.usage_count,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }

    def share_payload(self) -> dict[str, Any]:
        """Return the shareable subset of the record."""
        record = self.to_record()
        return {key: record[key] for key in SHAREABLE_FIELDS}

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Prompt:
        """Create a Prompt from a dictionary record, defaulting optional fields."""
        created_at = _ensure_datetime(data.get("createdAt", data.get("created_at")))
        updated_at = _ensure_datetime(
            data.get("updatedAt", data.get("updated_at")),
            default=created_at,
        )
        raw_attachments = data.get("attachments")
        if raw_attachments is None:
            raw_attachments = data.get("images")
        usage = data.get("usageCount", data.get("usage_count"))
        return cls(
            id=str(data.get("id") or new_prompt_id()),
            title=data.get("title", ""),
            content=data.get("content", ""),
            category=str(data.get("category") or OTHER_CATEGORY),
            tags=normalise_tags(data.get("tags")),
            notes=str(data.get("notes") or ""),
            rating=data.get("rating") or 0,
            attachments=list(raw_attachments or []),
            engine=data.get("engine"),
            usage_count=int(usage or 0),
            created_at=created_at,
            updated_at=updated_at,
        )


__all__ = [
    "AttachmentKind",
    "MAX_INPUT_ATTACHMENTS",
    "MAX_RATING",
    "MAX_RESULT_ATTACHMENTS",
    "OTHER_CATEGORY",
    "Prompt",
    "PromptAttachment",
    "SHAREABLE_FIELDS",
    "new_prompt_id",
    "normalise_attachments",
    "normalise_rating",
    "normalise_tags",
]
