"""Import and export prompt catalogues for Prompt Vault.

A catalogue is a JSON (or YAML) document ``{records, categories, favorites,
exportedAt, version}``. Older exports that list records under ``prompts`` and
use flat ``{id, name}`` categories are accepted as well.

Updates:
  v0.2.0 - 2026-10-13 - Parse whole payloads up front so malformed imports change nothing.
  v0.1.1 - 2026-10-09 - Accept legacy ``prompts`` exports with ``images`` attachments.
  v0.1.0 - 2026-10-08 - Export catalogues to JSON or YAML and read them back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import yaml

from models.category_model import PromptCategory
from models.prompt_model import Prompt

from .exceptions import CatalogImportError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Iterable

logger = logging.getLogger("prompt_vault.catalog")

CATALOG_VERSION = "1.0"
SUPPORTED_FORMATS = ("json", "yaml")

CatalogEntry = dict[str, Any]


def _prompt_list_factory() -> list[Prompt]:
    return []


def _category_list_factory() -> list[PromptCategory]:
    return []


def _str_list_factory() -> list[str]:
    return []


class ImportMode(str, Enum):
    """How an import treats records whose id already exists."""

    MERGE = "merge"
    REPLACE = "replace"


@dataclass(slots=True)
class CatalogPayload:
    """Validated contents of a catalogue document."""

    records: list[Prompt] = field(default_factory=_prompt_list_factory)
    categories: list[PromptCategory] = field(default_factory=_category_list_factory)
    favorites: list[str] = field(default_factory=_str_list_factory)


@dataclass(slots=True)
class CatalogImportResult:
    """Aggregate statistics from a catalogue import operation."""

    added: int = 0
    replaced: int = 0
    skipped: int = 0
    categories_added: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.added or self.replaced or self.categories_added)

    def summary(self) -> dict[str, int]:
        """Return aggregate counts from the import run."""
        return {
            "added": self.added,
            "replaced": self.replaced,
            "skipped": self.skipped,
            "categories_added": self.categories_added,
        }


def _entries(value: object, label: str) -> list[CatalogEntry]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise CatalogImportError(f"Catalogue '{label}' must be a list")
    entries: list[CatalogEntry] = []
    for index, raw_entry in enumerate(cast("list[object]", value)):
        if not isinstance(raw_entry, dict):
            raise CatalogImportError(f"Catalogue {label}[{index}] must be a JSON object")
        entries.append(cast("CatalogEntry", raw_entry))
    return entries


def parse_catalog_payload(payload: object) -> CatalogPayload:
    """Validate *payload* in full, raising ``CatalogImportError`` on any bad entry."""
    if isinstance(payload, list):
        document: dict[str, object] = {"records": payload}
    elif isinstance(payload, dict):
        document = cast("dict[str, object]", payload)
    else:
        raise CatalogImportError("Catalogue must be a JSON object or a list of records")

    raw_records = document.get("records", document.get("prompts"))
    if raw_records is None:
        raise CatalogImportError("Catalogue has no 'records' list")

    parsed = CatalogPayload()
    for index, entry in enumerate(_entries(raw_records, "records")):
        try:
            parsed.records.append(Prompt.from_record(entry))
        except (TypeError, ValueError) as exc:
            raise CatalogImportError(f"Invalid record at index {index}: {exc}") from exc
    for index, entry in enumerate(_entries(document.get("categories"), "categories")):
        try:
            parsed.categories.append(PromptCategory.from_record(entry))
        except (TypeError, ValueError) as exc:
            raise CatalogImportError(f"Invalid category at index {index}: {exc}") from exc
    favorites = document.get("favorites")
    if favorites is not None:
        if not isinstance(favorites, list):
            raise CatalogImportError("Catalogue 'favorites' must be a list")
        parsed.favorites = [str(item) for item in cast("list[object]", favorites)]
    return parsed


def build_catalog_payload(
    records: Iterable[Prompt],
    categories: Iterable[PromptCategory],
    favorites: Iterable[str] = (),
    *,
    exported_at: datetime | None = None,
) -> dict[str, Any]:
    """Return the export document for the given collections."""
    return {
        "records": [prompt.to_record() for prompt in records],
        "categories": [category.to_record() for category in categories],
        "favorites": list(favorites),
        "exportedAt": (exported_at or datetime.now(UTC)).isoformat(),
        "version": CATALOG_VERSION,
    }


def resolve_catalog_format(path: Path, fmt: str | None = None) -> str:
    """Return ``json`` or ``yaml`` from *fmt* or the file suffix."""
    if fmt:
        fmt_lower = fmt.lower()
    else:
        fmt_lower = "yaml" if path.suffix.lower() in {".yaml", ".yml"} else "json"
    if fmt_lower not in SUPPORTED_FORMATS:
        raise ValueError("fmt must be 'json' or 'yaml'")
    return fmt_lower


def write_catalog(payload: dict[str, Any], output_path: Path, *, fmt: str | None = None) -> Path:
    """Write an export document to JSON or YAML and return the resolved path."""
    resolved_path = output_path.expanduser()
    fmt_lower = resolve_catalog_format(resolved_path, fmt)
    resolved_path.parent.mkdir(parents=True, exist_ok=True)
    if fmt_lower == "json":
        resolved_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    else:
        with resolved_path.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(payload, handle, allow_unicode=True, sort_keys=False)
    logger.info(
        "Exported %d prompts to %s", len(payload.get("records", [])), resolved_path
    )
    return resolved_path


def read_catalog(path: Path) -> object:
    """Read a JSON or YAML catalogue document from *path*."""
    resolved_path = path.expanduser()
    try:
        contents = resolved_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogImportError(f"Cannot read prompt catalogue: {resolved_path}") from exc
    if resolve_catalog_format(resolved_path) == "yaml":
        try:
            return yaml.safe_load(contents)
        except yaml.YAMLError as exc:
            raise CatalogImportError(f"Invalid YAML in {resolved_path}") from exc
    try:
        return json.loads(contents)
    except json.JSONDecodeError as exc:
        raise CatalogImportError(f"Invalid JSON in {resolved_path}") from exc


__all__ = [
    "CATALOG_VERSION",
    "CatalogImportResult",
    "CatalogPayload",
    "ImportMode",
    "build_catalog_payload",
    "parse_catalog_payload",
    "read_catalog",
    "resolve_catalog_format",
    "write_catalog",
]
