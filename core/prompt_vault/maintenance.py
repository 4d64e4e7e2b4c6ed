"""Maintenance mixin: catalogue exchange, sharing, and sample data.

Updates:
  v0.2.1 - 2026-10-19 - Roll imports and seeding back when the autosave fails.
  v0.2.0 - 2026-10-13 - Import catalogues atomically in merge or replace mode.
  v0.1.1 - 2026-10-09 - Create shared prompts through the regular create path.
  v0.1.0 - 2026-10-06 - Extract export, share, and seeding helpers into mixin.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from models.prompt_model import Prompt

from ..catalog_importer import (
    CatalogImportResult,
    ImportMode,
    build_catalog_payload,
    parse_catalog_payload,
)
from ..exceptions import InvalidInputError
from ..notifications import ChangeKind, VaultChange
from ..sharing import build_share_url, decode_share_token, encode_share_token
from ..sharing import format_prompt_for_share as _format_prompt_for_share

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Callable
    from contextlib import AbstractContextManager
    from datetime import datetime

    from ..category_tree import CategoryTree
    from ..history import HistoryManager
    from .state import VaultSnapshot

logger = logging.getLogger("prompt_vault.maintenance")

SAMPLE_PROMPTS: tuple[dict[str, Any], ...] = (
    {
        "title": "Fantasy Landscape Generator",
        "category": "art",
        "content": (
            "Create a breathtaking fantasy landscape with towering mountains, mystical "
            "forests, and a crystal-clear river flowing through a magical valley. Digital "
            "painting style, highly detailed, epic scale, cinematic lighting, 8K "
            "resolution, trending on ArtStation."
        ),
        "tags": ["fantasy", "landscape", "digital painting", "detailed"],
        "notes": "Works best with DALL-E 3 or Midjourney v6. Use --ar 16:9 for widescreen.",
        "rating": 5,
        "engine": "Midjourney",
        "usage_count": 12,
    },
    {
        "title": "Python Data Analysis Template",
        "category": "code",
        "content": (
            "Create a comprehensive Python script for data analysis using pandas and "
            "matplotlib. Include data loading, cleaning, exploratory analysis, "
            "visualization, and statistical summaries. Add docstrings and comments for "
            "each function."
        ),
        "tags": ["python", "data analysis", "pandas", "matplotlib", "automation"],
        "notes": (
            "Adjust column names and data types based on your dataset. Install required "
            "packages: pandas, matplotlib, seaborn."
        ),
        "rating": 4,
        "engine": "ChatGPT",
        "usage_count": 8,
    },
    {
        "title": "Marketing Copy Generator",
        "category": "writing",
        "content": (
            "Generate compelling marketing copy for a [product/service]. Include: 1) "
            "Attention-grabbing headline, 2) Key benefits (3-5 points), 3) Social "
            "proof/testimonial section, 4) Clear call-to-action, 5) SEO keywords. Tone "
            "should be [professional/casual/enthusiastic]."
        ),
        "tags": ["marketing", "copywriting", "seo", "conversion"],
        "notes": "Replace [brackets] with specific details. Aim for 300-500 words.",
        "rating": 4,
        "engine": "ChatGPT",
        "usage_count": 15,
    },
)

__all__ = ["MaintenanceMixin", "SAMPLE_PROMPTS"]


class MaintenanceMixin:
    """Catalogue import/export, share tokens, and sample data seeding."""

    _records: list[Prompt]
    _favorites: dict[str, None]
    _category_tree: CategoryTree
    _history: HistoryManager[VaultSnapshot]

    _mutation: Callable[[], AbstractContextManager[None]]
    _finish_mutation: Callable[..., None]
    _now: Callable[[], datetime]
    get_prompt: Callable[[str], Prompt]
    create_prompt: Callable[..., Prompt]

    # Catalogue -------------------------------------------------------- #

    def export_catalog(self) -> dict[str, Any]:
        """Return the full export document for the vault."""
        return build_catalog_payload(
            self._records,
            self._category_tree,
            self._favorites,
            exported_at=self._now(),
        )

    def import_catalog(
        self,
        payload: object,
        mode: ImportMode | str = ImportMode.MERGE,
    ) -> CatalogImportResult:
        """Import an export document; nothing changes if any entry is malformed.

        In merge mode records whose id already exists are kept unchanged; in
        replace mode they are fully replaced. New records are appended.
        """
        try:
            import_mode = ImportMode(mode)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown import mode: {mode}") from exc
        parsed = parse_catalog_payload(payload)

        working = self._category_tree.copy()
        result = CatalogImportResult(categories_added=len(working.merge(parsed.categories)))
        records = list(self._records)
        positions = {prompt.id: index for index, prompt in enumerate(records)}
        seen: set[str] = set()
        for incoming in parsed.records:
            if incoming.id in seen:
                result.skipped += 1
                continue
            seen.add(incoming.id)
            incoming.category = working.resolve_or_default(incoming.category)
            index = positions.get(incoming.id)
            if index is None:
                records.append(incoming)
                result.added += 1
            elif import_mode is ImportMode.REPLACE:
                records[index] = incoming
                result.replaced += 1
            else:
                result.skipped += 1

        if not result.changed:
            logger.info("Catalogue import made no changes (%d skipped)", result.skipped)
            return result

        with self._mutation():
            self._history.snapshot()
            self._category_tree = working
            self._records = records
            existing = {prompt.id for prompt in records}
            for key in parsed.favorites:
                if key in existing:
                    self._favorites.setdefault(key, None)
            logger.info("Catalogue imported (%s): %s", import_mode.value, result.summary())
            self._finish_mutation(
                VaultChange(
                    ChangeKind.CATALOG_IMPORTED,
                    metadata={"mode": import_mode.value, **result.summary()},
                )
            )
        return result

    # Sharing ---------------------------------------------------------- #

    def share_token(self, prompt_id: str) -> str:
        """Return the share token for the stored prompt."""
        return encode_share_token(self.get_prompt(prompt_id))

    def share_url(self, prompt_id: str, base_url: str) -> str:
        """Return *base_url* carrying the prompt's share token."""
        try:
            return build_share_url(base_url, self.share_token(prompt_id))
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

    def import_shared(self, token: str) -> Prompt:
        """Decode *token* and store it as a new prompt with a fresh id."""
        fields = decode_share_token(token)
        prompt = self.create_prompt(**fields)
        logger.info("Imported shared prompt %s", prompt.id)
        return prompt

    def format_prompt_for_share(self, prompt_id: str, *, include_notes: bool = True) -> str:
        """Return a plain-text rendering of the prompt with the share footer."""
        prompt = self.get_prompt(prompt_id)
        return _format_prompt_for_share(
            prompt,
            category_label=self._category_tree.label_for(prompt.category),
            include_notes=include_notes,
        )

    # Sample data ------------------------------------------------------ #

    def seed_sample_data(self) -> list[Prompt]:
        """Insert the bundled sample prompts when the library is empty."""
        if self._records:
            logger.debug("Skipping sample data; library already has prompts")
            return []
        now = self._now()
        samples: list[Prompt] = []
        for entry in SAMPLE_PROMPTS:
            prompt = Prompt.create(
                title=entry["title"],
                content=entry["content"],
                category=self._category_tree.resolve_or_default(entry["category"]),
                tags=entry["tags"],
                notes=entry["notes"],
                rating=entry["rating"],
                engine=entry["engine"],
                now=now,
            )
            prompt.usage_count = entry["usage_count"]
            samples.append(prompt)
        with self._mutation():
            self._history.snapshot()
            self._records = samples + self._records
            logger.info("Seeded %d sample prompts", len(samples))
            self._finish_mutation(
                VaultChange(ChangeKind.PROMPT_CREATED, tuple(prompt.id for prompt in samples))
            )
        return samples
