"""Printable summaries for Prompt Vault configuration.

Updates:
  v0.1.0 - 2026-10-15 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .utils import describe_path

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import PromptVaultSettings


def format_settings_summary(settings: PromptVaultSettings) -> list[str]:
    """Return the summary lines for *settings*."""
    if settings.storage_backend == "memory":
        data_path_desc = "in-memory (not persisted)"
    else:
        data_path_desc = describe_path(settings.data_path, allow_missing_file=True)
    inline_categories = len(settings.categories or [])
    categories_desc = (
        describe_path(settings.categories_path) if settings.categories_path else "not set"
    )

    return [
        "Prompt Vault configuration summary",
        "----------------------------------",
        f"Storage backend: {settings.storage_backend}",
        f"Data path: {data_path_desc}",
        f"Autosave: {'yes' if settings.autosave else 'no'}",
        f"Seed sample data: {'yes' if settings.seed_sample_data else 'no'}",
        "",
        "Library behaviour",
        "-----------------",
        f"Undo history limit: {settings.history_limit}",
        f"Page size: {settings.page_size}",
        f"Suggestion limit: {settings.suggestion_limit}",
        f"Duplicate threshold: {settings.duplicate_threshold:.2f}",
        f"Recent window (days): {settings.recent_days}",
        "",
        "Categories",
        "----------",
        f"Definitions file: {categories_desc}",
        f"Inline definitions: {inline_categories}",
        "",
        f"Share base URL: {settings.share_base_url or 'not set'}",
    ]


def print_settings_summary(settings: PromptVaultSettings) -> None:
    """Emit a readable summary of the resolved configuration."""
    print("\n".join(format_settings_summary(settings)))
