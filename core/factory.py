"""Factories for constructing PromptVault instances from validated settings.

Updates:
  v0.2.0 - 2026-10-14 - Seed sample prompts when enabled in settings.
  v0.1.1 - 2026-10-10 - Select SQLite, JSON, or in-memory durable stores.
  v0.1.0 - 2026-10-05 - Introduce build_prompt_vault for shared bootstrap.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .category_tree import load_category_definitions
from .prompt_vault import PromptVault
from .storage import DurableStore, JsonFileStore, MemoryStore, SQLiteStore

if TYPE_CHECKING:  # pragma: no cover - typing only
    from datetime import datetime

    from config import PromptVaultSettings

    from .notifications import ChangeNotifier

factory_logger = logging.getLogger("prompt_vault.factory")


def build_store(settings: PromptVaultSettings) -> DurableStore:
    """Return the durable store selected by ``settings.storage_backend``."""
    backend = settings.storage_backend
    if backend == "memory":
        return MemoryStore()
    if backend == "sqlite":
        return SQLiteStore(settings.data_path)
    return JsonFileStore(settings.data_path)


def build_prompt_vault(
    settings: PromptVaultSettings,
    *,
    store: DurableStore | None = None,
    notifier: ChangeNotifier | None = None,
    clock: Callable[[], datetime] | None = None,
) -> PromptVault:
    """Return a PromptVault configured from validated settings."""
    resolved_store = store if store is not None else build_store(settings)
    category_definitions = load_category_definitions(
        settings.categories,
        path=settings.categories_path,
    )
    vault = PromptVault(
        resolved_store,
        history_limit=settings.history_limit,
        suggestion_limit=settings.suggestion_limit,
        recent_days=settings.recent_days,
        page_size=settings.page_size,
        autosave=settings.autosave,
        category_definitions=category_definitions,
        clock=clock,
        notifier=notifier,
    )
    factory_logger.debug(
        "Prompt vault ready (backend=%s, prompts=%d)",
        settings.storage_backend,
        len(vault),
    )
    if settings.seed_sample_data:
        vault.seed_sample_data()
    return vault


__all__ = ["build_prompt_vault", "build_store"]
