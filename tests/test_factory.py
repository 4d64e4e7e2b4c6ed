"""Tests for core.factory store selection and vault bootstrap.

Updates:
  v0.2.0 - 2026-10-14 - Cover sample data seeding from settings.
  v0.1.0 - 2026-10-10 - Cover backend selection and category definitions.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from config import PromptVaultSettings, load_settings
from core.factory import build_prompt_vault, build_store
from core.notifications import ChangeNotifier
from core.prompt_vault.maintenance import SAMPLE_PROMPTS
from core.storage import JsonFileStore, MemoryStore, SQLiteStore


def _make_settings(tmp_path: Path, **overrides: object) -> PromptVaultSettings:
    defaults: dict[str, object] = {"data_path": str(tmp_path / "vault.json")}
    defaults.update(overrides)
    return load_settings(**defaults)


@pytest.mark.parametrize(
    ("backend", "expected"),
    [("json", JsonFileStore), ("sqlite", SQLiteStore), ("memory", MemoryStore)],
)
def test_build_store_selects_backend(tmp_path: Path, backend: str, expected: type) -> None:
    store = build_store(_make_settings(tmp_path, storage_backend=backend))

    assert isinstance(store, expected)


def test_build_prompt_vault_applies_settings(tmp_path: Path) -> None:
    categories_file = tmp_path / "categories.json"
    categories_file.write_text(json.dumps([{"key": "research", "name": "Research"}]))
    notifier = ChangeNotifier()
    settings = _make_settings(
        tmp_path,
        storage_backend="memory",
        page_size=5,
        categories_path=str(categories_file),
        categories=[{"key": "travel", "name": "Travel"}],
    )

    vault = build_prompt_vault(settings, notifier=notifier)

    assert vault.page_size == 5
    assert vault.notifier is notifier
    assert "research" in vault.category_tree
    assert "travel" in vault.category_tree
    assert len(vault) == 0


def test_build_prompt_vault_seeds_samples_once(tmp_path: Path) -> None:
    settings = _make_settings(tmp_path, seed_sample_data=True)

    vault = build_prompt_vault(settings)
    reopened = build_prompt_vault(settings)

    assert len(vault) == len(SAMPLE_PROMPTS)
    assert len(reopened) == len(SAMPLE_PROMPTS)
    titles = {prompt.title for prompt in reopened.list_prompts()}
    assert "Fantasy Landscape Generator" in titles
    assert reopened.get_prompt(vault.list_prompts()[0].id).usage_count > 0


def test_build_prompt_vault_uses_injected_store(tmp_path: Path) -> None:
    store = MemoryStore()

    vault = build_prompt_vault(_make_settings(tmp_path), store=store)
    vault.create_prompt(title="Injected", content="store")

    assert store.load("prompts")[0]["title"] == "Injected"
    assert not (tmp_path / "vault.json").exists()
