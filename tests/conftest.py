"""Pytest configuration for shared test fixtures.

Updates:
  v0.2.0 - 2026-10-17 - Provide in-memory vault and frozen clock fixtures.
  v0.1.0 - 2026-10-03 - Isolate settings tests from developer environment variables.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta

import pytest

from core.prompt_vault import PromptVault
from core.storage import MemoryStore

FIXED_NOW = datetime(2026, 10, 15, 12, 0, tzinfo=UTC)


class FrozenClock:
    """Callable clock that only moves when a test advances it."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now += timedelta(**delta)
        return self.now


@pytest.fixture(autouse=True)
def _isolate_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path_factory: pytest.TempPathFactory,
) -> None:
    """Keep developer PROMPT_VAULT_* variables and ./config files out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("PROMPT_VAULT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PROMPT_VAULT_ENV_FILE", "")
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def vault(store: MemoryStore, clock: FrozenClock) -> PromptVault:
    return PromptVault(store, clock=clock)
