"""Durable key/value stores backing the prompt vault.

The vault needs ``load(key)``, ``save(key, value)`` and ``save_many(entries)``
with last-write-wins semantics; values are JSON-compatible structures.
``save_many`` lands every entry in one write so readers never see a mix of
old and new keys.

Updates:
  v0.3.0 - 2026-10-19 - Add save_many so vault state is written in a single step.
  v0.2.0 - 2026-10-10 - Add SQLite key/value backend alongside the JSON file store.
  v0.1.0 - 2026-10-03 - Introduce DurableStore protocol with memory and JSON file stores.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import sqlite3
import tempfile
from contextlib import closing
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, cast

from .exceptions import StorageError

logger = logging.getLogger("prompt_vault.storage")

JSONValue = Any


class DurableStore(Protocol):
    """Persistence collaborator injected into the vault."""

    def load(self, key: str) -> JSONValue | None:  # pragma: no cover - Protocol
        """Return the value stored under *key*, or None when absent."""
        ...

    def save(self, key: str, value: JSONValue) -> None:  # pragma: no cover - Protocol
        """Persist *value* under *key*, replacing any previous value."""
        ...

    def save_many(self, entries: Mapping[str, JSONValue]) -> None:  # pragma: no cover - Protocol
        """Persist every key in *entries* together, or none of them."""
        ...


class MemoryStore:
    """Process-local store used for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, JSONValue] | None = None) -> None:
        self._data: dict[str, JSONValue] = copy.deepcopy(initial or {})

    def load(self, key: str) -> JSONValue | None:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: JSONValue) -> None:
        self._data[key] = copy.deepcopy(value)

    def save_many(self, entries: Mapping[str, JSONValue]) -> None:
        self._data.update(copy.deepcopy(dict(entries)))

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore:
    """Single JSON document on disk, rewritten atomically on every save."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._cache: dict[str, JSONValue] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self, key: str) -> JSONValue | None:
        document = self._read()
        if key not in document:
            return None
        return copy.deepcopy(document[key])

    def save(self, key: str, value: JSONValue) -> None:
        self.save_many({key: value})

    def save_many(self, entries: Mapping[str, JSONValue]) -> None:
        document = dict(self._read())
        document.update(copy.deepcopy(dict(entries)))
        self._write(document)
        self._cache = document

    def _read(self) -> dict[str, JSONValue]:
        if self._cache is not None:
            return self._cache
        try:
            contents = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._cache = {}
            return self._cache
        except OSError as exc:
            raise StorageError(f"Unable to read vault file {self._path}: {exc}") from exc
        try:
            parsed: object = json.loads(contents) if contents.strip() else {}
        except json.JSONDecodeError as exc:
            raise StorageError(f"Invalid JSON in vault file {self._path}") from exc
        if not isinstance(parsed, dict):
            raise StorageError(f"Vault file {self._path} must contain a JSON object")
        self._cache = cast("dict[str, JSONValue]", parsed)
        return self._cache

    def _write(self, document: dict[str, JSONValue]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, ensure_ascii=False, indent=2)
                os.replace(temp_name, self._path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Unable to write vault file {self._path}: {exc}") from exc
        logger.debug("Vault file written: %s", self._path)


class SQLiteStore:
    """Key/value table in a SQLite database."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS vault_state ("
                    "key TEXT PRIMARY KEY, value TEXT NOT NULL)"
                )
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Unable to initialise SQLite store {self._db_path}") from exc

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.execute("PRAGMA journal_mode = WAL;")
        conn.execute("PRAGMA synchronous = NORMAL;")
        return conn

    def load(self, key: str) -> JSONValue | None:
        try:
            with closing(self._connect()) as conn, conn:
                row = conn.execute(
                    "SELECT value FROM vault_state WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Unable to load '{key}' from {self._db_path}") from exc
        if row is None:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt JSON stored under '{key}'") from exc

    def save(self, key: str, value: JSONValue) -> None:
        self.save_many({key: value})

    def save_many(self, entries: Mapping[str, JSONValue]) -> None:
        rows: list[tuple[str, str]] = []
        for key, value in entries.items():
            try:
                rows.append((key, json.dumps(value, ensure_ascii=False)))
            except (TypeError, ValueError) as exc:
                raise StorageError(f"Value for '{key}' is not JSON serialisable") from exc
        keys = ", ".join(key for key, _ in rows)
        try:
            with closing(self._connect()) as conn, conn:
                conn.executemany(
                    "INSERT INTO vault_state (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    rows,
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Unable to save '{keys}' to {self._db_path}") from exc


__all__ = ["DurableStore", "JsonFileStore", "MemoryStore", "SQLiteStore"]
