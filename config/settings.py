"""Settings management utilities for Prompt Vault configuration.

Updates:
  v0.3.0 - 2026-10-14 - Add share base URL and sample data seeding toggle.
  v0.2.1 - 2026-10-10 - Read ``.env`` values via python-dotenv without mutating os.environ.
  v0.2.0 - 2026-10-09 - Add storage backend selection and SQLite data path support.
  v0.1.0 - 2026-10-03 - Introduce PromptVaultSettings with JSON and environment sources.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Literal, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

_DOTENV_FALLBACK_PATH = ".env"
ENV_PREFIX = "PROMPT_VAULT_"
CONFIG_JSON_ENV = "PROMPT_VAULT_CONFIG_JSON"
ENV_FILE_ENV = "PROMPT_VAULT_ENV_FILE"
DEFAULT_CONFIG_PATH = Path("config") / "config.json"

StorageBackend = Literal["json", "sqlite", "memory"]

_SETTING_FIELDS: tuple[str, ...] = (
    "storage_backend",
    "data_path",
    "history_limit",
    "page_size",
    "suggestion_limit",
    "duplicate_threshold",
    "recent_days",
    "autosave",
    "seed_sample_data",
    "categories_path",
    "categories",
    "share_base_url",
)


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv(ENV_FILE_ENV)
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class SettingsError(Exception):
    """Raised when Prompt Vault configuration cannot be loaded or validated."""


class PromptVaultSettings(BaseSettings):
    """Application configuration sourced from environment variables or JSON files."""

    storage_backend: StorageBackend = Field(
        default="json",
        description="Durable store used by the vault: json file, sqlite database, or memory.",
    )
    data_path: Path = Field(default=Path("data") / "prompt_vault.json")
    history_limit: int = Field(default=20, description="Maximum undo entries kept.")
    page_size: int = Field(default=12, description="Default number of prompts per page.")
    suggestion_limit: int = Field(default=8, description="Autocomplete suggestions returned.")
    duplicate_threshold: float = Field(
        default=0.7,
        description="Similarity above which two prompts are reported as near-duplicates.",
    )
    recent_days: int = Field(default=7, description="Window of the recent filter, in days.")
    autosave: bool = Field(default=True, description="Persist after every mutation.")
    seed_sample_data: bool = Field(
        default=False,
        description="Insert the bundled sample prompts into an empty library.",
    )
    categories_path: Path | None = None
    categories: list[dict[str, object]] | None = None
    share_base_url: str | None = Field(
        default=None,
        description="Base URL that share links append the ?shared= token to.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": ENV_PREFIX,
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("data_path", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("a filesystem path is required")
        path = Path(str(value)).expanduser()
        return path.resolve()

    @field_validator("storage_backend", mode="before")
    def _normalise_backend(cls, value: Any) -> str:
        if value is None:
            return "json"
        return str(value).strip().lower()

    @field_validator("history_limit", "page_size", "suggestion_limit", "recent_days")
    def _validate_positive(cls, value: int) -> int:
        """Ensure count-like settings are positive integers."""
        if value <= 0:
            raise ValueError("value must be greater than zero")
        return value

    @field_validator("duplicate_threshold")
    def _validate_threshold(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("duplicate_threshold must be between 0 and 1")
        return value

    @field_validator("categories_path", mode="before")
    def _normalise_categories_path(cls, value: Any) -> Path | None:
        """Coerce optional category file path into a Path."""
        if value in (None, ""):
            return None
        path = Path(str(value)).expanduser()
        return path.resolve()

    @field_validator("categories", mode="before")
    def _parse_categories(cls, value: Any) -> list[dict[str, object]] | None:
        """Ensure inline categories are represented as a list of mappings."""
        if value in (None, "", []):
            return None
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("categories must be valid JSON") from exc
            value = parsed
        if isinstance(value, list):
            cleaned: list[dict[str, object]] = []
            entries = cast("Sequence[object]", value)
            for entry in entries:
                if isinstance(entry, Mapping):
                    entry_mapping = cast("Mapping[object, object]", entry)
                    cleaned.append({str(key): entry_mapping[key] for key in entry_mapping})
            return cleaned or None
        raise ValueError("categories must be provided as a list of objects")

    @field_validator("share_base_url", mode="before")
    def _strip_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(page_size=20)).
            2. JSON configuration file.
            3. Environment variables, then ``.env`` values.
            4. File secrets.
        """

        def env_with_dotenv(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            dotenv_data = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_data.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            for field in _SETTING_FIELDS:
                for candidate in (f"{ENV_PREFIX}{field.upper()}", f"{ENV_PREFIX}{field}"):
                    value = _lookup(candidate)
                    if value is not None:
                        data[field] = value
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_dotenv),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(CONFIG_JSON_ENV)
            candidates: list[tuple[Path, bool]] = []
            if explicit_path and explicit_path.strip():
                candidates.append((Path(explicit_path.strip()).expanduser(), True))
            candidates.append((DEFAULT_CONFIG_PATH.expanduser(), False))

            for path, required in candidates:
                if not path.exists():
                    if required:
                        raise SettingsError(f"Configuration file not found: {path}")
                    continue
                try:
                    raw_contents = path.read_text(encoding="utf-8")
                except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                    raise SettingsError(f"Unable to read configuration file: {path}") from exc
                try:
                    data = json.loads(raw_contents)
                except json.JSONDecodeError as exc:
                    raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
                if not isinstance(data, dict):
                    message = f"Configuration file {path} must contain a JSON object"
                    raise SettingsError(message)
                mapping_data = cast("Mapping[object, Any]", data)
                data_dict: dict[str, Any] = {str(key): value for key, value in mapping_data.items()}
                ignored = sorted(key for key in data_dict if key not in _SETTING_FIELDS)
                if ignored:
                    logger.warning(
                        "Ignoring unknown key(s) %s in configuration file %s",
                        ", ".join(ignored),
                        path,
                    )
                return {key: data_dict[key] for key in _SETTING_FIELDS if key in data_dict}
            return {}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptVaultSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptVaultSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid Prompt Vault configuration") from exc


logger = logging.getLogger("prompt_vault.settings")
