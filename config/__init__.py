"""Configuration helpers for Prompt Vault.

Updates: v0.2.0 - 2026-10-09 - Expose storage backend defaults alongside the settings loader.
Updates: v0.1.0 - 2026-10-03 - Package scaffold.
"""

from .settings import (
    CONFIG_JSON_ENV,
    ENV_FILE_ENV,
    ENV_PREFIX,
    PromptVaultSettings,
    SettingsError,
    StorageBackend,
    load_settings,
)

__all__ = [
    "CONFIG_JSON_ENV",
    "ENV_FILE_ENV",
    "ENV_PREFIX",
    "PromptVaultSettings",
    "SettingsError",
    "StorageBackend",
    "load_settings",
]
