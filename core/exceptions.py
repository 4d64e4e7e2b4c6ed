"""Common exception classes for core package.

This module centralises the error taxonomy of the prompt store so callers can
catch a single base class for any vault failure while still distinguishing
individual error categories when needed.

All exceptions ultimately inherit from :class:`PromptVaultError`.

Updates:
  v0.3.0 - 2026-10-13 - Add share token and catalogue import failures.
  v0.2.0 - 2026-10-06 - Add category tree exception hierarchy.
  v0.1.0 - 2026-10-02 - Created module.
"""

from __future__ import annotations


class PromptVaultError(Exception):
    """Base exception for Prompt Vault failures."""


# ---------------------------------------------------------------------------
# Record errors
# ---------------------------------------------------------------------------


class PromptNotFoundError(PromptVaultError, KeyError):
    """Raised when a prompt id is not present in the record collection."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Prompt not found"


class InvalidInputError(PromptVaultError, ValueError):
    """Raised when record fields or query parameters fail validation."""


class StorageError(PromptVaultError):
    """Raised when the durable store cannot load or persist state."""


# ---------------------------------------------------------------------------
# Category errors
# ---------------------------------------------------------------------------


class CategoryError(PromptVaultError):
    """Base class for category tree failures."""


class CategoryNotFoundError(CategoryError):
    """Raised when a requested category path does not exist."""


class DuplicateCategoryError(CategoryError):
    """Raised when a category path would collide with an existing node."""


class ProtectedCategoryError(CategoryError):
    """Raised when a reserved category is renamed, deleted, or shadowed."""


class InvalidParentError(CategoryError):
    """Raised when a category is created beneath a missing parent."""


# ---------------------------------------------------------------------------
# Exchange format errors
# ---------------------------------------------------------------------------


class CatalogImportError(PromptVaultError):
    """Raised when an import payload is malformed."""


class ShareDecodeError(PromptVaultError):
    """Raised when a share token cannot be decoded into a prompt payload."""


__all__ = [
    "CatalogImportError",
    "CategoryError",
    "CategoryNotFoundError",
    "DuplicateCategoryError",
    "InvalidInputError",
    "InvalidParentError",
    "PromptNotFoundError",
    "PromptVaultError",
    "ProtectedCategoryError",
    "ShareDecodeError",
    "StorageError",
]
