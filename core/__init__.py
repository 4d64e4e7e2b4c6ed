"""Core service layer for Prompt Vault.

Updates:
  v0.3.0 - 2026-10-13 - Export catalogue import modes and share helpers.
  v0.2.0 - 2026-10-11 - Export the view pipeline, duplicate detector, and statistics.
  v0.1.0 - 2026-10-05 - Surface PromptVault and the build_prompt_vault factory.
"""

from models.category_model import PromptCategory

from .analytics import LibraryStats, build_library_stats
from .catalog_importer import (
    CatalogImportResult,
    ImportMode,
    build_catalog_payload,
    parse_catalog_payload,
    read_catalog,
    write_catalog,
)
from .category_tree import CategoryRemoval, CategoryRename, CategoryTree
from .duplicates import DuplicatePair, find_duplicates
from .exceptions import (
    CatalogImportError,
    CategoryError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    InvalidInputError,
    InvalidParentError,
    PromptNotFoundError,
    PromptVaultError,
    ProtectedCategoryError,
    ShareDecodeError,
    StorageError,
)
from .factory import build_prompt_vault, build_store
from .history import HistoryManager
from .metrics import complexity, token_estimate, word_count
from .notifications import ChangeKind, ChangeNotifier, ChangeSubscription, VaultChange
from .prompt_vault import PromptVault
from .search_index import SearchIndex
from .sharing import build_share_url, decode_share_token, encode_share_token
from .similarity import edit_distance, similarity
from .storage import DurableStore, JsonFileStore, MemoryStore, SQLiteStore
from .view_pipeline import resolve_view

__all__ = [
    "CatalogImportError",
    "CatalogImportResult",
    "CategoryError",
    "CategoryNotFoundError",
    "CategoryRemoval",
    "CategoryRename",
    "CategoryTree",
    "ChangeKind",
    "ChangeNotifier",
    "ChangeSubscription",
    "DuplicateCategoryError",
    "DuplicatePair",
    "DurableStore",
    "HistoryManager",
    "ImportMode",
    "InvalidInputError",
    "InvalidParentError",
    "JsonFileStore",
    "LibraryStats",
    "MemoryStore",
    "PromptCategory",
    "PromptNotFoundError",
    "PromptVault",
    "PromptVaultError",
    "ProtectedCategoryError",
    "SQLiteStore",
    "SearchIndex",
    "ShareDecodeError",
    "StorageError",
    "VaultChange",
    "build_catalog_payload",
    "build_library_stats",
    "build_prompt_vault",
    "build_share_url",
    "build_store",
    "complexity",
    "decode_share_token",
    "edit_distance",
    "encode_share_token",
    "find_duplicates",
    "parse_catalog_payload",
    "read_catalog",
    "resolve_view",
    "similarity",
    "token_estimate",
    "word_count",
    "write_catalog",
]
