"""Data models for Prompt Vault.

Updates: v0.3.0 - 2026-10-05 - Export view query and result models.
Updates: v0.2.0 - 2026-10-06 - Export path-addressed PromptCategory dataclass.
Updates: v0.1.0 - 2026-10-02 - Export Prompt and PromptAttachment dataclasses.
"""

from .category_model import PromptCategory
from .prompt_model import AttachmentKind, Prompt, PromptAttachment
from .view_model import SortKey, ViewFilter, ViewQuery, ViewResult

__all__ = [
    "AttachmentKind",
    "Prompt",
    "PromptAttachment",
    "PromptCategory",
    "SortKey",
    "ViewFilter",
    "ViewQuery",
    "ViewResult",
]
