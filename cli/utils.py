"""Shared CLI utility functions for Prompt Vault commands.

Updates:
  v0.1.0 - 2026-10-15 - Extract stdout logging, path, and prompt rendering helpers.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from logging import Logger

    from models.prompt_model import Prompt


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(path_value: object, *, allow_missing_file: bool = False) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None  # type: ignore[arg-type]
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"

    message = f"{resolved} (missing)"
    if allow_missing_file:
        message = f"{resolved} (missing - created on demand)"
    parent = resolved.parent
    if not parent.exists():
        message += f", parent missing: {parent}"
    return message


def resolve_export_format(path: Path, explicit_format: str | None) -> str:
    """Return an export format slug based on *path* or *explicit_format*."""
    if explicit_format:
        return explicit_format.lower()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return "yaml"
    return "json"


def format_prompt_line(prompt: Prompt, *, favorite: bool = False, width: int = 60) -> str:
    """Return a one-line listing entry for *prompt*."""
    marker = "*" if favorite else " "
    rating = f"{prompt.rating}/5" if prompt.rating else "-"
    title = textwrap.shorten(prompt.title, width=width, placeholder="...")
    return f"{marker} {prompt.id}  [{prompt.category}]  {title}  ({rating})"
