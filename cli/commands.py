"""CLI command handlers for Prompt Vault.

Each handler receives the vault, parsed arguments, a logger, and the resolved
settings, and returns a process exit code.

Updates:
  v0.2.1 - 2026-10-19 - Report invalid --limit values instead of using the default.
  v0.2.0 - 2026-10-16 - Add category, catalogue import, and share handlers.
  v0.1.0 - 2026-10-15 - Dispatch commands through COMMAND_SPECS.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from core import (
    ImportMode,
    PromptVaultError,
    read_catalog,
    write_catalog,
)

from .utils import format_prompt_line, print_and_log, resolve_export_format

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import PromptVaultSettings
    from core.prompt_vault import PromptVault
else:  # pragma: no cover - runtime placeholders for type-only imports
    PromptVault = PromptVaultSettings = object

CommandHandler = Callable[
    [PromptVault, argparse.Namespace, logging.Logger, PromptVaultSettings],
    int,
]

EXIT_OK = 0
EXIT_FAILED = 4
EXIT_EXPORT_FAILED = 6


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


def _report_error(logger: logging.Logger, action: str, exc: Exception) -> int:
    print_and_log(logger, logging.ERROR, f"{action} failed: {exc}")
    return EXIT_FAILED


def run_list(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    try:
        query = vault.view_query(
            view_filter=args.view_filter,
            category=args.category,
            sort_key=args.sort_key,
            search_term=args.search,
            page=args.page,
            page_size=args.page_size,
            include_subcategories=args.include_subcategories,
        )
    except PromptVaultError as exc:
        return _report_error(logger, "Listing prompts", exc)
    result = vault.resolve_view(query)
    if not result.items:
        print(f"No prompts on page {result.page} ({result.total_count} matching).")
        return EXIT_OK
    for prompt in result.items:
        print(format_prompt_line(prompt, favorite=vault.is_favorite(prompt.id)))
    print(
        f"Page {result.page}/{max(result.page_count, 1)} "
        f"({result.total_count} matching prompt(s))"
    )
    return EXIT_OK


def run_add(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    try:
        prompt = vault.create_prompt(
            title=args.title,
            content=args.content,
            category=args.category,
            tags=args.tags,
            notes=args.notes,
            rating=args.rating,
            engine=args.engine,
        )
    except PromptVaultError as exc:
        return _report_error(logger, "Creating prompt", exc)
    print_and_log(logger, logging.INFO, f"Created prompt {prompt.id} in '{prompt.category}'")
    return EXIT_OK


def run_delete(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    ids = list(args.ids)
    if len(ids) == 1:
        try:
            vault.delete_prompt(ids[0])
        except PromptVaultError as exc:
            return _report_error(logger, "Deleting prompt", exc)
        print_and_log(logger, logging.INFO, f"Deleted prompt {ids[0]}")
        return EXIT_OK
    removed = vault.bulk_delete(ids)
    print_and_log(logger, logging.INFO, f"Deleted {removed} of {len(ids)} prompt(s)")
    return EXIT_OK


def run_favorite(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    try:
        state = vault.toggle_favorite(args.id)
    except PromptVaultError as exc:
        return _report_error(logger, "Toggling favorite", exc)
    label = "added to" if state else "removed from"
    print_and_log(logger, logging.INFO, f"Prompt {args.id} {label} favorites")
    return EXIT_OK


def run_suggest(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    limit = args.limit if args.limit is not None else settings.suggestion_limit
    try:
        suggestions = vault.suggest(args.query, limit)
    except PromptVaultError as exc:
        return _report_error(logger, "Suggestion lookup", exc)
    if not suggestions:
        print("No suggestions.")
        return EXIT_OK
    for suggestion in suggestions:
        print(suggestion)
    return EXIT_OK


def run_duplicates(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    threshold = args.threshold if args.threshold is not None else settings.duplicate_threshold
    try:
        pairs = vault.find_duplicates(threshold)
    except PromptVaultError as exc:
        return _report_error(logger, "Duplicate scan", exc)
    if not pairs:
        print("No near-duplicate prompts found.")
        return EXIT_OK
    for pair in pairs:
        print(
            f"{pair.similarity_pct:>3}%  {pair.first.id} '{pair.first.title}'"
            f"  <->  {pair.second.id} '{pair.second.title}'"
        )
    return EXIT_OK


def run_stats(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del logger, settings
    stats = vault.stats()
    if getattr(args, "as_json", False):
        print(json.dumps(stats.to_dict(), indent=2))
        return EXIT_OK
    print(f"Prompts:           {stats.total_prompts}")
    print(f"Favorites:         {stats.total_favorites}")
    print(f"Categories:        {stats.total_categories}")
    print(f"Created today:     {stats.created_today}")
    print(f"Recent:            {stats.recent}")
    print(f"With attachments:  {stats.with_attachments}")
    print(f"Words / tokens:    {stats.total_words} / ~{stats.total_tokens}")
    return EXIT_OK


def run_categories(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del args, logger, settings
    counts = vault.stats().category_counts
    for category in vault.list_categories():
        indent = "  " * category.depth
        print(f"{indent}{category.label} ({category.path}): {counts.get(category.path, 0)}")
    return EXIT_OK


def run_category_add(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    try:
        path = vault.create_category(args.name, args.parent, color=args.color, icon=args.icon)
    except PromptVaultError as exc:
        return _report_error(logger, "Creating category", exc)
    print_and_log(logger, logging.INFO, f"Created category {path}")
    return EXIT_OK


def run_category_rename(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    try:
        new_path = vault.rename_category(args.path, args.name)
    except PromptVaultError as exc:
        return _report_error(logger, "Renaming category", exc)
    print_and_log(logger, logging.INFO, f"Renamed category {args.path} -> {new_path}")
    return EXIT_OK


def run_category_delete(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    try:
        moved = vault.delete_category(args.path)
    except PromptVaultError as exc:
        return _report_error(logger, "Deleting category", exc)
    print_and_log(
        logger,
        logging.INFO,
        f"Deleted category {args.path}; {moved} prompt(s) moved to 'other'",
    )
    return EXIT_OK


def run_catalog_export(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    output_path = Path(args.path).expanduser()
    fmt = resolve_export_format(output_path, getattr(args, "format", None))
    try:
        resolved = write_catalog(vault.export_catalog(), output_path, fmt=fmt)
    except (OSError, ValueError) as exc:
        message = f"Failed to export catalogue: {exc}"
        print_and_log(logger, logging.ERROR, message)
        return EXIT_EXPORT_FAILED
    message = f"Prompt catalogue exported to {resolved} ({fmt})"
    print_and_log(logger, logging.INFO, message)
    return EXIT_OK


def run_catalog_import(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    mode = ImportMode.REPLACE if args.replace else ImportMode.MERGE
    try:
        result = vault.import_catalog(read_catalog(Path(args.path)), mode)
    except PromptVaultError as exc:
        return _report_error(logger, "Catalogue import", exc)
    summary = ", ".join(f"{key}={value}" for key, value in result.summary().items())
    print_and_log(logger, logging.INFO, f"Catalogue imported ({mode.value}): {summary}")
    return EXIT_OK


def run_share(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    try:
        if args.text:
            print(vault.format_prompt_for_share(args.id))
        elif settings.share_base_url:
            print(vault.share_url(args.id, settings.share_base_url))
        else:
            print(vault.share_token(args.id))
    except PromptVaultError as exc:
        return _report_error(logger, "Sharing prompt", exc)
    return EXIT_OK


def run_share_import(
    vault: PromptVault,
    args: argparse.Namespace,
    logger: logging.Logger,
    settings: PromptVaultSettings,
) -> int:
    del settings
    try:
        prompt = vault.import_shared(args.token)
    except PromptVaultError as exc:
        return _report_error(logger, "Share import", exc)
    print_and_log(logger, logging.INFO, f"Imported shared prompt as {prompt.id}")
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "list": CommandSpec(run_list),
    "add": CommandSpec(run_add),
    "delete": CommandSpec(run_delete),
    "favorite": CommandSpec(run_favorite),
    "suggest": CommandSpec(run_suggest),
    "duplicates": CommandSpec(run_duplicates),
    "stats": CommandSpec(run_stats),
    "categories": CommandSpec(run_categories),
    "category-add": CommandSpec(run_category_add),
    "category-rename": CommandSpec(run_category_rename),
    "category-delete": CommandSpec(run_category_delete),
    "catalog-export": CommandSpec(run_catalog_export),
    "catalog-import": CommandSpec(run_catalog_import),
    "share": CommandSpec(run_share),
    "share-import": CommandSpec(run_share_import),
}


__all__ = ["COMMAND_SPECS", "CommandSpec", "EXIT_FAILED", "EXIT_OK"]
