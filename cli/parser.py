"""Argument parser for the Prompt Vault CLI.

Updates:
  v0.2.0 - 2026-10-16 - Add category, catalogue, and share subcommands.
  v0.1.0 - 2026-10-15 - Introduce list/add/delete/favorite/suggest commands.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from models.view_model import SortKey, ViewFilter


def _add_prompt_listing_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--filter",
        dest="view_filter",
        choices=[item.value for item in ViewFilter],
        default=ViewFilter.ALL.value,
        help="Record subset to show (default: all).",
    )
    parser.add_argument(
        "--category",
        default=None,
        help="Category path used with --filter category.",
    )
    parser.add_argument(
        "--include-subcategories",
        action="store_true",
        help="Include records from descendant categories when filtering by category.",
    )
    parser.add_argument(
        "--sort",
        dest="sort_key",
        choices=[item.value for item in SortKey],
        default=SortKey.NEWEST.value,
        help="Sort order (default: newest).",
    )
    parser.add_argument("--search", default="", help="Case-insensitive search term.")
    parser.add_argument("--page", type=int, default=1, help="1-based page number.")
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Records per page (defaults to the configured page size).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(description="Prompt Vault command line")
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging for prompt_vault loggers.",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List prompts through the view pipeline.")
    _add_prompt_listing_arguments(list_parser)

    add_parser = subparsers.add_parser("add", help="Create a new prompt.")
    add_parser.add_argument("title", help="Prompt title.")
    add_parser.add_argument("content", help="Prompt body text.")
    add_parser.add_argument("--category", default=None, help="Category path (default: other).")
    add_parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=None,
        help="Tag to attach; repeat for multiple tags.",
    )
    add_parser.add_argument("--notes", default=None, help="Optional notes.")
    add_parser.add_argument("--rating", type=int, default=None, help="Rating from 0 to 5.")
    add_parser.add_argument("--engine", default=None, help="Target model or engine name.")

    delete_parser = subparsers.add_parser("delete", help="Delete one or more prompts by id.")
    delete_parser.add_argument("ids", nargs="+", help="Prompt ids to delete.")

    favorite_parser = subparsers.add_parser("favorite", help="Toggle a prompt's favorite flag.")
    favorite_parser.add_argument("id", help="Prompt id.")

    suggest_parser = subparsers.add_parser(
        "suggest",
        help="Show autocomplete suggestions for a search term.",
    )
    suggest_parser.add_argument("query", type=str, help="Search term (at least two characters).")
    suggest_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of suggestions to display (defaults to the configured limit).",
    )

    duplicates_parser = subparsers.add_parser(
        "duplicates",
        help="Report prompt pairs with near-identical content.",
    )
    duplicates_parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Similarity threshold between 0 and 1 (defaults to the configured value).",
    )

    stats_parser = subparsers.add_parser("stats", help="Summarise the prompt library.")
    stats_parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Emit statistics as JSON.",
    )

    subparsers.add_parser("categories", help="Show the category tree with record counts.")

    category_add = subparsers.add_parser("category-add", help="Create a category.")
    category_add.add_argument("name", help="Display name of the new category.")
    category_add.add_argument("--parent", default=None, help="Parent category path.")
    category_add.add_argument("--color", default=None, help="Hex colour for the category.")
    category_add.add_argument("--icon", default=None, help="Icon identifier for the category.")

    category_rename = subparsers.add_parser(
        "category-rename",
        help="Rename a category and move its records.",
    )
    category_rename.add_argument("path", help="Existing category path.")
    category_rename.add_argument("name", help="New display name.")

    category_delete = subparsers.add_parser(
        "category-delete",
        help="Delete a category subtree; its records move to 'other'.",
    )
    category_delete.add_argument("path", help="Category path to delete.")

    export_parser = subparsers.add_parser(
        "catalog-export",
        help="Export the current prompt catalogue to JSON or YAML.",
    )
    export_parser.add_argument("path", type=Path, help="Destination file path (.json or .yaml)")
    export_parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default=None,
        help="Explicit output format (defaults based on file extension).",
    )

    import_parser = subparsers.add_parser(
        "catalog-import",
        help="Import a JSON or YAML catalogue export.",
    )
    import_parser.add_argument("path", type=Path, help="Catalogue file to import.")
    import_parser.add_argument(
        "--replace",
        action="store_true",
        help="Replace existing prompts whose id collides instead of keeping them.",
    )

    share_parser = subparsers.add_parser("share", help="Print a share token or link for a prompt.")
    share_parser.add_argument("id", help="Prompt id.")
    share_parser.add_argument(
        "--text",
        action="store_true",
        help="Print a readable plain-text rendering instead of a token.",
    )

    share_import = subparsers.add_parser(
        "share-import",
        help="Create a prompt from a share token.",
    )
    share_import.add_argument("token", help="Share token produced by the share command.")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the Prompt Vault command line."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
