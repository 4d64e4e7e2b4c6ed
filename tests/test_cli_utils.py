"""Tests for CLI helper utilities and logging bootstrap."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from cli.runtime import setup_logging
from cli.utils import describe_path, format_prompt_line, resolve_export_format
from models.prompt_model import Prompt


def test_format_prompt_line_marks_favorites_and_shortens_titles() -> None:
    prompt = Prompt(id="p1", title="word " * 30, content="c", category="code", rating=3)

    line = format_prompt_line(prompt, favorite=True, width=20)

    assert line.startswith("* p1  [code]  ")
    assert line.endswith("(3/5)")
    assert "..." in line
    assert format_prompt_line(Prompt(id="p2", title="t", content="c")).endswith("(-)")


def test_describe_path_reports_state(tmp_path: Path) -> None:
    existing = tmp_path / "file.txt"
    existing.write_text("x", encoding="utf-8")

    assert describe_path(None) == "not set"
    assert describe_path(existing).endswith("(exists)")
    assert describe_path(tmp_path).endswith("(exists but is a directory)")
    assert "created on demand" in describe_path(tmp_path / "new.json", allow_missing_file=True)
    assert "parent missing" in describe_path(tmp_path / "a" / "b.json")


@pytest.mark.parametrize(
    ("path", "explicit", "expected"),
    [("out.yml", None, "yaml"), ("out.json", None, "json"), ("out.txt", "YAML", "yaml")],
)
def test_resolve_export_format(path: str, explicit: str | None, expected: str) -> None:
    assert resolve_export_format(Path(path), explicit) == expected


@pytest.fixture
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    vault_logger = logging.getLogger("prompt_vault")
    handlers, level = list(root.handlers), root.level
    vault_level = vault_logger.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    vault_logger.setLevel(vault_level)


@pytest.mark.usefixtures("_restore_logging")
def test_setup_logging_applies_ini_file(tmp_path: Path) -> None:
    config_path = tmp_path / "logging.conf"
    config_path.write_text(
        "\n".join(
            [
                "[loggers]",
                "keys=root,prompt_vault",
                "[handlers]",
                "keys=null",
                "[formatters]",
                "keys=",
                "[logger_root]",
                "level=WARNING",
                "handlers=null",
                "[logger_prompt_vault]",
                "level=INFO",
                "handlers=null",
                "qualname=prompt_vault",
                "propagate=1",
                "[handler_null]",
                "class=NullHandler",
                "args=()",
            ]
        ),
        encoding="utf-8",
    )

    setup_logging(config_path, verbose=True)

    assert logging.getLogger("prompt_vault").level == logging.DEBUG
