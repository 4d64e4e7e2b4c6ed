"""Tests for derived prompt metrics.

Updates:
  v0.1.0 - 2026-10-03 - Cover word count, token estimate, and complexity scoring.
"""

from __future__ import annotations

from core.metrics import complexity, token_estimate, word_count
from models.prompt_model import Prompt


def _prompt(**overrides: object) -> Prompt:
    fields: dict[str, object] = {"id": "p1", "title": "Title", "content": "one two"}
    fields.update(overrides)
    return Prompt(**fields)  # type: ignore[arg-type]


def test_word_count_splits_on_whitespace() -> None:
    assert word_count("  alpha\tbeta\n gamma  ") == 3
    assert word_count("") == 0
    assert word_count(None) == 0


def test_token_estimate_rounds_up_quarter_length() -> None:
    assert token_estimate("abcd") == 1
    assert token_estimate("abcde") == 2
    assert token_estimate(None) == 0


def test_complexity_minimum_is_one() -> None:
    assert complexity(_prompt()) == 1


def test_complexity_adds_points_for_length_notes_attachments_and_tags() -> None:
    prompt = _prompt(
        content=" ".join(["word"] * 250),
        notes="n" * 51,
        attachments=[{"kind": "input", "data": "img://1"}],
        tags=["a", "b", "c"],
    )

    assert complexity(prompt) == 5


def test_complexity_counts_long_content_tiers() -> None:
    assert complexity(_prompt(content=" ".join(["w"] * 101))) == 2
    assert complexity(_prompt(content=" ".join(["w"] * 201))) == 3
