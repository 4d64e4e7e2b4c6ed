"""Tests for edit-distance similarity helpers.

Updates:
  v0.1.0 - 2026-10-03 - Cover Levenshtein distance and ratio edge cases.
"""

from __future__ import annotations

import pytest

from core.similarity import edit_distance, similarity


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("", "", 0),
        ("abc", "", 3),
        ("", "abc", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("same", "same", 0),
    ],
)
def test_edit_distance_counts_unit_cost_edits(a: str, b: str, expected: int) -> None:
    assert edit_distance(a, b) == expected


def test_edit_distance_is_symmetric() -> None:
    assert edit_distance("prompt", "promptly") == edit_distance("promptly", "prompt") == 2


def test_similarity_of_two_empty_strings_is_one() -> None:
    assert similarity("", "") == 1.0


def test_similarity_against_empty_string_is_zero() -> None:
    assert similarity("content", "") == 0.0


def test_similarity_is_normalised_by_longer_string() -> None:
    """One missing character out of 23 yields 22/23."""
    score = similarity("Create a Python script", "Create a Python scripts")

    assert score == pytest.approx(22 / 23)
    assert round(score * 100) >= 90


def test_similarity_is_case_sensitive() -> None:
    assert similarity("ABC", "abc") == 0.0
