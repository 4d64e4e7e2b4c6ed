"""Normalised edit-distance similarity between prompt texts.

Updates:
  v0.1.0 - 2026-10-03 - Introduce Levenshtein distance and similarity ratio helpers.
"""

from __future__ import annotations


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between *a* and *b*.

    Insertions, deletions, and substitutions each cost one. Only a single row
    sized to the shorter string is kept in memory.
    """
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return a similarity ratio in ``[0, 1]``; two empty strings score 1."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - edit_distance(a, b)) / longest


__all__ = ["edit_distance", "similarity"]
