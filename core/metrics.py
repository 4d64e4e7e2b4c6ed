"""Derived text metrics for prompt records.

Updates:
  v0.1.0 - 2026-10-03 - Add word count, token estimate, and complexity scoring.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.prompt_model import Prompt

CHARS_PER_TOKEN = 4
MAX_COMPLEXITY = 5


def word_count(text: str | None) -> int:
    """Return the number of whitespace-delimited tokens in *text*."""
    if not text:
        return 0
    return len(text.split())


def token_estimate(text: str | None) -> int:
    """Return a rough token count (one token per four characters)."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def complexity(prompt: Prompt) -> int:
    """Return a 1-5 complexity score derived from length and metadata."""
    words = word_count(prompt.content)
    score = 1
    if words > 100:
        score += 1
    if words > 200:
        score += 1
    if len(prompt.notes or "") > 50:
        score += 1
    if prompt.attachments:
        score += 1
    if len(prompt.tags) >= 3:
        score += 1
    return min(score, MAX_COMPLEXITY)


__all__ = ["complexity", "token_estimate", "word_count"]
