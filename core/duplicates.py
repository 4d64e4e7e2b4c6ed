"""Near-duplicate detection across prompt contents.

Updates:
  v0.1.0 - 2026-10-07 - Pairwise similarity scan replacing the prefix-hash heuristic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .similarity import similarity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.prompt_model import Prompt

logger = logging.getLogger("prompt_vault.duplicates")

DEFAULT_DUPLICATE_THRESHOLD = 0.7


@dataclass(slots=True, frozen=True)
class DuplicatePair:
    """Two prompts whose contents are more similar than the threshold."""

    first: Prompt
    second: Prompt
    similarity_pct: int


def find_duplicates(
    prompts: Sequence[Prompt],
    threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
) -> list[DuplicatePair]:
    """Compare every unordered pair and report those strictly above *threshold*.

    Quadratic in the number of prompts; intended for personal-library sizes.
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError("threshold must be between 0 and 1")
    pairs: list[DuplicatePair] = []
    for index, first in enumerate(prompts):
        for second in prompts[index + 1 :]:
            score = similarity(first.content, second.content)
            if score > threshold:
                pairs.append(DuplicatePair(first, second, round(score * 100)))
    logger.debug("Duplicate scan over %d prompts found %d pairs", len(prompts), len(pairs))
    return pairs


__all__ = ["DEFAULT_DUPLICATE_THRESHOLD", "DuplicatePair", "find_duplicates"]
