"""Decide whether a diff can be sent in one request."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prrisk.config import PRRiskConfig


class SizeDecision(StrEnum):
    DIRECT = "direct"
    CHUNK = "chunk"
    REJECT = "reject"


def evaluate_size(size: int, config: PRRiskConfig) -> SizeDecision:
    """Classify a diff of `size` characters against the configured limits.

    Anything within the per-request chunk budget goes out directly. Larger
    diffs are chunked when chunking is enabled; otherwise they are still
    sent as-is up to the hard maximum and rejected beyond it.
    """
    if size <= config.chunk_chars:
        return SizeDecision.DIRECT
    if config.chunking:
        return SizeDecision.CHUNK
    if size <= config.max_diff_chars:
        return SizeDecision.DIRECT
    return SizeDecision.REJECT


def shrink_budget(budget: int, config: PRRiskConfig) -> int:
    """Next, strictly smaller, budget for re-splitting a rejected chunk.

    Callers must only shrink budgets above the floor.
    """
    if budget <= config.min_chunk_chars:
        raise ValueError(f"budget {budget} is already at the floor ({config.min_chunk_chars})")
    return max(budget // config.shrink_factor, config.min_chunk_chars)


def max_depth(config: PRRiskConfig) -> int:
    """Upper bound on nested re-split levels starting from the chunk budget."""
    depth = 0
    budget = config.chunk_chars
    while budget > config.min_chunk_chars:
        budget = shrink_budget(budget, config)
        depth += 1
    return depth
