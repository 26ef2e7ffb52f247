"""Merge per-chunk assessments into one result."""

from __future__ import annotations

from collections.abc import Sequence

from prrisk.types import MigrationRisk, RiskAssessment, RiskLevel


def _union(groups: Sequence[tuple[str, ...]]) -> tuple[str, ...]:
    """Deduplicated union, first occurrence wins."""
    return tuple(dict.fromkeys(item for group in groups for item in group))


def combine_assessments(assessments: Sequence[RiskAssessment]) -> RiskAssessment:
    """Combine chunk assessments conservatively.

    The highest risk level and migration risk win, factor and focus lists are
    unioned, and missing tests in any chunk marks the whole diff. The summary
    is taken from the first chunk at the highest risk level.
    """
    if not assessments:
        raise ValueError("Cannot combine an empty list of assessments")

    if len(assessments) == 1:
        return assessments[0]

    # max() keeps the first of equal elements, so ties go to the earliest chunk
    worst = max(assessments, key=lambda a: a.risk_level.rank)
    risk_level: RiskLevel = worst.risk_level
    migration_risk: MigrationRisk = max(
        (a.migration_risk for a in assessments),
        key=lambda m: m.rank,
    )

    return RiskAssessment(
        risk_level=risk_level,
        summary=f"{worst.summary} (combined from {len(assessments)} chunks)",
        risk_factors=_union([a.risk_factors for a in assessments]),
        reviewer_focus_areas=_union([a.reviewer_focus_areas for a in assessments]),
        missing_tests=any(a.missing_tests for a in assessments),
        migration_risk=migration_risk,
    )
