"""Placeholder assessment for diffs that could not be analyzed at all."""

from __future__ import annotations

from prrisk.types import MigrationRisk, RiskAssessment, RiskLevel

FALLBACK_FACTORS = (
    "Automated risk analysis could not be completed for this diff",
    "Manual review is required: no part of the change was assessed",
)

FALLBACK_FOCUS_AREAS = (
    "Manual review of the entire change",
    "Verify test coverage for all modified code paths",
)


def fallback_assessment(diff_chars: int, skipped: int = 0) -> RiskAssessment:
    """Conservative MEDIUM assessment used when every analysis attempt failed."""
    summary = (
        f"Automated analysis was not possible for this {diff_chars:,}-character diff"
    )
    if skipped:
        summary += f" ({skipped} chunk{'s' if skipped != 1 else ''} exceeded provider limits)"
    summary += "; manual review required."

    return RiskAssessment(
        risk_level=RiskLevel.MEDIUM,
        summary=summary,
        risk_factors=FALLBACK_FACTORS,
        reviewer_focus_areas=FALLBACK_FOCUS_AREAS,
        missing_tests=True,
        migration_risk=MigrationRisk.NONE,
    )
