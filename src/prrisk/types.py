"""Core data types for PRRisk."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal


class RiskLevel(StrEnum):
    """Overall production risk of a change. LOW < MEDIUM < HIGH."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


class MigrationRisk(StrEnum):
    """Risk carried by schema/data migrations. NONE < LOW < HIGH."""

    NONE = "NONE"
    LOW = "LOW"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _MIGRATION_RANK[self]


_RISK_RANK: dict[RiskLevel, int] = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
}

_MIGRATION_RANK: dict[MigrationRisk, int] = {
    MigrationRisk.NONE: 0,
    MigrationRisk.LOW: 1,
    MigrationRisk.HIGH: 2,
}

AgentMode = Literal["copilot", "manual"]

ProviderId = Literal[
    "openai",
    "groq",
    "anthropic",
    "gemini",
    "deepseek",
    "mistral",
]

ReportFormat = Literal["html", "markdown"]


@dataclass(frozen=True, slots=True)
class RiskAssessment:
    """A single structured risk assessment of a diff (or part of one)."""

    risk_level: RiskLevel
    summary: str
    risk_factors: tuple[str, ...] = ()
    reviewer_focus_areas: tuple[str, ...] = ()
    missing_tests: bool = False
    migration_risk: MigrationRisk = MigrationRisk.NONE

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape returned by the completion API."""
        return {
            "risk_level": self.risk_level.value,
            "risk_summary": self.summary,
            "risk_factors": list(self.risk_factors),
            "reviewer_focus_areas": list(self.reviewer_focus_areas),
            "missing_tests": self.missing_tests,
            "migration_risk": self.migration_risk.value,
        }


@dataclass(frozen=True, slots=True)
class ChunkJob:
    """A slice of a diff queued for one analysis call."""

    text: str
    budget: int
    path: str = ""
    title: str | None = None
    description: str | None = None

    def child(self, text: str, budget: int, index: int) -> ChunkJob:
        """Build a nested job for the `index`-th (1-based) piece of this one."""
        path = f"{self.path}.{index}" if self.path else str(index)
        return ChunkJob(
            text=text,
            budget=budget,
            path=path,
            title=self.title,
            description=self.description,
        )

    @property
    def label(self) -> str:
        return self.path or "whole diff"


@dataclass(slots=True)
class AnalysisResult:
    """Complete result of an analysis run."""

    assessment: RiskAssessment
    diff_chars: int = 0
    chunks_total: int = 0
    chunks_analyzed: int = 0
    skipped_chunks: list[str] = field(default_factory=list)
    used_fallback: bool = False
    model: str = ""

    @property
    def degraded(self) -> bool:
        """True when part (or all) of the diff was never analyzed."""
        return self.used_fallback or bool(self.skipped_chunks)

    def to_dict(self) -> dict[str, Any]:
        return {
            "assessment": self.assessment.to_dict(),
            "diff_chars": self.diff_chars,
            "chunks_total": self.chunks_total,
            "chunks_analyzed": self.chunks_analyzed,
            "skipped_chunks": list(self.skipped_chunks),
            "used_fallback": self.used_fallback,
            "model": self.model,
        }
