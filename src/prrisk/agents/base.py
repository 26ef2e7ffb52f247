"""Abstract base adapter with prompt building and response validation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import structlog

from prrisk.schema import parse_assessment
from prrisk.types import ChunkJob, RiskAssessment

if TYPE_CHECKING:
    from prrisk.config import PRRiskConfig

logger = structlog.get_logger()

_RESPONSE_SHAPE = """\
{
  "risk_level": "LOW|MEDIUM|HIGH",
  "risk_summary": "concise, actionable summary (1-2 sentences)",
  "risk_factors": ["specific risk 1", "specific risk 2"],
  "reviewer_focus_areas": ["area to review 1", "area to review 2"],
  "missing_tests": true|false,
  "migration_risk": "NONE|LOW|HIGH"
}"""

_GUIDELINES = """\
Guidelines:
- risk_level: LOW for minor changes, MEDIUM for significant logic changes, HIGH for critical path/breaking changes
- risk_summary: Be specific and actionable, don't restate the diff
- risk_factors: List concrete risks (e.g., "Database schema change without rollback plan")
- reviewer_focus_areas: Where reviewers should focus (e.g., "Error handling in payment flow")
- missing_tests: true if code changes lack corresponding test updates
- migration_risk: NONE (no migrations), LOW (backward compatible), HIGH (breaking changes/data migration)"""


def build_system_prompt() -> str:
    """Build the system prompt describing the reviewer's role."""
    return (
        "You are an expert code reviewer analyzing production risk. "
        "Return only valid JSON with no additional text or markdown formatting."
    )


def build_analysis_prompt(job: ChunkJob) -> str:
    """Build the user prompt for one diff (or one chunk of a larger diff)."""
    parts: list[str] = [
        "Analyze this git diff for production risk. "
        "Focus on critical paths, tests, migrations, and runtime impact."
    ]
    if job.path:
        parts.append(
            f"This is part {job.path} of a larger diff that was split to fit "
            "request limits. Assess only what is visible in this part."
        )
    parts.append(f"Git Diff:\n```\n{job.text}\n```")

    if job.title:
        parts.append(f"PR Title: {job.title}")
    if job.description:
        parts.append(f"PR Description: {job.description}")

    parts.append(
        "Return ONLY valid JSON (no markdown, no extra text) with this exact structure:\n"
        f"{_RESPONSE_SHAPE}"
    )
    parts.append(_GUIDELINES)
    parts.append("Keep it concise and human-readable.")
    return "\n\n".join(parts)


class BaseAdapter(ABC):
    """Abstract base for all completion-client adapters.

    Subclasses implement `_call_llm` and translate every provider failure
    into one of the tagged errors in `prrisk.errors`.
    """

    def __init__(self, config: PRRiskConfig) -> None:
        self.config = config

    @property
    def model(self) -> str:
        """Model identifier sent to the provider."""
        return self.config.model or ""

    @property
    def label(self) -> str:
        """Human-readable label for this adapter (shown in CLI output)."""
        return "base"

    @abstractmethod
    async def _call_llm(self, system_prompt: str, user_prompt: str) -> str:
        """Send a prompt to the LLM and return the raw response text."""
        ...

    async def analyze(self, job: ChunkJob) -> RiskAssessment:
        """Assess a single chunk job. Raises a tagged PRRiskError on failure."""
        system = build_system_prompt()
        user = build_analysis_prompt(job)

        logger.debug("calling_llm", adapter=self.label, chunk=job.label, chars=len(job.text))
        raw_response = await self._call_llm(system, user)

        return parse_assessment(raw_response)
