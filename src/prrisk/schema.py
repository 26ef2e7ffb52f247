"""Strict validation of completion payloads into RiskAssessment objects."""

from __future__ import annotations

import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from prrisk.errors import SchemaError
from prrisk.types import MigrationRisk, RiskAssessment, RiskLevel


class RiskPayload(BaseModel):
    """Wire shape of a risk assessment. No coercion: wrong types are errors."""

    model_config = ConfigDict(strict=True)

    risk_level: Literal["LOW", "MEDIUM", "HIGH"]
    risk_summary: str = Field(min_length=1)
    risk_factors: list[str]
    reviewer_focus_areas: list[str]
    missing_tests: bool
    migration_risk: Literal["NONE", "LOW", "HIGH"]

    def to_assessment(self) -> RiskAssessment:
        return RiskAssessment(
            risk_level=RiskLevel(self.risk_level),
            summary=self.risk_summary,
            risk_factors=tuple(dict.fromkeys(self.risk_factors)),
            reviewer_focus_areas=tuple(dict.fromkeys(self.reviewer_focus_areas)),
            missing_tests=self.missing_tests,
            migration_risk=MigrationRisk(self.migration_risk),
        )


def parse_assessment(raw: str) -> RiskAssessment:
    """Validate raw completion text as a RiskAssessment.

    The text must be a bare JSON object. Markdown fences, missing fields,
    unknown enum values and non-boolean flags are rejected, not repaired.

    Raises:
        SchemaError: if the payload is not a well-formed assessment.
    """
    try:
        payload = RiskPayload.model_validate_json(raw)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise SchemaError(f"Invalid risk assessment payload: {problems}") from e
    return payload.to_assessment()


def validate_assessment(assessment: RiskAssessment) -> RiskAssessment:
    """Run an in-memory assessment through the same schema as LLM output."""
    return parse_assessment(json.dumps(assessment.to_dict()))
