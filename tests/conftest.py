from __future__ import annotations

import json
from collections.abc import Callable

import pytest
import structlog

from prrisk.agents.base import BaseAdapter
from prrisk.config import PRRiskConfig
from prrisk.types import ChunkJob, MigrationRisk, RiskAssessment, RiskLevel


def make_assessment(
    level: RiskLevel = RiskLevel.LOW,
    summary: str = "Small, contained change",
    factors: tuple[str, ...] = (),
    focus: tuple[str, ...] = (),
    missing_tests: bool = False,
    migration: MigrationRisk = MigrationRisk.NONE,
) -> RiskAssessment:
    return RiskAssessment(
        risk_level=level,
        summary=summary,
        risk_factors=factors,
        reviewer_focus_areas=focus,
        missing_tests=missing_tests,
        migration_risk=migration,
    )


def make_payload(**overrides) -> str:
    data = {
        "risk_level": "MEDIUM",
        "risk_summary": "Touches the payment retry loop",
        "risk_factors": ["Retry loop without jitter"],
        "reviewer_focus_areas": ["Error handling in payment flow"],
        "missing_tests": True,
        "migration_risk": "NONE",
    }
    data.update(overrides)
    return json.dumps(data)


def file_section(name: str, body_lines: int, width: int = 40) -> str:
    """A single-file diff section of roughly predictable size."""
    header = [
        f"diff --git a/{name} b/{name}",
        f"--- a/{name}",
        f"+++ b/{name}",
        f"@@ -1,{body_lines} +1,{body_lines} @@",
    ]
    body = [f"+{name[:8]}-{i:04d}-".ljust(width, "x") for i in range(body_lines)]
    return "\n".join(header + body)


class FakeAdapter(BaseAdapter):
    """Adapter whose behaviour per job is decided by a handler function."""

    def __init__(
        self,
        config: PRRiskConfig,
        handler: Callable[[ChunkJob], RiskAssessment] | None = None,
    ) -> None:
        super().__init__(config)
        self.handler = handler or (lambda job: make_assessment())
        self.jobs: list[ChunkJob] = []

    @property
    def model(self) -> str:
        return "fake-model"

    @property
    def label(self) -> str:
        return "fake"

    async def _call_llm(self, system_prompt: str, user_prompt: str) -> str:
        raise NotImplementedError

    async def analyze(self, job: ChunkJob) -> RiskAssessment:
        self.jobs.append(job)
        return self.handler(job)


@pytest.fixture
def config() -> PRRiskConfig:
    return PRRiskConfig(
        max_diff_chars=100_000,
        chunk_chars=8_000,
        min_chunk_chars=500,
        shrink_factor=4,
    )


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in (
        "PRRISK_PROVIDER",
        "LLM_PROVIDER",
        "PRRISK_MODEL",
        "LLM_MODEL",
        "PRRISK_MAX_DIFF_CHARS",
        "PRRISK_CHUNK_CHARS",
        "PRRISK_MIN_CHUNK_CHARS",
        "PRRISK_MAX_CONCURRENT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    # The CLI binds structlog to the stderr of the moment, which CliRunner closes afterwards
    yield
    structlog.reset_defaults()
