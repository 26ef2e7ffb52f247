"""Analysis orchestrator tying config, adapter, engine and reports together."""

from __future__ import annotations

from pathlib import Path

import structlog

from prrisk.agents import BaseAdapter, create_adapter
from prrisk.config import PRRiskConfig, load_config
from prrisk.engine.pipeline import ChunkedRiskAnalyzer
from prrisk.reports.generate import generate_report
from prrisk.types import AnalysisResult

logger = structlog.get_logger()


async def run_analysis(
    diff: str,
    config: PRRiskConfig | None = None,
    title: str | None = None,
    description: str | None = None,
    adapter: BaseAdapter | None = None,
) -> AnalysisResult:
    """Assess the risk of a diff.

    Args:
        diff: Unified diff text.
        config: Config to use. Loads from .prriskrc if None.
        title: Optional PR title passed to the model as context.
        description: Optional PR description passed to the model as context.
        adapter: Completion client to use. Built from config if None.

    Returns:
        The AnalysisResult, always carrying an assessment.
    """
    cfg = config or load_config()
    client = adapter or create_adapter(cfg)
    logger.info("analysis_started", chars=len(diff), adapter=client.label)

    analyzer = ChunkedRiskAnalyzer(client, cfg)
    return await analyzer.analyze(diff, title=title, description=description)


def write_report(result: AnalysisResult, config: PRRiskConfig) -> Path:
    """Write a report for `result` into the configured report directory."""
    report_path = generate_report(
        result=result,
        output_dir=Path(config.report_dir),
        fmt=config.report_format,
    )
    logger.info("report_generated", path=str(report_path))
    return report_path
