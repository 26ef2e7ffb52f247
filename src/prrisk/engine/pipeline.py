"""Full analysis pipeline: size check → split → analyze (re-splitting on limits) → combine."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from prrisk.engine.combiner import combine_assessments
from prrisk.engine.fallback import fallback_assessment
from prrisk.engine.sizing import SizeDecision, evaluate_size, max_depth, shrink_budget
from prrisk.engine.splitter import split_diff
from prrisk.errors import InputError, SchemaError, SizeLimitError
from prrisk.types import AnalysisResult, ChunkJob, RiskAssessment

if TYPE_CHECKING:
    from prrisk.agents.base import BaseAdapter
    from prrisk.config import PRRiskConfig

logger = structlog.get_logger()


@dataclass(slots=True)
class _Outcome:
    """What one job (and everything it was re-split into) produced."""

    assessments: list[RiskAssessment] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def extend(self, other: _Outcome) -> None:
        self.assessments.extend(other.assessments)
        self.skipped.extend(other.skipped)


class ChunkedRiskAnalyzer:
    """Analyze diffs of any size against a size- and rate-limited completion API.

    Every job is sent once. When the provider rejects it for size or rate
    reasons, the job's text is split again with a strictly smaller budget and
    each piece is analyzed the same way, down to `min_chunk_chars`. Pieces
    that still fail at the floor are skipped. If nothing at all could be
    analyzed, a fallback assessment is returned instead of an error.
    """

    def __init__(self, adapter: BaseAdapter, config: PRRiskConfig) -> None:
        self._adapter = adapter
        self._config = config
        self._max_depth = max_depth(config)

    async def analyze(
        self,
        diff: str,
        title: str | None = None,
        description: str | None = None,
    ) -> AnalysisResult:
        """Produce one assessment for `diff`.

        Raises:
            InputError: the diff is empty or whitespace-only.
            SizeLimitError: chunking is disabled and the diff is over the hard maximum
                (or the provider rejected it for size).
            SchemaError: a response was malformed and skipping is not enabled.
            TransportError: any provider failure other than size/rate limits.
        """
        if not diff or not diff.strip():
            raise InputError("No diff content to analyze")

        cfg = self._config
        size = len(diff)
        decision = evaluate_size(size, cfg)
        logger.info("size_evaluated", chars=size, decision=decision.value)

        if decision is SizeDecision.REJECT:
            raise SizeLimitError(
                f"Diff is {size} characters, over the {cfg.max_diff_chars} limit, "
                "and chunking is disabled"
            )

        root = ChunkJob(text=diff, budget=cfg.chunk_chars, title=title, description=description)
        if decision is SizeDecision.DIRECT:
            jobs = [root]
        else:
            pieces = split_diff(diff, cfg.chunk_chars)
            jobs = [root.child(piece, cfg.chunk_chars, i) for i, piece in enumerate(pieces, 1)]
            logger.info("diff_split", chunks=len(jobs), budget=cfg.chunk_chars)

        semaphore = asyncio.Semaphore(cfg.max_concurrent)
        outcome = await self._analyze_all(jobs, semaphore, depth=0)

        result = AnalysisResult(
            assessment=fallback_assessment(size, skipped=len(outcome.skipped)),
            diff_chars=size,
            chunks_total=len(jobs),
            chunks_analyzed=len(outcome.assessments),
            skipped_chunks=outcome.skipped,
            model=self._adapter.model,
        )
        if outcome.assessments:
            result.assessment = combine_assessments(outcome.assessments)
        else:
            result.used_fallback = True
            logger.warning("fallback_used", chars=size, skipped=len(outcome.skipped))

        logger.info(
            "analysis_complete",
            risk_level=result.assessment.risk_level.value,
            analyzed=result.chunks_analyzed,
            skipped=len(result.skipped_chunks),
        )
        return result

    async def _analyze_all(
        self,
        jobs: list[ChunkJob],
        semaphore: asyncio.Semaphore,
        depth: int,
    ) -> _Outcome:
        """Run jobs concurrently, keeping results in job order.

        Any error cancels the remaining jobs before it propagates, so no
        partial set of results ever reaches the combiner.
        """
        tasks = [
            asyncio.create_task(self._analyze_job(job, semaphore, depth))
            for job in jobs
        ]
        try:
            outcomes = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        merged = _Outcome()
        for outcome in outcomes:
            merged.extend(outcome)
        return merged

    async def _analyze_job(
        self,
        job: ChunkJob,
        semaphore: asyncio.Semaphore,
        depth: int,
    ) -> _Outcome:
        cfg = self._config
        if depth > self._max_depth:
            raise RuntimeError(
                f"Re-split depth {depth} exceeded bound {self._max_depth} for chunk {job.label}"
            )

        try:
            # Only the provider call holds the semaphore; nested splits must not
            async with semaphore:
                assessment = await self._adapter.analyze(job)
        except SizeLimitError as e:
            if not cfg.chunking:
                raise
            if job.budget <= cfg.min_chunk_chars:
                logger.warning(
                    "chunk_skipped",
                    chunk=job.label,
                    chars=len(job.text),
                    reason="size_limit_at_floor",
                    status=e.status_code,
                )
                return _Outcome(skipped=[job.label])
            limited = e
        except SchemaError as e:
            if not cfg.skip_malformed_chunks:
                raise
            logger.warning("chunk_skipped", chunk=job.label, reason="malformed_response", error=str(e))
            return _Outcome(skipped=[job.label])
        else:
            logger.info(
                "chunk_analyzed",
                chunk=job.label,
                chars=len(job.text),
                risk_level=assessment.risk_level.value,
            )
            return _Outcome(assessments=[assessment])

        budget = shrink_budget(job.budget, cfg)
        pieces = split_diff(job.text, budget)
        logger.info(
            "chunk_resplit",
            chunk=job.label,
            chars=len(job.text),
            budget=budget,
            pieces=len(pieces),
            status=limited.status_code,
        )
        children = [job.child(piece, budget, i) for i, piece in enumerate(pieces, 1)]
        return await self._analyze_all(children, semaphore, depth + 1)
