"""Chunked risk analysis engine."""

from prrisk.engine.combiner import combine_assessments
from prrisk.engine.fallback import fallback_assessment
from prrisk.engine.pipeline import ChunkedRiskAnalyzer
from prrisk.engine.sizing import SizeDecision, evaluate_size
from prrisk.engine.splitter import split_diff

__all__ = [
    "ChunkedRiskAnalyzer",
    "SizeDecision",
    "combine_assessments",
    "evaluate_size",
    "fallback_assessment",
    "split_diff",
]
