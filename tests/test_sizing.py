import pytest

from prrisk.config import PRRiskConfig
from prrisk.engine.sizing import SizeDecision, evaluate_size, max_depth, shrink_budget


@pytest.fixture
def limits():
    return PRRiskConfig(max_diff_chars=30_000, chunk_chars=24_000, min_chunk_chars=1_500)


def test_small_diff_goes_direct(limits):
    assert evaluate_size(2_000, limits) is SizeDecision.DIRECT
    assert evaluate_size(24_000, limits) is SizeDecision.DIRECT


def test_over_budget_is_chunked(limits):
    assert evaluate_size(24_001, limits) is SizeDecision.CHUNK
    assert evaluate_size(500_000, limits) is SizeDecision.CHUNK


def test_without_chunking_hard_max_applies(limits):
    no_chunking = limits.model_copy(update={"chunking": False})

    assert evaluate_size(24_001, no_chunking) is SizeDecision.DIRECT
    assert evaluate_size(30_000, no_chunking) is SizeDecision.DIRECT
    assert evaluate_size(30_001, no_chunking) is SizeDecision.REJECT


def test_shrink_divides_and_stops_at_floor(limits):
    assert shrink_budget(24_000, limits) == 6_000
    assert shrink_budget(6_000, limits) == 1_500
    assert shrink_budget(2_000, limits) == 1_500

    with pytest.raises(ValueError):
        shrink_budget(1_500, limits)


def test_shrink_is_strictly_decreasing(limits):
    budget = limits.chunk_chars
    seen = [budget]
    while budget > limits.min_chunk_chars:
        budget = shrink_budget(budget, limits)
        assert budget < seen[-1]
        seen.append(budget)

    assert seen[-1] == limits.min_chunk_chars


def test_max_depth_matches_shrink_steps(limits):
    assert max_depth(limits) == 2
    assert max_depth(limits.model_copy(update={"min_chunk_chars": 24_000})) == 0
