import pytest

from conftest import make_assessment
from prrisk.engine.combiner import combine_assessments
from prrisk.types import MigrationRisk, RiskLevel


def test_highest_risk_level_wins():
    combined = combine_assessments(
        [
            make_assessment(RiskLevel.LOW, "low"),
            make_assessment(RiskLevel.HIGH, "high"),
            make_assessment(RiskLevel.MEDIUM, "medium"),
        ]
    )

    assert combined.risk_level is RiskLevel.HIGH


def test_single_assessment_is_returned_unchanged():
    only = make_assessment(RiskLevel.MEDIUM, "only one")

    assert combine_assessments([only]) is only


def test_empty_input_rejected():
    with pytest.raises(ValueError):
        combine_assessments([])


def test_factor_lists_are_unioned_without_duplicates():
    combined = combine_assessments(
        [
            make_assessment(factors=("No rollback plan", "Unbounded retry"), focus=("db/migrations",)),
            make_assessment(factors=("Unbounded retry", "Secrets in config"), focus=("db/migrations", "auth")),
        ]
    )

    assert sorted(combined.risk_factors) == ["No rollback plan", "Secrets in config", "Unbounded retry"]
    assert combined.risk_factors.count("Unbounded retry") == 1
    assert sorted(combined.reviewer_focus_areas) == ["auth", "db/migrations"]


def test_missing_tests_in_any_chunk_marks_result():
    combined = combine_assessments(
        [make_assessment(missing_tests=False), make_assessment(missing_tests=True)]
    )

    assert combined.missing_tests is True


def test_no_missing_tests_anywhere():
    combined = combine_assessments([make_assessment(), make_assessment()])

    assert combined.missing_tests is False


def test_migration_risk_takes_maximum():
    combined = combine_assessments(
        [
            make_assessment(migration=MigrationRisk.LOW),
            make_assessment(migration=MigrationRisk.NONE),
            make_assessment(migration=MigrationRisk.HIGH),
        ]
    )
    assert combined.migration_risk is MigrationRisk.HIGH

    all_none = combine_assessments([make_assessment(), make_assessment()])
    assert all_none.migration_risk is MigrationRisk.NONE


def test_summary_comes_from_first_highest_chunk():
    combined = combine_assessments(
        [
            make_assessment(RiskLevel.LOW, "cosmetic"),
            make_assessment(RiskLevel.HIGH, "drops a column"),
            make_assessment(RiskLevel.HIGH, "rewrites auth"),
        ]
    )

    assert combined.summary.startswith("drops a column")
    assert "3 chunks" in combined.summary


def test_inputs_are_not_mutated():
    first = make_assessment(RiskLevel.LOW, "a", factors=("x",))
    second = make_assessment(RiskLevel.HIGH, "b", factors=("y",))

    combined = combine_assessments([first, second])

    assert combined is not first and combined is not second
    assert first.risk_factors == ("x",)
    assert second.risk_factors == ("y",)
    assert second.summary == "b"


def test_result_does_not_depend_on_order_except_summary():
    items = [
        make_assessment(RiskLevel.MEDIUM, "m", factors=("a",), missing_tests=True),
        make_assessment(RiskLevel.LOW, "l", factors=("b",), migration=MigrationRisk.LOW),
    ]

    forward = combine_assessments(items)
    backward = combine_assessments(list(reversed(items)))

    assert forward.risk_level is backward.risk_level
    assert set(forward.risk_factors) == set(backward.risk_factors)
    assert forward.missing_tests == backward.missing_tests
    assert forward.migration_risk is backward.migration_risk
