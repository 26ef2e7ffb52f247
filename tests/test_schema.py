import json

import pytest

from conftest import make_payload
from prrisk.errors import ErrorKind, SchemaError
from prrisk.schema import parse_assessment
from prrisk.types import MigrationRisk, RiskLevel


def test_valid_payload_parses():
    assessment = parse_assessment(make_payload())

    assert assessment.risk_level is RiskLevel.MEDIUM
    assert assessment.summary == "Touches the payment retry loop"
    assert assessment.risk_factors == ("Retry loop without jitter",)
    assert assessment.reviewer_focus_areas == ("Error handling in payment flow",)
    assert assessment.missing_tests is True
    assert assessment.migration_risk is MigrationRisk.NONE


def test_duplicate_factors_collapse():
    assessment = parse_assessment(make_payload(risk_factors=["a", "b", "a"]))

    assert assessment.risk_factors == ("a", "b")


def test_code_fenced_json_is_rejected():
    with pytest.raises(SchemaError):
        parse_assessment(f"```json\n{make_payload()}\n```")


def test_malformed_json_is_rejected():
    with pytest.raises(SchemaError) as exc_info:
        parse_assessment('{"risk_level": "LOW",')

    assert exc_info.value.kind is ErrorKind.SCHEMA


def test_missing_field_is_rejected():
    data = json.loads(make_payload())
    del data["migration_risk"]

    with pytest.raises(SchemaError, match="migration_risk"):
        parse_assessment(json.dumps(data))


@pytest.mark.parametrize(
    "override",
    [
        {"risk_level": "CRITICAL"},
        {"risk_level": "low"},
        {"migration_risk": "MEDIUM"},
        {"missing_tests": "true"},
        {"missing_tests": 1},
        {"risk_factors": "one factor"},
        {"reviewer_focus_areas": [1, 2]},
        {"risk_summary": ""},
        {"risk_summary": None},
    ],
)
def test_wrong_types_are_not_coerced(override):
    with pytest.raises(SchemaError):
        parse_assessment(make_payload(**override))


def test_non_object_root_is_rejected():
    with pytest.raises(SchemaError):
        parse_assessment("[]")
