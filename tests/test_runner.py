import logging

import pytest

from conftest import FakeAdapter, make_assessment
from prrisk.log import resolve_level
from prrisk.runner import run_analysis, write_report
from prrisk.types import RiskLevel


@pytest.mark.asyncio
async def test_run_analysis_with_injected_adapter(config):
    expected = make_assessment(RiskLevel.MEDIUM, "Adds a feature flag")
    adapter = FakeAdapter(config, handler=lambda job: expected)

    result = await run_analysis("+flag = True\n", config=config, title="Flag", adapter=adapter)

    assert result.assessment is expected
    assert adapter.jobs[0].title == "Flag"


@pytest.mark.asyncio
async def test_write_report_uses_configured_directory(config, tmp_path):
    cfg = config.model_copy(update={"report_dir": str(tmp_path / "out"), "report_format": "html"})
    result = await run_analysis("+x\n", config=cfg, adapter=FakeAdapter(cfg))

    path = write_report(result, cfg)

    assert path.parent == tmp_path / "out"
    assert path.suffix == ".html"


@pytest.mark.parametrize(
    ("argument", "env", "expected"),
    [
        ("debug", None, logging.DEBUG),
        (None, "ERROR", logging.ERROR),
        ("info", "error", logging.INFO),
        (None, None, logging.WARNING),
        ("chatty", None, logging.WARNING),
    ],
)
def test_resolve_level(monkeypatch, argument, env, expected):
    if env is not None:
        monkeypatch.setenv("LOG_LEVEL", env)

    assert resolve_level(argument) == expected
