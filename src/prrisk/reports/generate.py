"""Markdown and HTML report generation via Jinja2."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, PackageLoader, select_autoescape

from prrisk.types import AnalysisResult, ReportFormat

REPORT_EXTENSIONS = frozenset({".md", ".html"})

_env = Environment(
    loader=PackageLoader("prrisk.reports", "templates"),
    autoescape=select_autoescape(["html.j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def generate_report(
    result: AnalysisResult,
    output_dir: Path,
    fmt: ReportFormat = "markdown",
) -> Path:
    """Render `result` into a report file and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)

    now = datetime.now(timezone.utc)
    template_name = "report.html.j2" if fmt == "html" else "report.md.j2"
    extension = ".html" if fmt == "html" else ".md"

    content = _env.get_template(template_name).render(
        result=result,
        assessment=result.assessment,
        timestamp=now.strftime("%Y-%m-%d %H:%M UTC"),
    )

    report_path = output_dir / f"report-{now.strftime('%Y-%m-%d_%H%M%S')}{extension}"
    report_path.write_text(content, encoding="utf-8")
    return report_path


def get_latest_report(report_dir: Path) -> Path | None:
    """Return the newest Markdown or HTML report in `report_dir`, if any."""
    if not report_dir.is_dir():
        return None

    candidates = [
        path
        for path in report_dir.glob("report-*")
        if path.is_file() and path.suffix in REPORT_EXTENSIONS
    ]
    return max(candidates, key=lambda path: path.stat().st_mtime, default=None)
