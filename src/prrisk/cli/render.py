"""Rich rendering of risk assessments for the terminal."""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from prrisk.types import AnalysisResult, MigrationRisk, RiskAssessment, RiskLevel

RISK_STYLES: dict[RiskLevel, str] = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
}

MIGRATION_STYLES: dict[MigrationRisk, str] = {
    MigrationRisk.NONE: "green",
    MigrationRisk.LOW: "yellow",
    MigrationRisk.HIGH: "red",
}


def _bullets(title: str, items: tuple[str, ...], style: str) -> list[Text]:
    if not items:
        return []
    lines = [Text(title, style=f"bold {style}")]
    lines.extend(Text.assemble(("    • ", style), item) for item in items)
    lines.append(Text(""))
    return lines


def render_assessment(assessment: RiskAssessment, console: Console) -> None:
    """Print a coloured report panel for `assessment`."""
    risk_style = RISK_STYLES[assessment.risk_level]
    migration_style = MIGRATION_STYLES[assessment.migration_risk]

    body: list[Text] = [
        Text.assemble(("Risk Level: ", "bold"), (assessment.risk_level.value, f"bold {risk_style}")),
        Text(""),
        Text("📋 Summary:", style="bold cyan"),
        Text(f"  {assessment.summary}"),
        Text(""),
    ]
    body.extend(_bullets("⚠️  Risk Factors:", assessment.risk_factors, "red"))
    body.extend(_bullets("👀 Reviewer Focus Areas:", assessment.reviewer_focus_areas, "blue"))
    body.append(
        Text.assemble(
            ("Missing Tests: ", "bold"),
            ("YES ⚠️", "bold red") if assessment.missing_tests else ("NO ✓", "bold green"),
        )
    )
    body.append(
        Text.assemble(
            ("Migration Risk: ", "bold"),
            (assessment.migration_risk.value, f"bold {migration_style}"),
        )
    )

    console.print(
        Panel(
            Group(*body),
            title="[bold white]PR Risk Assessment Report[/bold white]",
            border_style="cyan",
            expand=False,
        )
    )


def render_coverage(result: AnalysisResult, console: Console) -> None:
    """Print a note when the assessment does not cover the whole diff."""
    if result.used_fallback:
        console.print(
            "\n  [bold yellow]⚠ Automated analysis could not complete.[/bold yellow] "
            "Showing a placeholder assessment; review the change manually.\n"
        )
    elif result.skipped_chunks:
        console.print(
            f"\n  [yellow]⚠ {len(result.skipped_chunks)} chunk(s) could not be analyzed:[/yellow] "
            f"{', '.join(result.skipped_chunks)}\n"
        )
    if result.chunks_total > 1:
        console.print(
            f"  [dim]{result.diff_chars:,} chars · {result.chunks_total} chunks · "
            f"{result.chunks_analyzed} assessments combined[/dim]"
        )
