"""PRRisk command-line interface."""

from __future__ import annotations

import asyncio
import json
from contextlib import nullcontext
from pathlib import Path

import typer
from rich.console import Console

from prrisk import __version__

app = typer.Typer(
    name="prrisk",
    help="PRRisk: LLM-powered production risk scoring for code changes",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[bold red]Error:[/bold red] {message}")
    return typer.Exit(1)


def _read_diff(
    file: Path | None,
    stdin: bool,
    uncommitted: bool,
    base: str | None,
    head: str | None,
) -> str:
    """Fetch the diff from whichever single source was requested."""
    from prrisk.git import get_diff, get_uncommitted_diff, read_diff_file, read_diff_stdin

    if file is not None:
        return read_diff_file(file)
    if stdin:
        return read_diff_stdin()
    if uncommitted:
        return get_uncommitted_diff()
    if base and head:
        return get_diff(base, head)
    raise _fail("Must specify one of: --file, --stdin, --uncommitted, or --base/--head")


@app.command()
def analyze(
    file: Path | None = typer.Option(None, "--file", "-f", help="Path to diff file."),
    stdin: bool = typer.Option(False, "--stdin", "-s", help="Read diff from stdin."),
    uncommitted: bool = typer.Option(False, "--uncommitted", "-u", help="Analyze uncommitted changes."),
    base: str | None = typer.Option(None, "--base", "-b", help="Base branch/commit for comparison."),
    head: str | None = typer.Option(None, "--head", help="Head branch/commit for comparison."),
    title: str | None = typer.Option(None, "--title", "-t", help="PR title (optional context)."),
    description: str | None = typer.Option(
        None, "--description", "-d", help="PR description (optional context)."
    ),
    api_key: str | None = typer.Option(None, "--api-key", "-k", help="Provider API key."),
    provider: str | None = typer.Option(None, "--provider", help="LLM provider (manual mode)."),
    model: str | None = typer.Option(None, "--model", help="Model identifier."),
    as_json: bool = typer.Option(False, "--json", help="Print plain JSON instead of a report panel."),
    report: bool = typer.Option(False, "--report", help="Also write a report file."),
    log_level: str | None = typer.Option(None, "--log-level", help="debug, info, warning or error."),
) -> None:
    """Assess the production risk of a diff."""
    from prrisk.cli.render import render_assessment, render_coverage
    from prrisk.config import apply_overrides, load_config
    from prrisk.errors import PRRiskError
    from prrisk.log import configure_logging
    from prrisk.runner import run_analysis, write_report

    configure_logging(log_level)

    try:
        config = apply_overrides(load_config(), api_key=api_key, provider=provider, model=model)
        diff = _read_diff(file, stdin, uncommitted, base, head)
        if not diff.strip():
            raise _fail("No diff content found")

        spinner = (
            nullcontext()
            if as_json
            else err_console.status("[bold blue]Analyzing diff...", spinner="dots")
        )
        with spinner:
            result = asyncio.run(
                run_analysis(diff, config=config, title=title, description=description)
            )
    except typer.Exit:
        raise
    except (PRRiskError, RuntimeError) as e:
        raise _fail(str(e)) from e

    if as_json:
        typer.echo(json.dumps(result.assessment.to_dict(), indent=2))
    else:
        render_assessment(result.assessment, console)
        render_coverage(result, console)

    if report:
        report_path = write_report(result, config)
        err_console.print(f"  Report written to [bold]{report_path}[/bold]")


@app.command()
def report() -> None:
    """Print the path of the latest generated report."""
    from prrisk.config import load_config
    from prrisk.errors import PRRiskError
    from prrisk.reports.generate import get_latest_report

    try:
        config = load_config()
    except PRRiskError as e:
        raise _fail(str(e)) from e
    latest = get_latest_report(Path(config.report_dir))

    if latest is None:
        console.print("\n  No reports found. Run [bold]prrisk analyze --report[/bold] first.\n")
        raise typer.Exit(1)

    typer.echo(str(latest))


@app.command()
def version() -> None:
    """Show the PRRisk version."""
    console.print(f"prrisk {__version__}")
