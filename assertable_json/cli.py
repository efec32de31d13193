#!/usr/bin/env python3
"""
assertable-json CLI - run declarative checks against JSON documents

Usage:
    assertable-json check <data.json> <suite.yaml> [OPTIONS]
    assertable-json validate <suite.yaml>
    assertable-json --version
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .reporting import Reporter
from .suites import CheckSuite, load_document, load_suite, run_suite

app = typer.Typer(
    name="assertable-json",
    help="Fluent assertions for JSON data",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"assertable-json v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    assertable-json - Fluent assertions for JSON data

    Run declarative YAML check suites against JSON documents.
    """
    pass


@app.command()
def check(
    data_file: Path = typer.Argument(
        ...,
        help="Path to the JSON (or YAML) document to check",
        exists=True,
        readable=True,
    ),
    suite_file: Path = typer.Argument(
        ...,
        help="Path to the suite YAML file",
        exists=True,
        readable=True,
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only show errors and final status"
    ),
    output: str = typer.Option(
        "text", "--output", "-o",
        help="Output format: text or json"
    ),
    report_dir: Path = typer.Option(
        Path("reports"), "--report-dir", "-r",
        help="Directory to save JSON reports"
    ),
    no_report: bool = typer.Option(
        False, "--no-report",
        help="Don't save a JSON report file"
    ),
    debug: bool = typer.Option(
        False, "--debug",
        help="Log each check as it runs"
    ),
):
    """
    Run a check suite against a document.

    Checks run in order; the first failure stops the chain and the
    remaining checks are reported as skipped.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if output not in ("text", "json"):
        console.print(f"[red]❌ Unknown output format:[/red] {output}")
        raise typer.Exit(code=2)

    # Keep stdout parseable in json mode
    quiet = quiet or output == "json"

    if not quiet:
        console.print(f"\n📄 Loading suite: {suite_file}")

    suite, validation = load_suite(suite_file)
    if not validation.is_valid:
        console.print(f"\n[red]❌ Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)

    data, loaded = load_document(data_file)
    if not loaded.is_valid:
        console.print(f"\n[red]❌ Could not load document:[/red]")
        console.print(str(loaded), markup=False)
        raise typer.Exit(code=1)

    if not quiet:
        console.print(f"   [green]✅ Valid suite:[/green] {suite.name} ({len(suite.checks)} checks)")

    reporter = Reporter.from_suite(suite)
    report = run_suite(suite, data, reporter)

    if output == "json":
        console.print_json(data=report.to_dict())
    elif not quiet:
        console.print("\n" + report.summary(), markup=False)

    if not no_report:
        report_dir.mkdir(parents=True, exist_ok=True)
        report_path = report_dir / f"{report.run_id}.json"
        reporter.save_json(report_path)
        if not quiet:
            console.print(f"\n📁 Report saved: {report_path}")

    raise typer.Exit(code=0 if report.passed else 1)


@app.command()
def validate(
    suite_file: Path = typer.Argument(
        ...,
        help="Path to the suite YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a suite YAML file.

    Check the format and report any errors without running anything.
    """
    console.print(f"\n📄 Validating: {suite_file}")

    suite, validation = load_suite(suite_file)

    if not validation.is_valid:
        console.print(f"\n[red]❌ Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)

    console.print(f"\n[green]✅ Valid suite:[/green] {suite.name}")
    console.print(f"   Checks: {len(suite.checks)}")
    console.print()
    console.print(_checks_table(suite))
    raise typer.Exit(code=0)


@app.command()
def info():
    """
    Show information about assertable-json.
    """
    console.print(f"""
[bold]assertable-json[/bold] v{__version__}

Fluent assertions for JSON data

[bold]Features:[/bold]
  • Dot-path assertions (user.posts.0.title)
  • Order-insensitive object equality
  • Schemas with optional fields
  • Coverage of top-level keys (verify_interacted)
  • Declarative YAML check suites with JSON run reports

[bold]Quick Start:[/bold]
  assertable-json validate checks/user.yaml
  assertable-json check response.json checks/user.yaml
""")


def _checks_table(suite: CheckSuite) -> Table:
    table = Table(title="Checks")
    table.add_column("ID", style="cyan")
    table.add_column("Op", style="magenta")
    table.add_column("Path")
    table.add_column("Nested", justify="right")

    for item in suite.checks:
        table.add_row(
            item.id,
            item.op.value,
            "" if item.path is None else str(item.path),
            str(len(item.checks)) if item.checks else "",
        )
    return table


if __name__ == "__main__":
    app()
