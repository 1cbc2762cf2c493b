"""Command-line interface for roster / chat / topic reconciliation."""

import json
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from roster_merge import __version__
from roster_merge.config import get_pattern_tables, get_settings
from roster_merge.config.logging import configure_logging
from roster_merge.errors import RosterMergeError
from roster_merge.export import ExportVariant, export_rows
from roster_merge.models import MergedRow, RosterEntry, TopicEntry
from roster_merge.pipeline import (
    load_roster_json,
    load_topics_json,
    merge_transcript,
    parse_roster_file,
    parse_topic_file,
)

app = typer.Typer(
    name="roster-merge",
    help="Match chat questions to a roster and annotate them with the day's topic",
    add_completion=False,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    configure_logging("DEBUG" if verbose else "WARNING", json_logs=False)


def _fail(error: Exception, verbose: bool) -> NoReturn:
    console.print(f"\n[red]Error:[/red] {error}")
    if verbose:
        console.print_exception()
    sys.exit(1)


def _load_roster(path: Path) -> list[RosterEntry]:
    if path.suffix.lower() == ".json":
        return load_roster_json(path.read_bytes())
    return parse_roster_file(path.read_bytes(), path.name)


def _load_topics(path: Optional[Path]) -> list[TopicEntry]:
    if path is None:
        return []
    if path.suffix.lower() == ".json":
        return load_topics_json(path.read_bytes())
    return parse_topic_file(path.read_bytes(), path.name)


def _write_json(items: list, output: Path) -> None:
    with open(output, "w", encoding="utf-8") as f:
        json.dump([item.model_dump() for item in items], f, indent=2, ensure_ascii=False)
    console.print(f"\n[green]Saved to:[/green] {output}")


@app.command()
def roster(
    pdf_path: Path = typer.Argument(
        ...,
        help="Roster PDF (or plain-text export)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the parsed roster as JSON"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Parse a roster PDF into name / title / seniority rows."""
    _setup_logging(verbose)
    try:
        rows = parse_roster_file(pdf_path.read_bytes(), pdf_path.name)
    except RosterMergeError as e:
        _fail(e, verbose)

    table = Table(title=f"Roster ({len(rows)} rows)")
    table.add_column("姓名")
    table.add_column("工作職稱")
    table.add_column("工作年資")
    for row in rows:
        table.add_row(row.name, row.title, row.seniority)
    console.print(table)

    if output:
        _write_json(rows, output)


@app.command()
def topics(
    file_path: Path = typer.Argument(
        ...,
        help="Topic table: CSV, XLSX, PDF or TXT",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the topic table as JSON"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Parse a date → topic table."""
    _setup_logging(verbose)
    try:
        rows = parse_topic_file(file_path.read_bytes(), file_path.name)
    except RosterMergeError as e:
        _fail(e, verbose)

    table = Table(title=f"Topics ({len(rows)} dates)")
    table.add_column("日期")
    table.add_column("主題")
    for row in rows:
        table.add_row(row.date, row.topic)
    console.print(table)

    if output:
        _write_json(rows, output)


@app.command()
def merge(
    transcript_path: Path = typer.Argument(
        ...,
        help="Chat transcript (.txt, UTF-8)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    roster_path: Path = typer.Option(
        ...,
        "--roster",
        "-r",
        help="Roster PDF / TXT, or a JSON list produced by the roster command",
        exists=True,
        dir_okay=False,
    ),
    topics_path: Optional[Path] = typer.Option(
        None,
        "--topics",
        "-t",
        help="Topic table (CSV / XLSX / PDF / TXT) or JSON list",
        exists=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        Path("merge.xlsx"), "--output", "-o", help="Output XLSX path"
    ),
    variant: ExportVariant = typer.Option(
        ExportVariant.FULL, "--variant", help="Export column layout"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Match each roster person's first question and export the result."""
    _setup_logging(verbose)

    console.print(
        Panel.fit(
            "[bold blue]Roster Merge[/bold blue]\n"
            f"Transcript: {transcript_path.name}",
            border_style="blue",
        )
    )

    try:
        roster_rows = _load_roster(roster_path)
        topic_rows = _load_topics(topics_path)
        rows = merge_transcript(transcript_path.read_bytes(), roster_rows, topic_rows)
        output.write_bytes(export_rows(rows, variant))
    except RosterMergeError as e:
        _fail(e, verbose)

    _display_summary(rows)
    console.print(f"\n[green]Result saved to:[/green] {output}")


@app.command()
def info() -> None:
    """Display configuration."""
    settings = get_settings()
    patterns = get_pattern_tables()

    console.print(Panel.fit("[bold blue]Roster Merge[/bold blue]", border_style="blue"))

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Version", __version__)
    table.add_row("Match threshold", str(settings.match_threshold))
    table.add_row("Default year", str(settings.default_year))
    table.add_row("Speaker max length", str(settings.speaker_max_length))
    table.add_row("Patterns file", str(settings.patterns_file or "(built-in)"))
    table.add_row("Seniority labels", ", ".join(r.label for r in patterns.seniority_rules))
    table.add_row("Occupation suffixes", ", ".join(patterns.occupation_suffixes))

    console.print(table)


def _display_summary(rows: list[MergedRow]) -> None:
    """Display match counts and the unmatched names."""
    matched = [r for r in rows if r.question]
    unmatched = [r.name for r in rows if not r.question]

    console.print("\n[bold]Merge Summary[/bold]")
    console.print("-" * 40)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Count", justify="right")
    table.add_row("Roster", str(len(rows)))
    table.add_row("Matched", str(len(matched)))
    table.add_row("With topic", str(sum(1 for r in rows if r.topic)))
    table.add_row("Fuzzy matches", str(sum(1 for r in matched if r.match_score < 1)))
    console.print(table)

    if unmatched:
        console.print(f"\n[yellow]No question found for:[/yellow] {', '.join(unmatched)}")


if __name__ == "__main__":
    app()
