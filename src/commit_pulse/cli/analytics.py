"""Analytics CLI command -- build a snapshot and write it as JSON or a text summary."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape

from ..api import analyze_records, load_commits
from ..config import FOCUS_CHOICES, FORMAT_CHOICES
from ..exceptions import CommitPulseError
from ..formatters import RichFormatter, get_formatter
from ..history.git_extractor import GitExtractor
from ..logging_config import setup_logging
from ..periods import resolve_date
from . import app
from ._common import console, default_output_path, resolve_config


def _display_no_commits(author: Optional[str]) -> None:
    console.print()
    console.print("[red]No commits found[/red]")
    console.print()
    console.print("[yellow]Try adjusting your date range:[/yellow]")
    console.print("  commit-pulse analytics --since 30d")
    console.print("  commit-pulse analytics --since 2025-01-01")
    if author:
        console.print()
        console.print(
            f"[yellow]Or check if author \"{author}\" has commits in this period[/yellow]"
        )
    console.print()


@app.command()
def analytics(
    ctx: typer.Context,
    since: Optional[str] = typer.Option(
        None,
        "--since",
        "-s",
        help='Include commits since this date (YYYY-MM-DD, "today", or relative like "7d")',
    ),
    until: Optional[str] = typer.Option(
        None,
        "--until",
        "-u",
        help='Include commits until this date (YYYY-MM-DD or "today")',
    ),
    today: bool = typer.Option(
        False,
        "--today",
        help="Shortcut for --since today",
    ),
    author: Optional[str] = typer.Option(
        None,
        "--author",
        "-a",
        help="Filter commits by author name",
    ),
    focus: Optional[str] = typer.Option(
        None,
        "--focus",
        help="Focus area recorded in the output metadata",
        click_type=click.Choice(list(FOCUS_CHOICES), case_sensitive=False),
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: json | summary | dashboard (JSON for the dashboard). "
        "Defaults to default_format from config",
        click_type=click.Choice(list(FORMAT_CHOICES), case_sensitive=False),
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: reports/analytics-<timestamp>.<ext>)",
    ),
    provider: str = typer.Option(
        "unknown",
        "--provider",
        "-p",
        help="Provider name recorded in the output metadata",
    ),
    input_file: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Read commit records from a JSON file instead of git",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append INFO and above log records to this file",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        hidden=True,
    ),
):
    """
    Generate development analytics from git commits.

    Aggregates commit timing, file churn, productivity, collaboration and
    code-quality indicators into a single snapshot.

    [bold cyan]Examples:[/bold cyan]

      commit-pulse analytics --since 30d

      commit-pulse analytics --today --format summary

      commit-pulse analytics --input commits.json -o report.json
    """
    target = (ctx.obj or {}).get("path", Path.cwd())

    if today:
        since = "today"

    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet, log_file=log_file)
        logger = setup_logging(
            verbose=settings.verbosity == "verbose",
            quiet=settings.verbosity == "quiet",
            log_file=settings.log_file,
        )
    except CommitPulseError as e:
        console.print(f"[red]Analytics generation failed:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except OSError as e:
        console.print(f"[red]Could not open log file:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    requested_format = (output_format or settings.default_format).lower()
    # The dashboard reads the JSON snapshot
    written_format = "json" if requested_format == "dashboard" else requested_format

    try:
        resolved_since = resolve_date(since, field_name="since")
        resolved_until = resolve_date(until, field_name="until")

        repository = None
        if input_file is not None:
            commits = load_commits(input_file)
            if author:
                needle = author.lower()
                commits = [c for c in commits if needle in c.author.lower()]
        else:
            repository = GitExtractor(
                str(target),
                max_commits=settings.git_max_commits,
                include_line_stats=settings.include_line_stats,
                timeout_seconds=settings.git_timeout_seconds,
            )
            commits = repository.extract(
                since=resolved_since, until=resolved_until, author=author
            )

        if not commits:
            _display_no_commits(author)
            raise typer.Exit(1)

        logger.info(f"Found {len(commits)} commits to analyze")

        data = analyze_records(
            commits,
            since=resolved_since,
            until=resolved_until,
            focus=focus,
            provider=provider,
            output_format=requested_format,
            config=settings,
            repository=repository,
        )
    except CommitPulseError as e:
        console.print(f"[red]Analytics generation failed:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read commits:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    formatter = get_formatter(written_format)
    output_path = output or default_output_path(settings.output_dir, formatter.extension)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(formatter.format(data), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Could not write analytics:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    logger.info(f"Wrote {written_format} snapshot to {output_path}")

    RichFormatter().render(data)
    console.print(f"[green]Analytics written to[/green] {output_path}")
