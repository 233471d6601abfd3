"""Rich terminal formatter for Commit Pulse."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..analytics.models import AnalyticsData
from .base import BaseFormatter
from .summary_formatter import period_label

console = Console(stderr=True)


def _score_label(score: int) -> str:
    if score >= 70:
        return f"[green]{score}/100[/green]"
    elif score >= 40:
        return f"[yellow]{score}/100[/yellow]"
    else:
        return f"[red]{score}/100[/red]"


class RichFormatter(BaseFormatter):
    """Scores panel plus a top-contributors table, printed to stderr."""

    def render(self, data: AnalyticsData) -> None:
        self._print_summary(data)
        self._print_contributors(data)

    def format(self, data: AnalyticsData) -> str:
        # Rich output goes directly to console; return empty string
        self.render(data)
        return ""

    def _print_summary(self, data: AnalyticsData) -> None:
        body = "\n".join(
            [
                f"Period: [bold]{period_label(data.period.days)}[/bold]",
                f"Commits: [bold]{data.commits.total_commits}[/bold]",
                f"Authors: [bold]{data.collaboration.total_authors}[/bold]",
                f"Productivity: {_score_label(data.productivity.productivity_score)}",
                f"Collaboration: {_score_label(data.collaboration.collaboration_score)}",
                f"Quality: {_score_label(data.quality.quality_score)}",
            ]
        )
        console.print(
            Panel(
                body,
                title=f"[bold cyan]{escape(data.repository.name)}[/bold cyan] ({escape(data.repository.branch)})",
                expand=False,
            )
        )

    def _print_contributors(self, data: AnalyticsData) -> None:
        if not data.collaboration.author_activity:
            return
        table = Table(title="Top contributors", show_lines=False)
        table.add_column("Author")
        table.add_column("Commits", justify="right")
        table.add_column("Share", justify="right")
        for entry in data.collaboration.author_activity[:5]:
            table.add_row(escape(entry.author), str(entry.commits), f"{entry.percentage:.1f}%")
        console.print(table)
