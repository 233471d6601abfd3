"""Plain-text summary of the key metrics."""

from ..analytics.models import AnalyticsData, format_instant
from .base import BaseFormatter

TOP_CONTRIBUTORS = 5


def period_label(days: int) -> str:
    return "All time" if days == 0 else f"{days} days"


class SummaryFormatter(BaseFormatter):
    """Render headline metrics, top contributors and suggestions as text."""

    extension = "txt"

    def render(self, data: AnalyticsData) -> None:
        print(self.format(data))

    def format(self, data: AnalyticsData) -> str:
        commits = data.commits
        productivity = data.productivity
        collaboration = data.collaboration
        quality = data.quality

        lines = [
            "Development Analytics Summary",
            "=============================",
            "",
            f"Period:     {data.period.since or 'beginning'} to {data.period.until or 'now'} "
            f"({period_label(data.period.days)})",
            f"Repository: {data.repository.name} ({data.repository.branch})",
            f"Generated:  {format_instant(data.generated_at)}",
            "",
            "Commits",
            f"  Total commits:          {commits.total_commits}",
            f"  Average per day:        {commits.average_commits_per_day:.1f}",
            f"  Most active day:        {commits.most_active_day or '-'}",
            f"  Peak productivity time: {commits.peak_productivity_time}",
            "",
            "Productivity",
            f"  Productivity score:     {productivity.productivity_score}/100",
            f"  Coding streak:          {productivity.coding_streak} days",
            f"  Longest streak:         {productivity.longest_streak} days",
            f"  Average commits/week:   {productivity.average_commits_per_week:.1f}",
            "",
            "Collaboration",
            f"  Total authors:          {collaboration.total_authors}",
            f"  Collaboration score:    {collaboration.collaboration_score}/100",
            f"  Most collaborative day: {collaboration.most_collaborative_day}",
            "",
            "Code quality",
            f"  Quality score:          {quality.quality_score}/100",
            f"  Refactoring frequency:  {quality.refactoring_frequency:.1f}%",
            f"  Bug fix percentage:     {quality.bug_fix_percentage:.1f}%",
            f"  Average commit size:    {quality.average_commit_size:.1f} files",
            "",
            "Top contributors",
        ]
        for entry in collaboration.author_activity[:TOP_CONTRIBUTORS]:
            lines.append(f"  - {entry.author}: {entry.commits} commits ({entry.percentage:.1f}%)")

        lines.append("")
        lines.append("Improvement suggestions")
        lines.extend(f"  - {suggestion}" for suggestion in quality.improvement_suggestions)

        return "\n".join(lines)
