"""Public API for Commit Pulse.

Example:
    >>> from commit_pulse import analyze
    >>>
    >>> data = analyze(".", since="30d")
    >>> data.productivity.productivity_score
    62
    >>> data.to_json()
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .analytics.engine import AnalyticsEngine
from .analytics.models import AnalyticsData
from .config import AnalyticsConfig, load_config
from .exceptions import InvalidCommitError
from .history.git_extractor import GitExtractor
from .history.models import Commit
from .logging_config import get_logger
from .periods import resolve_date

logger = get_logger(__name__)


def load_commits(path: Path) -> list[Commit]:
    """Read commit records from a JSON file (a list, or an object with "commits").

    Raises:
        InvalidCommitError: If an entry is missing required fields
        ValueError: If the file is not valid JSON of the expected shape
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        payload = payload.get("commits", [])
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of commits in {path}")

    commits = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise InvalidCommitError("", f"entry {index} is not an object")
        commits.append(Commit.from_dict(entry))
    return commits


def analyze_records(
    commits: Sequence[Commit],
    since: Optional[str] = None,
    until: Optional[str] = None,
    focus: Optional[str] = None,
    provider: str = "unknown",
    output_format: Optional[str] = None,
    config: Optional[AnalyticsConfig] = None,
    repository=None,
    today: Optional[date] = None,
) -> AnalyticsData:
    """Run the engine over already retrieved commits with resolved period labels."""
    config = config or AnalyticsConfig()
    engine = AnalyticsEngine(config=config, repository=repository)
    return engine.generate(
        commits,
        focus=focus or config.default_focus,
        since=resolve_date(since, today, "since"),
        until=resolve_date(until, today, "until"),
        provider=provider,
        output_format=output_format or config.default_format,
    )


def analyze(
    path: str = ".",
    since: Optional[str] = None,
    until: Optional[str] = None,
    author: Optional[str] = None,
    focus: Optional[str] = None,
    provider: str = "unknown",
    output_format: Optional[str] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalyticsData:
    """Read git history at ``path`` and build an analytics snapshot.

    Args:
        path: Repository path (default: current directory)
        since: Period start descriptor (YYYY-MM-DD, today, yesterday, 7d, ...)
        until: Period end descriptor
        author: Author filter passed to git
        focus: Focus label recorded in metadata
        provider: Downstream provider name recorded in metadata
        output_format: Output format label recorded in metadata
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. git_max_commits=500)

    Raises:
        InvalidPeriodError: If since/until cannot be resolved
        NotAGitRepositoryError: If path is not a git repository
        GitCommandError: If git fails
    """
    config = load_config(config_file=config_file, **overrides)

    resolved_since = resolve_date(since, field_name="since")
    resolved_until = resolve_date(until, field_name="until")

    extractor = GitExtractor(
        path,
        max_commits=config.git_max_commits,
        include_line_stats=config.include_line_stats,
        timeout_seconds=config.git_timeout_seconds,
    )
    commits = extractor.extract(since=resolved_since, until=resolved_until, author=author)
    logger.info(f"Found {len(commits)} commits to analyze in {extractor.repo_path}")

    engine = AnalyticsEngine(config=config, repository=extractor)
    return engine.generate(
        commits,
        focus=focus or config.default_focus,
        since=resolved_since,
        until=resolved_until,
        provider=provider,
        output_format=output_format or config.default_format,
    )
