"""Aggregation facade: run the five aggregators and assemble one snapshot.

The aggregators share no mutable state, so with ``parallel=True`` they run
on a thread pool and the only synchronisation point is joining their
results here.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, Union

from ..config import AnalyticsConfig
from ..exceptions import InvalidConfigError
from ..history.git_extractor import DEFAULT_REPOSITORY_NAME, UNKNOWN_BRANCH
from ..history.models import Commit, parse_commit_date
from ..logging_config import get_logger
from ..periods import days_between
from .classifiers import CommitClassifier, DebtHeuristic
from .collaboration import analyze_collaboration
from .commits import analyze_commits
from .files import analyze_file_changes
from .models import (
    AnalyticsData,
    AnalyticsFocus,
    AnalyticsMetadata,
    OutputFormat,
    Period,
    RepositoryInfo,
)
from .productivity import analyze_productivity
from .quality import analyze_code_quality

logger = get_logger(__name__)


class RepositorySource(Protocol):
    """Answers the two repository questions the snapshot needs (e.g. GitExtractor)."""

    def repository_name(self) -> str: ...

    def current_branch(self) -> str: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AnalyticsEngine:
    """Builds ``AnalyticsData`` snapshots from a fixed list of commits."""

    def __init__(
        self,
        config: Optional[AnalyticsConfig] = None,
        repository: Optional[RepositorySource] = None,
        classifier: Optional[CommitClassifier] = None,
        debt_heuristics: Optional[Sequence[DebtHeuristic]] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.config = config or AnalyticsConfig()
        self.repository = repository
        self.classifier = classifier
        self.debt_heuristics = debt_heuristics
        self.clock = clock

    def generate(
        self,
        commits: Iterable[Commit],
        focus: Union[AnalyticsFocus, str] = AnalyticsFocus.ALL,
        since: Optional[str] = None,
        until: Optional[str] = None,
        provider: str = "unknown",
        output_format: Union[OutputFormat, str] = OutputFormat.DASHBOARD,
    ) -> AnalyticsData:
        """Aggregate ``commits`` into a snapshot.

        ``focus`` is recorded as metadata only; every aggregator always runs.

        Raises:
            InvalidConfigError: If focus or output_format is not recognised
            MalformedCommitError: In strict mode, for an unparsable commit date
        """
        batch = tuple(commits)
        focus = _coerce(AnalyticsFocus, focus, "focus")
        output_format = _coerce(OutputFormat, output_format, "output_format")

        self._check_dates(batch)

        started = time.perf_counter()
        results = self._run_aggregators(batch)
        logger.debug(
            "Aggregated %d commits in %.1fms", len(batch), (time.perf_counter() - started) * 1000
        )

        return AnalyticsData(
            period=Period(since=since, until=until, days=days_between(since, until)),
            repository=RepositoryInfo(
                name=self._ask_repository("repository_name", DEFAULT_REPOSITORY_NAME),
                branch=self._ask_repository("current_branch", UNKNOWN_BRANCH),
                total_commits=len(batch),
            ),
            commits=results["commits"],
            files=results["files"],
            productivity=results["productivity"],
            collaboration=results["collaboration"],
            quality=results["quality"],
            generated_at=self.clock(),
            metadata=AnalyticsMetadata(focus=focus, format=output_format, provider=provider),
        )

    def _aggregators(self, batch: tuple[Commit, ...]) -> dict[str, Callable[[], Any]]:
        scoring = self.config.scoring
        strict = self.config.strict
        return {
            "commits": lambda: analyze_commits(batch, strict=strict),
            "files": lambda: analyze_file_changes(batch, scoring, strict=strict),
            "productivity": lambda: analyze_productivity(batch, scoring, strict=strict),
            "collaboration": lambda: analyze_collaboration(batch, scoring, strict=strict),
            "quality": lambda: analyze_code_quality(
                batch, scoring, self.classifier, self.debt_heuristics
            ),
        }

    def _run_aggregators(self, batch: tuple[Commit, ...]) -> dict[str, Any]:
        aggregators = self._aggregators(batch)
        if not self.config.parallel:
            return {name: run() for name, run in aggregators.items()}

        with ThreadPoolExecutor(max_workers=len(aggregators)) as executor:
            futures = {name: executor.submit(run) for name, run in aggregators.items()}
            return {name: future.result() for name, future in futures.items()}

    def _check_dates(self, batch: tuple[Commit, ...]) -> None:
        """Warn once about records whose date-keyed buckets will be skipped."""
        if self.config.strict:
            return
        malformed = [c.hash for c in batch if parse_commit_date(c.date) is None]
        if malformed:
            logger.warning(
                "Skipping date buckets for %d commit(s) with unparsable dates: %s",
                len(malformed),
                ", ".join(malformed[:5]) + (" ..." if len(malformed) > 5 else ""),
            )

    def _ask_repository(self, question: str, default: str) -> str:
        if self.repository is None:
            return default
        try:
            return getattr(self.repository, question)() or default
        except Exception as e:
            logger.warning("Could not resolve %s: %s", question.replace("_", " "), e)
            return default


def _coerce(enum_type, value, name: str):
    try:
        return enum_type(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise InvalidConfigError(name, value, f"expected one of {choices}")


def generate_analytics_data(
    commits: Iterable[Commit],
    focus: Union[AnalyticsFocus, str] = AnalyticsFocus.ALL,
    since: Optional[str] = None,
    until: Optional[str] = None,
    provider: str = "unknown",
    output_format: Union[OutputFormat, str] = OutputFormat.DASHBOARD,
    config: Optional[AnalyticsConfig] = None,
    repository: Optional[RepositorySource] = None,
) -> AnalyticsData:
    """One-shot shortcut around ``AnalyticsEngine.generate``."""
    engine = AnalyticsEngine(config=config, repository=repository)
    return engine.generate(
        commits,
        focus=focus,
        since=since,
        until=until,
        provider=provider,
        output_format=output_format,
    )
