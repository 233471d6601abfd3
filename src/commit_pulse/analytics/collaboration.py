"""Collaboration: author shares, same-day multi-author activity and a composite score."""

from __future__ import annotations

from collections.abc import Sequence

from ..config import DEFAULT_SCORING, ScoringConfig
from ..history.models import Commit
from .counters import commit_timestamp, day_key, round_half_up
from .models import (
    AuthorActivity,
    CollaborationAnalytics,
    PairProgrammingIndicator,
    frozen_mapping,
)

NO_COLLABORATION_DAY = "None"


def collaboration_score(
    author_count: int,
    pairing_days: int,
    scoring: ScoringConfig = DEFAULT_SCORING,
) -> int:
    """Diversity half plus pairing half, each capped at 50.

    Pairing days are normalised by the number of authors, not by the number
    of active days.
    """
    diversity = min(author_count / scoring.diversity_full_authors * 50, 50)
    pairing = min(pairing_days / max(author_count, 1) * 50, 50)
    return round_half_up(diversity + pairing)


def most_collaborative_day(indicators: Sequence[PairProgrammingIndicator]) -> str:
    """Pairing date with the most distinct authors; the earliest listed wins ties."""
    best = NO_COLLABORATION_DAY
    best_count = 0
    for indicator in indicators:
        if len(indicator.authors) > best_count:
            best_count = len(indicator.authors)
            best = indicator.date
    return best


def analyze_collaboration(
    commits: Sequence[Commit],
    scoring: ScoringConfig = DEFAULT_SCORING,
    strict: bool = False,
) -> CollaborationAnalytics:
    author_commits: dict[str, int] = {}
    authors_by_date: dict[str, dict[str, None]] = {}

    for commit in commits:
        author_commits[commit.author] = author_commits.get(commit.author, 0) + 1
        moment = commit_timestamp(commit, strict)
        if moment is not None:
            # dict keys double as an insertion-ordered set
            authors_by_date.setdefault(day_key(moment), {})[commit.author] = None

    total = len(commits)
    activity = sorted(
        (
            AuthorActivity(author=author, commits=count, percentage=count / total * 100)
            for author, count in author_commits.items()
        ),
        key=lambda entry: entry.commits,
        reverse=True,
    )

    indicators = tuple(
        PairProgrammingIndicator(date=day, authors=tuple(authors))
        for day, authors in authors_by_date.items()
        if len(authors) > 1
    )

    return CollaborationAnalytics(
        total_authors=len(activity),
        author_activity=tuple(activity),
        collaboration_score=collaboration_score(len(activity), len(indicators), scoring),
        most_collaborative_day=most_collaborative_day(indicators),
        pair_programming_indicators=indicators,
        branch_collaboration=frozen_mapping({}),
    )
