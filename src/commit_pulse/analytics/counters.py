"""Bucket counters and calendar keys shared by the aggregators."""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Mapping
from datetime import datetime
from typing import Generic, Optional, TypeVar

from ..exceptions import MalformedCommitError
from ..history.models import Commit, parse_commit_date
from ..logging_config import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)


class RunningMaxCounter(Generic[K]):
    """Insertion-ordered counter that remembers the first bucket to lead.

    The leader only changes when a bucket's count strictly exceeds the
    current maximum, so on ties the bucket that reached the value first wins.
    """

    def __init__(self) -> None:
        self.counts: dict[K, int] = {}
        self.leader: Optional[K] = None
        self.leader_count = 0

    def add(self, key: K, amount: int = 1) -> int:
        count = self.counts.get(key, 0) + amount
        self.counts[key] = count
        if count > self.leader_count:
            self.leader_count = count
            self.leader = key
        return count

    def __len__(self) -> int:
        return len(self.counts)


def first_max(counts: Mapping[K, int], default: K) -> K:
    """Key with the largest count, first in iteration order on ties."""
    best = default
    best_count = 0
    for key, count in counts.items():
        if count > best_count:
            best_count = count
            best = key
    return best


def day_key(moment: datetime) -> str:
    return moment.date().isoformat()


def hour_key(hour: int) -> str:
    return f"{hour}:00"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_half_up(value)))


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / max(denominator, 1)


def commit_timestamp(commit: Commit, strict: bool = False) -> Optional[datetime]:
    """Parse a commit's date, or None so date-keyed buckets skip it.

    Raises:
        MalformedCommitError: In strict mode, when the date does not parse
    """
    moment = parse_commit_date(commit.date)
    if moment is None:
        if strict:
            raise MalformedCommitError(commit.hash, commit.date)
        logger.debug("Skipping date buckets for %s: unparsable date %r", commit.hash, commit.date)
    return moment


def dated_commits(
    commits: Iterable[Commit], strict: bool = False
) -> list[tuple[Commit, datetime]]:
    """Commits paired with their parsed timestamps, dropping unparsable ones."""
    result = []
    for commit in commits:
        moment = commit_timestamp(commit, strict)
        if moment is not None:
            result.append((commit, moment))
    return result
