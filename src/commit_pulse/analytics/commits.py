"""Commit patterns: activity by day, hour, author and merged branch."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Optional

from ..history.models import Commit
from .counters import (
    RunningMaxCounter,
    commit_timestamp,
    day_key,
    first_max,
    hour_key,
    safe_ratio,
)
from .models import CommitAnalytics, frozen_mapping

DEFAULT_PEAK_TIME = "9:00"

_BRANCH_RE = re.compile(r"branch\s+['\"]?([^'\"\s]+)['\"]?")


def extract_branch(message: str) -> Optional[str]:
    """Branch name from a merge message such as ``Merge branch 'feature/x'``.

    Only messages mentioning both "merge" and "branch" are considered; the
    name is reported lower-cased.
    """
    lowered = message.lower()
    if "merge" not in lowered or "branch" not in lowered:
        return None
    match = _BRANCH_RE.search(lowered)
    return match.group(1) if match else None


def analyze_commits(commits: Sequence[Commit], strict: bool = False) -> CommitAnalytics:
    """Bucket commits by day, hour, author and branch.

    Busiest day and hour are tracked while counting: a bucket takes the lead
    only by strictly exceeding the previous maximum.
    """
    by_day: RunningMaxCounter[str] = RunningMaxCounter()
    by_hour: RunningMaxCounter[str] = RunningMaxCounter()
    by_author: dict[str, int] = {}
    by_branch: dict[str, int] = {}
    most_active_hour = 0

    for commit in commits:
        moment = commit_timestamp(commit, strict)
        if moment is not None:
            by_day.add(day_key(moment))
            leader = by_hour.leader
            by_hour.add(hour_key(moment.hour))
            if by_hour.leader != leader:
                most_active_hour = moment.hour

        by_author[commit.author] = by_author.get(commit.author, 0) + 1

        branch = extract_branch(commit.message)
        if branch:
            by_branch[branch] = by_branch.get(branch, 0) + 1

    total = len(commits)

    return CommitAnalytics(
        total_commits=total,
        commits_by_day=frozen_mapping(by_day.counts),
        commits_by_hour=frozen_mapping(by_hour.counts),
        commits_by_author=frozen_mapping(by_author),
        commits_by_branch=frozen_mapping(by_branch),
        average_commits_per_day=safe_ratio(total, len(by_day)),
        most_active_day=by_day.leader or "",
        most_active_hour=most_active_hour,
        peak_productivity_time=first_max(by_hour.counts, DEFAULT_PEAK_TIME),
    )
