"""Productivity: time-of-day windows, weekday pattern, streaks and a composite score.

Composite score (0-100):

    score = 0.3 * commits + 0.2 * file_changes + 0.5 * consistency

Consistency starts at 100 and loses one point per day² of variance in the
gaps between consecutive commits (variance in ms² divided by one day in ms),
floored at 0. With fewer than two dated commits it is 50.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

import numpy as np

from ..config import DEFAULT_SCORING, ScoringConfig
from ..history.models import Commit, as_instant
from .counters import clamp_score, commit_timestamp, dated_commits, safe_ratio
from .models import ProductivityAnalytics, WeeklyScore, WorkPatterns, frozen_mapping

MS_PER_DAY = 1000 * 60 * 60 * 24

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def work_window(hour: int) -> str:
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 22:
        return "evening"
    return "night"


def week_start(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def streaks(days: Iterable[date]) -> tuple[int, int]:
    """Return (most recent run, longest run) of consecutive calendar days."""
    current = 0
    longest = 0
    previous = None
    for day in sorted(set(days)):
        if previous is not None and (day - previous).days <= 1:
            current += 1
        else:
            longest = max(longest, current)
            current = 1
        previous = day
    longest = max(longest, current)
    return current, longest


def consistency_score(
    moments: Sequence[datetime], default: float = DEFAULT_SCORING.consistency_default
) -> float:
    if len(moments) < 2:
        return default
    millis = np.sort(np.array([as_instant(m).timestamp() * 1000.0 for m in moments]))
    variance = float(np.var(np.diff(millis)))
    return min(max(0.0, 100.0 - variance / MS_PER_DAY), 100.0)


def productivity_score(
    commits: Sequence[Commit],
    scoring: ScoringConfig = DEFAULT_SCORING,
    strict: bool = False,
) -> int:
    """Weighted composite of commit count, file changes and interval consistency."""
    if not commits:
        return 0
    file_changes = sum(c.file_count for c in commits)
    moments = [moment for _, moment in dated_commits(commits, strict)]
    consistency = consistency_score(moments, scoring.consistency_default)
    score = (
        len(commits) * scoring.productivity_commit_weight
        + file_changes * scoring.productivity_file_weight
        + consistency * scoring.productivity_consistency_weight
    )
    return clamp_score(score)


def analyze_productivity(
    commits: Sequence[Commit],
    scoring: ScoringConfig = DEFAULT_SCORING,
    strict: bool = False,
) -> ProductivityAnalytics:
    windows = {"morning": 0, "afternoon": 0, "evening": 0, "night": 0}
    weekly_pattern: dict[str, int] = {}
    weeks: dict[date, list[Commit]] = {}
    active_days: list[date] = []

    for commit in commits:
        moment = commit_timestamp(commit, strict)
        if moment is None:
            continue
        windows[work_window(moment.hour)] += 1
        weekday = WEEKDAY_NAMES[moment.weekday()]
        weekly_pattern[weekday] = weekly_pattern.get(weekday, 0) + 1
        active_days.append(moment.date())
        weeks.setdefault(week_start(moment.date()), []).append(commit)

    coding_streak, longest_streak = streaks(active_days)

    # Each week is scored on its own commits; the work-window split plays no
    # part in the composite, so the global distribution is the only one kept.
    trend = tuple(
        WeeklyScore(week=start.isoformat(), score=productivity_score(weeks[start], scoring))
        for start in sorted(weeks)
    )

    return ProductivityAnalytics(
        coding_streak=coding_streak,
        longest_streak=longest_streak,
        average_commits_per_week=safe_ratio(len(commits), len(weeks)),
        productivity_score=productivity_score(commits, scoring, strict),
        work_patterns=WorkPatterns(**windows),
        weekly_pattern=frozen_mapping(weekly_pattern),
        productivity_trend=trend,
    )
