"""Code quality: message categories, technical-debt flags and a composite score.

Composite score (0-100) is the sum of four capped terms:

    refactoring   min(refactor% / 30 * 30, 30)        more refactoring is better
    bug fixes     max(0, 20 - bugfix%) / 20 * 20      fewer fixes is better
    commit size   20 inside 5-15 files per commit, linear falloff outside
    debt          max(0, 30 - 2 * indicator_count)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from ..config import DEFAULT_SCORING, ScoringConfig
from ..history.models import Commit
from .classifiers import (
    CommitCategory,
    CommitClassifier,
    DebtHeuristic,
    KeywordClassifier,
    default_debt_heuristics,
)
from .counters import clamp_score, safe_ratio
from .models import CodeQualityAnalytics, TechnicalDebtIndicator

LOW_REFACTORING = "Consider more frequent refactoring to maintain code quality"
HIGH_BUG_FIX_RATE = "High bug fix rate suggests need for better testing and code review"
HIGH_DEBT = "Address technical debt indicators to improve code maintainability"
ALL_GOOD = "Code quality looks good! Keep up the excellent work."


def commit_size_score(average_size: float, scoring: ScoringConfig = DEFAULT_SCORING) -> float:
    if scoring.commit_size_min <= average_size <= scoring.commit_size_max:
        return 20.0
    if average_size < scoring.commit_size_min:
        return average_size / scoring.commit_size_min * 20
    overshoot = (average_size - scoring.commit_size_max) / scoring.commit_size_falloff
    return max(0.0, 20 - overshoot * 20)


def quality_score(
    refactoring_frequency: float,
    bug_fix_percentage: float,
    average_commit_size: float,
    debt_count: int,
    scoring: ScoringConfig = DEFAULT_SCORING,
) -> int:
    target = scoring.refactoring_target_pct
    tolerance = scoring.bugfix_tolerance_pct
    refactoring = min(refactoring_frequency / target * 30, 30)
    bug_fix = max(0.0, tolerance - bug_fix_percentage) / tolerance * 20
    size = commit_size_score(average_commit_size, scoring)
    debt = max(0.0, 30 - scoring.debt_penalty * debt_count)
    return clamp_score(refactoring + bug_fix + size + debt)


def improvement_suggestions(
    refactoring_frequency: float,
    bug_fix_percentage: float,
    debt_count: int,
    scoring: ScoringConfig = DEFAULT_SCORING,
) -> tuple[str, ...]:
    suggestions = []
    if refactoring_frequency < scoring.suggest_refactor_below:
        suggestions.append(LOW_REFACTORING)
    if bug_fix_percentage > scoring.suggest_bugfix_above:
        suggestions.append(HIGH_BUG_FIX_RATE)
    if debt_count > scoring.suggest_debt_above:
        suggestions.append(HIGH_DEBT)
    return tuple(suggestions) or (ALL_GOOD,)


def analyze_code_quality(
    commits: Sequence[Commit],
    scoring: ScoringConfig = DEFAULT_SCORING,
    classifier: Optional[CommitClassifier] = None,
    debt_heuristics: Optional[Sequence[DebtHeuristic]] = None,
) -> CodeQualityAnalytics:
    classifier = classifier or KeywordClassifier()
    if debt_heuristics is None:
        debt_heuristics = default_debt_heuristics(scoring.large_commit_files)

    total_size = 0
    counts = {category: 0 for category in CommitCategory}
    indicators: list[TechnicalDebtIndicator] = []

    for commit in commits:
        total_size += commit.file_count
        for category in classifier.classify(commit.message):
            counts[category] += 1

        for path in commit.files:
            issues = tuple(
                issue for issue in (check(path, commit) for check in debt_heuristics) if issue
            )
            if issues:
                indicators.append(TechnicalDebtIndicator(file=path, issues=issues))

    total = len(commits)
    average_size = safe_ratio(total_size, total)
    refactoring = safe_ratio(counts[CommitCategory.REFACTOR], total) * 100
    bug_fixes = safe_ratio(counts[CommitCategory.BUGFIX], total) * 100
    features = safe_ratio(counts[CommitCategory.FEATURE], total) * 100

    score = (
        quality_score(refactoring, bug_fixes, average_size, len(indicators), scoring)
        if commits
        else 0
    )

    return CodeQualityAnalytics(
        average_commit_size=average_size,
        refactoring_frequency=refactoring,
        bug_fix_percentage=bug_fixes,
        feature_commit_percentage=features,
        quality_score=score,
        technical_debt_indicators=tuple(indicators),
        improvement_suggestions=improvement_suggestions(
            refactoring, bug_fixes, len(indicators), scoring
        ),
    )
