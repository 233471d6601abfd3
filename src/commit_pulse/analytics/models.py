"""Immutable analytics snapshot types.

Every aggregator returns one of the frozen dataclasses below; the facade
composes them into ``AnalyticsData``. ``to_dict()`` produces the camelCase
JSON shape consumed by renderers (``commits.totalCommits``,
``collaboration.authorActivity[].percentage``, ...).
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal

FileChangeType = Literal["added", "modified", "deleted", "renamed", "unknown"]


class AnalyticsFocus(str, Enum):
    """Focus selector; recorded as metadata, never used to skip aggregators."""

    PRODUCTIVITY = "productivity"
    QUALITY = "quality"
    COLLABORATION = "collaboration"
    PATTERNS = "patterns"
    ALL = "all"


class OutputFormat(str, Enum):
    DASHBOARD = "dashboard"
    JSON = "json"
    SUMMARY = "summary"


def frozen_mapping(data: Mapping) -> Mapping:
    """Read-only view over a private copy of ``data``."""
    return MappingProxyType(dict(data))


# ---------------------------------------------------------------------------
# Commit patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CommitAnalytics:
    total_commits: int
    commits_by_day: Mapping[str, int]
    commits_by_hour: Mapping[str, int]
    commits_by_author: Mapping[str, int]
    commits_by_branch: Mapping[str, int]
    average_commits_per_day: float
    most_active_day: str  # "" when there is no dated commit
    most_active_hour: int
    peak_productivity_time: str  # "H:00", "9:00" when there is no data


# ---------------------------------------------------------------------------
# File churn
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileChange:
    file: str
    changes: int
    type: FileChangeType  # volume bucket, not a git status


@dataclass(frozen=True)
class LargestCommit:
    hash: str
    files_changed: int
    date: str


@dataclass(frozen=True)
class ComplexityPoint:
    date: str
    complexity: int  # files touched that day


@dataclass(frozen=True)
class FileChangeAnalytics:
    total_files_changed: int
    most_modified_files: tuple[FileChange, ...]
    files_by_type: Mapping[str, int]
    average_files_per_commit: float
    largest_commit: LargestCommit
    code_complexity_trend: tuple[ComplexityPoint, ...]


# ---------------------------------------------------------------------------
# Productivity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkPatterns:
    morning: int = 0  # 06-12
    afternoon: int = 0  # 12-17
    evening: int = 0  # 17-22
    night: int = 0


@dataclass(frozen=True)
class WeeklyScore:
    week: str  # Sunday the week starts on
    score: int


@dataclass(frozen=True)
class ProductivityAnalytics:
    coding_streak: int
    longest_streak: int
    average_commits_per_week: float
    productivity_score: int
    work_patterns: WorkPatterns
    weekly_pattern: Mapping[str, int]
    productivity_trend: tuple[WeeklyScore, ...]


# ---------------------------------------------------------------------------
# Collaboration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AuthorActivity:
    author: str
    commits: int
    percentage: float


@dataclass(frozen=True)
class PairProgrammingIndicator:
    date: str
    authors: tuple[str, ...]


@dataclass(frozen=True)
class CollaborationAnalytics:
    total_authors: int
    author_activity: tuple[AuthorActivity, ...]
    collaboration_score: int
    most_collaborative_day: str  # "None" without pairing days
    pair_programming_indicators: tuple[PairProgrammingIndicator, ...]
    branch_collaboration: Mapping[str, tuple[str, ...]]


# ---------------------------------------------------------------------------
# Code quality
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TechnicalDebtIndicator:
    file: str
    issues: tuple[str, ...]


@dataclass(frozen=True)
class CodeQualityAnalytics:
    average_commit_size: float
    refactoring_frequency: float
    bug_fix_percentage: float
    feature_commit_percentage: float
    quality_score: int
    technical_debt_indicators: tuple[TechnicalDebtIndicator, ...]
    improvement_suggestions: tuple[str, ...]


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Period:
    since: str | None
    until: str | None
    days: int


@dataclass(frozen=True)
class RepositoryInfo:
    name: str
    branch: str
    total_commits: int


@dataclass(frozen=True)
class AnalyticsMetadata:
    focus: AnalyticsFocus
    format: OutputFormat
    provider: str


@dataclass(frozen=True)
class AnalyticsData:
    period: Period
    repository: RepositoryInfo
    commits: CommitAnalytics
    files: FileChangeAnalytics
    productivity: ProductivityAnalytics
    collaboration: CollaborationAnalytics
    quality: CodeQualityAnalytics
    generated_at: datetime
    metadata: AnalyticsMetadata

    def to_dict(self) -> dict[str, Any]:
        return to_json_value(self)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


_CAMEL_RE = re.compile(r"_([a-z0-9])")


def camel_case(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def to_json_value(value: Any) -> Any:
    """Convert snapshot objects to JSON-compatible values with camelCase keys."""
    if is_dataclass(value) and not isinstance(value, type):
        return {camel_case(f.name): to_json_value(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return format_instant(value)
    if isinstance(value, Mapping):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    return value


def format_instant(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")
