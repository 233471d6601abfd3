"""File churn: per-file and per-language counts, largest commit, daily touch trend."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from typing import Optional

from ..config import DEFAULT_SCORING, ScoringConfig
from ..history.models import Commit
from .counters import commit_timestamp, day_key, safe_ratio
from .models import (
    ComplexityPoint,
    FileChange,
    FileChangeAnalytics,
    FileChangeType,
    LargestCommit,
    frozen_mapping,
)

FILE_TYPES = {
    "ts": "TypeScript",
    "js": "JavaScript",
    "tsx": "React TypeScript",
    "jsx": "React JavaScript",
    "py": "Python",
    "java": "Java",
    "cpp": "C++",
    "c": "C",
    "cs": "C#",
    "php": "PHP",
    "rb": "Ruby",
    "go": "Go",
    "rs": "Rust",
    "swift": "Swift",
    "kt": "Kotlin",
    "scala": "Scala",
    "html": "HTML",
    "css": "CSS",
    "scss": "SCSS",
    "sass": "Sass",
    "less": "Less",
    "json": "JSON",
    "xml": "XML",
    "yaml": "YAML",
    "yml": "YAML",
    "md": "Markdown",
    "txt": "Text",
    "sql": "SQL",
    "sh": "Shell",
    "bash": "Bash",
    "zsh": "Zsh",
    "fish": "Fish",
    "dockerfile": "Dockerfile",
    "dockerignore": "Docker Ignore",
    "gitignore": "Git Ignore",
    "env": "Environment",
    "config": "Configuration",
}

OTHER_TYPE = "Other"


def file_type(path: str) -> str:
    """Language label from the text after the last dot (the whole name if none)."""
    extension = path.rsplit(".", 1)[-1].lower()
    return FILE_TYPES.get(extension, OTHER_TYPE)


def change_type(changes: int, scoring: ScoringConfig = DEFAULT_SCORING) -> FileChangeType:
    """Volume bucket: heavily changed files read as "modified", moderate as "added"."""
    if changes > scoring.modified_change_threshold:
        return "modified"
    if changes > scoring.added_change_threshold:
        return "added"
    return "unknown"


def analyze_file_changes(
    commits: Sequence[Commit],
    scoring: ScoringConfig = DEFAULT_SCORING,
    strict: bool = False,
) -> FileChangeAnalytics:
    file_changes: dict[str, int] = {}
    files_by_type: dict[str, int] = {}
    files_by_date: dict[str, int] = defaultdict(int)
    total_files = 0
    largest: Optional[Commit] = None

    for commit in commits:
        count = commit.file_count
        total_files += count

        if count > (largest.file_count if largest else 0):
            largest = commit

        for path in commit.files:
            file_changes[path] = file_changes.get(path, 0) + 1
            label = file_type(path)
            files_by_type[label] = files_by_type.get(label, 0) + 1

        moment = commit_timestamp(commit, strict)
        if moment is not None:
            files_by_date[day_key(moment)] += count

    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(file_changes.items(), key=lambda item: item[1], reverse=True)
    most_modified = tuple(
        FileChange(file=path, changes=changes, type=change_type(changes, scoring))
        for path, changes in ranked[: scoring.top_files_limit]
    )

    largest_commit = (
        LargestCommit(hash=largest.hash, files_changed=largest.file_count, date=largest.date)
        if largest
        else LargestCommit(hash="", files_changed=0, date="")
    )

    trend = tuple(
        ComplexityPoint(date=day, complexity=files_by_date[day]) for day in sorted(files_by_date)
    )

    return FileChangeAnalytics(
        total_files_changed=total_files,
        most_modified_files=most_modified,
        files_by_type=frozen_mapping(files_by_type),
        average_files_per_commit=safe_ratio(total_files, len(commits)),
        largest_commit=largest_commit,
        code_complexity_trend=trend,
    )
