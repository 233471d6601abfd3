"""Message and path heuristics used by the quality aggregator.

Both seams are swappable: any object with ``classify(message)`` can replace
``KeywordClassifier``, and debt heuristics are plain callables taking
``(file, commit)`` and returning an issue label or None.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Optional, Protocol

from ..history.models import Commit


class CommitCategory(str, Enum):
    REFACTOR = "refactor"
    BUGFIX = "bugfix"
    FEATURE = "feature"


DEFAULT_KEYWORDS: Mapping[CommitCategory, tuple[str, ...]] = {
    CommitCategory.REFACTOR: ("refactor", "cleanup"),
    CommitCategory.BUGFIX: ("fix", "bug", "error"),
    CommitCategory.FEATURE: ("feat", "feature", "add"),
}


class CommitClassifier(Protocol):
    def classify(self, message: str) -> frozenset[CommitCategory]: ...


class KeywordClassifier:
    """Substring match on the lower-cased message; categories overlap freely."""

    def __init__(self, keywords: Mapping[CommitCategory, Sequence[str]] = DEFAULT_KEYWORDS):
        self.keywords = {category: tuple(words) for category, words in keywords.items()}

    def classify(self, message: str) -> frozenset[CommitCategory]:
        lowered = message.lower()
        return frozenset(
            category
            for category, words in self.keywords.items()
            if any(word in lowered for word in words)
        )


DebtHeuristic = Callable[[str, Commit], Optional[str]]


def skipped_tests(file: str, commit: Commit) -> Optional[str]:
    if "test" in file and "skip" in commit.message.lower():
        return "Skipped tests"
    return None


def todo_markers(file: str, commit: Commit) -> Optional[str]:
    if any(marker in file for marker in ("todo", "fixme", "hack")):
        return "TODO/FIXME comments"
    return None


def legacy_paths(file: str, commit: Commit) -> Optional[str]:
    if any(marker in file for marker in ("legacy", "old", "deprecated")):
        return "Legacy code"
    return None


def large_commit(max_files: int) -> DebtHeuristic:
    def check(file: str, commit: Commit) -> Optional[str]:
        if commit.file_count > max_files:
            return "Large commit"
        return None

    return check


def default_debt_heuristics(max_files: int = 20) -> tuple[DebtHeuristic, ...]:
    return (skipped_tests, todo_markers, legacy_paths, large_commit(max_files))
