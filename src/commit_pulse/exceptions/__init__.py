"""Exception hierarchy for Commit Pulse."""

from .analysis import (
    AnalysisError,
    InvalidCommitError,
    MalformedCommitError,
)
from .base import CommitPulseError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPeriodError,
)
from .git import (
    GitCommandError,
    GitError,
    NotAGitRepositoryError,
)

__all__ = [
    "CommitPulseError",
    "AnalysisError",
    "InvalidCommitError",
    "MalformedCommitError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPeriodError",
    "GitError",
    "GitCommandError",
    "NotAGitRepositoryError",
]
