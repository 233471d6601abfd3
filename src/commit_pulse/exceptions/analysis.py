"""Analysis-related exceptions: malformed commit records."""

from typing import Optional

from .base import CommitPulseError


class AnalysisError(CommitPulseError):
    """Base class for analysis-related errors."""
    pass


class InvalidCommitError(AnalysisError):
    """Raised when a commit record violates its own invariants."""

    def __init__(self, commit_hash: str, reason: str):
        super().__init__(
            f"Invalid commit record: {commit_hash or '<no hash>'}",
            details={"hash": commit_hash, "reason": reason},
        )
        self.commit_hash = commit_hash
        self.reason = reason


class MalformedCommitError(AnalysisError):
    """Raised in strict mode when a commit date cannot be parsed."""

    def __init__(self, commit_hash: str, date: str, reason: Optional[str] = None):
        details = {"hash": commit_hash, "date": date}
        if reason:
            details["reason"] = reason
        super().__init__(f"Unparsable commit date: {date!r}", details=details)
        self.commit_hash = commit_hash
        self.date = date
