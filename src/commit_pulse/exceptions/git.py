"""Git collaborator exceptions."""

from pathlib import Path
from typing import Optional

from .base import CommitPulseError


class GitError(CommitPulseError):
    """Base class for errors talking to git."""

    pass


class NotAGitRepositoryError(GitError):
    """Raised when the target directory is not inside a git work tree."""

    def __init__(self, path: Path):
        super().__init__(f"Not a git repository: {path}", details={"path": str(path)})
        self.path = path


class GitCommandError(GitError):
    """Raised when a git subprocess fails, times out or is missing."""

    def __init__(self, command: str, reason: str, returncode: Optional[int] = None):
        details = {"command": command, "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)
        super().__init__(f"git command failed: {command}", details=details)
        self.command = command
        self.reason = reason
        self.returncode = returncode
