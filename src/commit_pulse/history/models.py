"""Commit record: the normalized unit of analytics input."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from ..exceptions import InvalidCommitError

# Trailing UTC offset written as Z, +HHMM, +HH:MM, optionally after a space (git %ai)
_OFFSET_RE = re.compile(r"\s*(?:Z|([+-])(\d{2}):?(\d{2}))$")
_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_commit_date(text: str) -> Optional[datetime]:
    """Parse a commit timestamp; return None when it is not a valid instant.

    Accepts ISO-8601 (``2024-03-01T10:15:00.000Z``), git's ``%ai`` form
    (``2024-03-01 10:15:00 +0100``) and bare dates. The wall clock is kept as
    written so calendar keys reflect the committer's local time.
    """
    if not text or not isinstance(text, str):
        return None

    value = text.strip()
    offset = ""
    match = _OFFSET_RE.search(value)
    if match and len(value) > 10:
        sign, hours, minutes = match.groups()
        offset = f"{sign}{hours}:{minutes}" if sign else "+00:00"
        value = value[: match.start()]

    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    value = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value)

    try:
        return datetime.fromisoformat(value + offset)
    except ValueError:
        return None


def as_instant(moment: datetime) -> datetime:
    """Attach UTC to naive timestamps so instants compare safely."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _line_count(data: dict[str, Any], name: str, commit_hash: str) -> Optional[int]:
    """Read an optional insertions/deletions value; JSON exports may carry "5" for 5."""
    value = data.get(name)
    if value is None:
        return None
    if isinstance(value, (bool, float)):
        raise InvalidCommitError(commit_hash, f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidCommitError(commit_hash, f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Commit:
    hash: str
    date: str  # ISO-8601 timestamp as supplied by git
    message: str
    author: str  # raw, possibly "Name <email>"
    files: tuple[str, ...] = field(default_factory=tuple)  # repo-relative paths
    insertions: Optional[int] = None
    deletions: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.files, tuple):
            object.__setattr__(self, "files", tuple(self.files))
        for name in ("insertions", "deletions"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidCommitError(self.hash, f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidCommitError(self.hash, f"{name} must be non-negative, got {value}")

    @property
    def display_name(self) -> str:
        """Author name without the trailing `` <email>`` part."""
        if " <" in self.author:
            return self.author.split(" <", 1)[0]
        return self.author

    @property
    def timestamp(self) -> Optional[datetime]:
        return parse_commit_date(self.date)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Commit":
        """Build a commit from its JSON shape (hash, date, message, author, files, ...)."""
        missing = [key for key in ("hash", "date", "author") if key not in data]
        if missing:
            raise InvalidCommitError(
                str(data.get("hash", "")), f"missing field(s): {', '.join(missing)}"
            )
        commit_hash = str(data["hash"])
        files = data.get("files") or []
        if not isinstance(files, (list, tuple)) or not all(isinstance(p, str) for p in files):
            raise InvalidCommitError(commit_hash, "files must be a list of path strings")
        return cls(
            hash=commit_hash,
            date=str(data["date"]),
            message=str(data.get("message", "")),
            author=str(data["author"]),
            files=tuple(files),
            insertions=_line_count(data, "insertions", commit_hash),
            deletions=_line_count(data, "deletions", commit_hash),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "hash": self.hash,
            "date": self.date,
            "message": self.message,
            "author": self.author,
            "files": list(self.files),
        }
        if self.insertions is not None:
            data["insertions"] = self.insertions
        if self.deletions is not None:
            data["deletions"] = self.deletions
        return data
