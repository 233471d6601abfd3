"""Extract commit records from git via subprocess."""

import re
import subprocess
from pathlib import Path
from typing import Optional

from ..exceptions import GitCommandError, NotAGitRepositoryError
from ..logging_config import get_logger
from .models import Commit

logger = get_logger(__name__)

DEFAULT_REPOSITORY_NAME = "Local Repository"
UNKNOWN_BRANCH = "unknown"

_ISO_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class GitExtractor:
    """Parse git log into Commit records and answer repository questions."""

    def __init__(
        self,
        repo_path: str = ".",
        max_commits: int = 100,
        include_line_stats: bool = True,
        timeout_seconds: int = 30,
    ):
        self.repo_path = str(Path(repo_path).resolve())
        self.max_commits = max_commits
        self.include_line_stats = include_line_stats
        self.timeout_seconds = timeout_seconds

    def extract(
        self,
        since: Optional[str] = None,
        until: Optional[str] = None,
        author: Optional[str] = None,
    ) -> list[Commit]:
        """Return commits newest first, filtered by date range and author.

        Raises:
            NotAGitRepositoryError: If repo_path is not inside a work tree
            GitCommandError: If git is missing, times out or fails
        """
        if not self.is_git_repo():
            raise NotAGitRepositoryError(Path(self.repo_path))

        raw = self._run_git_log(self._build_log_args(since, until, author))
        commits = self._parse_log(raw)
        logger.debug("Parsed %d commits from %s", len(commits), self.repo_path)
        return commits

    def is_git_repo(self) -> bool:
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False

    def current_branch(self) -> str:
        output = self._run_quiet(["rev-parse", "--abbrev-ref", "HEAD"])
        return output or UNKNOWN_BRANCH

    def repository_name(self) -> str:
        output = self._run_quiet(["rev-parse", "--show-toplevel"])
        if not output:
            return DEFAULT_REPOSITORY_NAME
        return Path(output).name or DEFAULT_REPOSITORY_NAME

    def _run_quiet(self, args: list[str]) -> Optional[str]:
        """Run a short git query; None on any failure."""
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, *args],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.debug("git %s failed: %s", " ".join(args), e)
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def _build_log_args(
        self, since: Optional[str], until: Optional[str], author: Optional[str]
    ) -> list[str]:
        args = [
            "log",
            "--format=%H|%ai|%an <%ae>|%s",
            "--numstat" if self.include_line_stats else "--name-only",
            "--no-renames",
        ]
        if self.max_commits:
            args.append(f"-n{self.max_commits}")
        if since:
            args.append(f"--since={_with_time(since, '00:00:00')}")
        if until:
            args.append(f"--until={_with_time(until, '23:59:59')}")
        if author:
            args.append(f"--author={author}")
        return args

    # Maximum git log output size (50MB) to prevent OOM on huge repos
    _MAX_OUTPUT_BYTES = 50 * 1024 * 1024

    def _run_git_log(self, args: list[str]) -> str:
        cmd = ["git", "-C", self.repo_path, *args]
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitCommandError("git log", f"git executable not found: {e}")

        try:
            chunks = []
            total_size = 0
            stdout = proc.stdout
            if stdout is None:
                return ""
            while True:
                chunk = stdout.read(1024 * 1024)
                if not chunk:
                    break
                total_size += len(chunk)
                if total_size > self._MAX_OUTPUT_BYTES:
                    logger.warning(
                        "git log output exceeded %dMB limit, truncating",
                        self._MAX_OUTPUT_BYTES // (1024 * 1024),
                    )
                    proc.kill()
                    break
                chunks.append(chunk)

            try:
                proc.wait(timeout=self.timeout_seconds)
            except subprocess.TimeoutExpired:
                proc.kill()
                raise GitCommandError("git log", f"timed out after {self.timeout_seconds}s")

            if proc.returncode != 0 and proc.returncode != -9:  # -9 = killed
                stderr = proc.stderr.read() if proc.stderr else ""
                raise GitCommandError("git log", stderr.strip() or "non-zero exit", proc.returncode)
            return "".join(chunks)
        finally:
            if proc.stdout:
                proc.stdout.close()
            if proc.stderr:
                proc.stderr.close()

    # Matches: 40-char hex hash | author date | author | subject
    # Subject can contain | characters, so we use maxsplit=3 during parsing
    _HEADER_RE = re.compile(r"^[0-9a-f]{40}\|\d{4}-\d{2}-\d{2}[^|]*\|[^|]*\|.*$")

    def _parse_log(self, raw: str) -> list[Commit]:
        """Parse git log output into Commit objects.

        Header lines are detected via regex, so merge commits without files
        and consecutive headers are handled without relying on blank lines.
        """
        commits: list[Commit] = []
        header: Optional[list[str]] = None
        files: list[str] = []
        insertions = 0
        deletions = 0

        def flush() -> None:
            if header is None:
                return
            commits.append(
                Commit(
                    hash=header[0],
                    date=header[1],
                    author=header[2],
                    message=header[3] if len(header) > 3 else "",
                    files=tuple(files),
                    insertions=insertions if self.include_line_stats else None,
                    deletions=deletions if self.include_line_stats else None,
                )
            )

        for line in raw.split("\n"):
            line = line.rstrip()
            if not line.strip():
                continue

            if self._HEADER_RE.match(line):
                flush()
                header = line.split("|", 3)
                files = []
                insertions = 0
                deletions = 0
            elif header is not None:
                if self.include_line_stats:
                    parts = line.split("\t", 2)
                    if len(parts) != 3:
                        continue
                    added, removed, path = parts
                    # Binary files report "-" for both counts
                    if added.isdigit():
                        insertions += int(added)
                    if removed.isdigit():
                        deletions += int(removed)
                    files.append(path)
                else:
                    files.append(line.strip())

        flush()
        return commits


def _with_time(descriptor: str, time_of_day: str) -> str:
    """Pin bare ISO days to the start or end of the day for git's date filters."""
    if _ISO_DAY_RE.match(descriptor):
        return f"{descriptor} {time_of_day}"
    return descriptor
