"""Tests for git log extraction."""

import shutil
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from commit_pulse.exceptions import GitCommandError, NotAGitRepositoryError
from commit_pulse.history.git_extractor import (
    DEFAULT_REPOSITORY_NAME,
    UNKNOWN_BRANCH,
    GitExtractor,
)

HASH_A = "a" * 40
HASH_B = "b" * 40
HASH_C = "c" * 40

NUMSTAT_LOG = f"""{HASH_A}|2024-03-04 10:15:00 +0100|Alice <alice@example.com>|feat: add search

12\t3\tsrc/search.py
-\t-\tassets/logo.png

{HASH_B}|2024-03-03 18:00:00 +0100|Bob <bob@example.com>|Merge branch 'dev'
{HASH_C}|2024-03-02 09:00:00 +0100|Carol <carol@example.com>|docs: a | b table

4\t0\tREADME.md
"""

NAME_ONLY_LOG = f"""{HASH_A}|2024-03-04 10:15:00 +0100|Alice <alice@example.com>|feat: add search

src/search.py
assets/logo.png
"""


class TestParseLog:
    """Test _parse_log on canned git output."""

    def test_numstat(self, tmp_path):
        commits = GitExtractor(str(tmp_path))._parse_log(NUMSTAT_LOG)

        assert [c.hash for c in commits] == [HASH_A, HASH_B, HASH_C]
        first = commits[0]
        assert first.date == "2024-03-04 10:15:00 +0100"
        assert first.author == "Alice <alice@example.com>"
        assert first.message == "feat: add search"
        assert first.files == ("src/search.py", "assets/logo.png")
        assert first.insertions == 12
        assert first.deletions == 3

    def test_merge_without_files_kept(self, tmp_path):
        commits = GitExtractor(str(tmp_path))._parse_log(NUMSTAT_LOG)
        merge = commits[1]
        assert merge.files == ()
        assert merge.insertions == 0

    def test_subject_with_pipes(self, tmp_path):
        commits = GitExtractor(str(tmp_path))._parse_log(NUMSTAT_LOG)
        assert commits[2].message == "docs: a | b table"
        assert commits[2].files == ("README.md",)

    def test_name_only(self, tmp_path):
        extractor = GitExtractor(str(tmp_path), include_line_stats=False)
        commits = extractor._parse_log(NAME_ONLY_LOG)

        assert commits[0].files == ("src/search.py", "assets/logo.png")
        assert commits[0].insertions is None
        assert commits[0].deletions is None

    def test_empty_output(self, tmp_path):
        assert GitExtractor(str(tmp_path))._parse_log("") == []


class TestBuildLogArgs:
    """Test git log argument construction."""

    def test_defaults(self, tmp_path):
        args = GitExtractor(str(tmp_path))._build_log_args(None, None, None)
        assert args == [
            "log",
            "--format=%H|%ai|%an <%ae>|%s",
            "--numstat",
            "--no-renames",
            "-n100",
        ]

    def test_filters(self, tmp_path):
        extractor = GitExtractor(str(tmp_path), max_commits=0, include_line_stats=False)
        args = extractor._build_log_args("2024-03-01", "2024-03-31", "alice")

        assert "--name-only" in args
        assert not any(a.startswith("-n") for a in args)
        assert "--since=2024-03-01 00:00:00" in args
        assert "--until=2024-03-31 23:59:59" in args
        assert "--author=alice" in args

    def test_non_iso_descriptor_passed_through(self, tmp_path):
        args = GitExtractor(str(tmp_path))._build_log_args("2 weeks ago", None, None)
        assert "--since=2 weeks ago" in args


class TestExtract:
    """Test extract with git mocked out."""

    def test_not_a_repository(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        with patch.object(extractor, "is_git_repo", return_value=False):
            with pytest.raises(NotAGitRepositoryError):
                extractor.extract()

    def test_extract_parses_output(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        with patch.object(extractor, "is_git_repo", return_value=True), patch.object(
            extractor, "_run_git_log", return_value=NUMSTAT_LOG
        ) as run:
            commits = extractor.extract(since="2024-03-01", author="alice")

        assert len(commits) == 3
        args = run.call_args[0][0]
        assert "--since=2024-03-01 00:00:00" in args
        assert "--author=alice" in args


def _fake_process(stdout: str, returncode: int = 0, stderr: str = ""):
    proc = MagicMock()
    proc.stdout.read.side_effect = [stdout, ""]
    proc.stderr.read.return_value = stderr
    proc.returncode = returncode
    return proc


class TestRunGitLog:
    """Test subprocess handling in _run_git_log."""

    def test_success(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        with patch(
            "commit_pulse.history.git_extractor.subprocess.Popen",
            return_value=_fake_process(NUMSTAT_LOG),
        ):
            assert extractor._run_git_log(["log"]) == NUMSTAT_LOG

    def test_non_zero_exit(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        proc = _fake_process("", returncode=128, stderr="fatal: bad revision\n")
        with patch("commit_pulse.history.git_extractor.subprocess.Popen", return_value=proc):
            with pytest.raises(GitCommandError) as exc_info:
                extractor._run_git_log(["log"])

        assert exc_info.value.returncode == 128
        assert exc_info.value.reason == "fatal: bad revision"

    def test_git_missing(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        with patch(
            "commit_pulse.history.git_extractor.subprocess.Popen",
            side_effect=FileNotFoundError("git"),
        ):
            with pytest.raises(GitCommandError):
                extractor._run_git_log(["log"])

    def test_timeout(self, tmp_path):
        extractor = GitExtractor(str(tmp_path), timeout_seconds=1)
        proc = _fake_process("")
        proc.wait.side_effect = subprocess.TimeoutExpired(cmd="git log", timeout=1)
        with patch("commit_pulse.history.git_extractor.subprocess.Popen", return_value=proc):
            with pytest.raises(GitCommandError) as exc_info:
                extractor._run_git_log(["log"])

        assert "timed out" in exc_info.value.reason
        proc.kill.assert_called_once()


class TestRepositoryQuestions:
    """Test repository name and branch lookups."""

    def test_fallbacks_when_git_fails(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        with patch.object(extractor, "_run_quiet", return_value=None):
            assert extractor.repository_name() == DEFAULT_REPOSITORY_NAME
            assert extractor.current_branch() == UNKNOWN_BRANCH

    def test_values_from_git(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        with patch.object(extractor, "_run_quiet", return_value="/home/dev/commit-pulse"):
            assert extractor.repository_name() == "commit-pulse"

    def test_not_a_repo_directory(self, tmp_path):
        extractor = GitExtractor(str(tmp_path))
        with patch(
            "commit_pulse.history.git_extractor.subprocess.run",
            return_value=MagicMock(returncode=128, stdout=""),
        ):
            assert extractor.is_git_repo() is False


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRealRepository:
    """Extract from a throwaway git repository."""

    def _git(self, repo, *args):
        subprocess.run(
            [
                "git",
                "-C",
                str(repo),
                "-c",
                "user.name=Test",
                "-c",
                "user.email=test@example.com",
                "-c",
                "commit.gpgsign=false",
                *args,
            ],
            check=True,
            capture_output=True,
        )

    def test_extract(self, tmp_path):
        self._git(tmp_path, "init", "-q")
        (tmp_path / "app.py").write_text("a = 1\nb = 2\n")
        self._git(tmp_path, "add", "app.py")
        self._git(tmp_path, "commit", "-q", "-m", "feat: add app")

        extractor = GitExtractor(str(tmp_path))
        commits = extractor.extract()

        assert len(commits) == 1
        assert commits[0].message == "feat: add app"
        assert commits[0].author == "Test <test@example.com>"
        assert commits[0].files == ("app.py",)
        assert commits[0].insertions == 2
        assert commits[0].timestamp is not None
        assert extractor.repository_name() == tmp_path.resolve().name
        assert extractor.current_branch() not in ("", UNKNOWN_BRANCH)
