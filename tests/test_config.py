"""Tests for configuration loading."""

import pytest

from commit_pulse.config import AnalyticsConfig, ScoringConfig, load_config
from commit_pulse.exceptions import CommitPulseError, InvalidConfigError


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty home and working directory."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in ("COMMIT_PULSE_GIT_MAX_COMMITS", "COMMIT_PULSE_PARALLEL", "COMMIT_PULSE_STRICT"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


class TestScoringConfig:
    """Test ScoringConfig validation."""

    def test_defaults(self):
        scoring = ScoringConfig()
        assert scoring.top_files_limit == 10
        assert scoring.productivity_commit_weight == 0.3
        assert scoring.large_commit_files == 20

    def test_rejects_inverted_thresholds(self):
        with pytest.raises(ValueError):
            ScoringConfig(added_change_threshold=30, modified_change_threshold=20)

    def test_rejects_negative_weight(self):
        with pytest.raises(ValueError):
            ScoringConfig(productivity_file_weight=-0.1)

    def test_rejects_bad_size_band(self):
        with pytest.raises(ValueError):
            ScoringConfig(commit_size_min=20.0, commit_size_max=10.0)


class TestAnalyticsConfig:
    """Test AnalyticsConfig validation."""

    def test_defaults(self):
        config = AnalyticsConfig()
        assert config.git_max_commits == 100
        assert config.parallel is False
        assert config.strict is False
        assert config.default_focus == "all"
        assert config.scoring == ScoringConfig()

    def test_rejects_unknown_focus(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            AnalyticsConfig(default_focus="velocity")
        assert exc_info.value.key == "default_focus"

    def test_rejects_negative_max_commits(self):
        with pytest.raises(InvalidConfigError):
            AnalyticsConfig(git_max_commits=-1)


class TestLoadConfig:
    """Test load_config source merging."""

    def test_defaults(self, isolated):
        assert load_config() == AnalyticsConfig()

    def test_overrides(self, isolated):
        config = load_config(git_max_commits=500, parallel=True, strict=None)
        assert config.git_max_commits == 500
        assert config.parallel is True
        assert config.strict is False

    def test_verbose_flag(self, isolated):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False).verbosity == "normal"

    def test_project_file(self, isolated):
        (isolated / "work" / "commit-pulse.toml").write_text(
            'git_max_commits = 250\ndefault_format = "summary"\n'
        )
        config = load_config()
        assert config.git_max_commits == 250
        assert config.default_format == "summary"

    def test_explicit_file_beats_global(self, isolated):
        (isolated / "home" / ".commit-pulse.toml").write_text("git_max_commits = 10\n")
        explicit = isolated / "custom.toml"
        explicit.write_text("git_max_commits = 20\n")
        assert load_config(config_file=explicit).git_max_commits == 20

    def test_scoring_section(self, isolated):
        explicit = isolated / "custom.toml"
        explicit.write_text("[scoring]\ntop_files_limit = 3\ndebt_penalty = 5.0\n")
        config = load_config(config_file=explicit)
        assert config.scoring.top_files_limit == 3
        assert config.scoring.debt_penalty == 5.0

    def test_bad_scoring_section(self, isolated):
        explicit = isolated / "custom.toml"
        explicit.write_text("[scoring]\nunknown_knob = 1\n")
        with pytest.raises(CommitPulseError):
            load_config(config_file=explicit)

    def test_env_vars(self, isolated, monkeypatch):
        monkeypatch.setenv("COMMIT_PULSE_GIT_MAX_COMMITS", "42")
        monkeypatch.setenv("COMMIT_PULSE_PARALLEL", "yes")
        config = load_config()
        assert config.git_max_commits == 42
        assert config.parallel is True

    def test_override_beats_env(self, isolated, monkeypatch):
        monkeypatch.setenv("COMMIT_PULSE_GIT_MAX_COMMITS", "42")
        assert load_config(git_max_commits=7).git_max_commits == 7

    def test_logging_settings_from_env(self, isolated, monkeypatch):
        monkeypatch.setenv("COMMIT_PULSE_VERBOSITY", "quiet")
        monkeypatch.setenv("COMMIT_PULSE_LOG_FILE", "/tmp/pulse.log")
        config = load_config()
        assert config.verbosity == "quiet"
        assert config.log_file == "/tmp/pulse.log"

    def test_log_file_defaults_to_none(self, isolated, monkeypatch):
        monkeypatch.delenv("COMMIT_PULSE_LOG_FILE", raising=False)
        assert load_config().log_file is None

    def test_bad_env_value(self, isolated, monkeypatch):
        monkeypatch.setenv("COMMIT_PULSE_STRICT", "maybe")
        with pytest.raises(CommitPulseError):
            load_config()

    def test_missing_file(self, isolated):
        with pytest.raises(CommitPulseError, match="not found"):
            load_config(config_file=isolated / "nope.toml")

    def test_invalid_toml(self, isolated):
        explicit = isolated / "broken.toml"
        explicit.write_text("git_max_commits = = 3\n")
        with pytest.raises(CommitPulseError):
            load_config(config_file=explicit)

    def test_unknown_key(self, isolated):
        explicit = isolated / "custom.toml"
        explicit.write_text("no_such_setting = 1\n")
        with pytest.raises(CommitPulseError):
            load_config(config_file=explicit)
