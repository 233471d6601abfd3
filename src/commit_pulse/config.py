"""Configuration loading and management for Commit Pulse.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalyticsConfig)
    2. Global config (~/.commit-pulse.toml)
    3. Project config (./commit-pulse.toml)
    4. Explicit config file
    5. Environment variables (COMMIT_PULSE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, git_max_commits=500)
    >>> config.verbosity
    'verbose'
    >>> config.git_max_commits
    500
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, Union, get_type_hints

from .exceptions import CommitPulseError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

FOCUS_CHOICES = ("productivity", "quality", "collaboration", "patterns", "all")
FORMAT_CHOICES = ("dashboard", "json", "summary")

ENV_PREFIX = "COMMIT_PULSE_"


@dataclass(frozen=True)
class ScoringConfig:
    """Heuristic thresholds and composite-score weights.

    Attributes:
        File churn:
            top_files_limit: Length of the most-modified-files list
            modified_change_threshold: Change count above which a file is tagged "modified"
            added_change_threshold: Change count above which a file is tagged "added"

        Productivity (score = commits·w1 + files·w2 + consistency·w3):
            productivity_commit_weight: Weight of the raw commit count
            productivity_file_weight: Weight of the summed file changes
            productivity_consistency_weight: Weight of the interval consistency score
            consistency_default: Consistency used with fewer than two dated commits

        Collaboration:
            diversity_full_authors: Author count that earns the full diversity half

        Quality:
            refactoring_target_pct: Refactoring frequency earning the full 30 points
            bugfix_tolerance_pct: Bug-fix share above which the bug-fix term is 0
            commit_size_min / commit_size_max: Ideal files-per-commit band
            commit_size_falloff: Files above the band at which the size term reaches 0
            debt_penalty: Points lost per technical-debt indicator
            large_commit_files: File count above which a commit is a "Large commit"

        Suggestions:
            suggest_refactor_below: Refactoring frequency (%) triggering a suggestion
            suggest_bugfix_above: Bug-fix share (%) triggering a suggestion
            suggest_debt_above: Debt indicator count triggering a suggestion
    """

    # === File churn ===
    top_files_limit: int = 10
    modified_change_threshold: int = 20
    added_change_threshold: int = 5

    # === Productivity ===
    productivity_commit_weight: float = 0.3
    productivity_file_weight: float = 0.2
    productivity_consistency_weight: float = 0.5
    consistency_default: float = 50.0

    # === Collaboration ===
    diversity_full_authors: int = 5

    # === Quality ===
    refactoring_target_pct: float = 30.0
    bugfix_tolerance_pct: float = 20.0
    commit_size_min: float = 5.0
    commit_size_max: float = 15.0
    commit_size_falloff: float = 10.0
    debt_penalty: float = 2.0
    large_commit_files: int = 20

    # === Suggestions ===
    suggest_refactor_below: float = 10.0
    suggest_bugfix_above: float = 30.0
    suggest_debt_above: int = 10

    def __post_init__(self) -> None:
        """Validate scoring configuration."""
        if self.top_files_limit < 1:
            raise ValueError("top_files_limit must be at least 1")
        if self.added_change_threshold > self.modified_change_threshold:
            raise ValueError("added_change_threshold must not exceed modified_change_threshold")

        weights = [
            "productivity_commit_weight",
            "productivity_file_weight",
            "productivity_consistency_weight",
        ]
        for field_name in weights:
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be non-negative")

        if not 0.0 <= self.consistency_default <= 100.0:
            raise ValueError("consistency_default must be between 0 and 100")
        if self.diversity_full_authors < 1:
            raise ValueError("diversity_full_authors must be at least 1")
        if self.refactoring_target_pct <= 0 or self.bugfix_tolerance_pct <= 0:
            raise ValueError("refactoring_target_pct and bugfix_tolerance_pct must be positive")
        if not 0 < self.commit_size_min <= self.commit_size_max:
            raise ValueError("commit size band must satisfy 0 < commit_size_min <= commit_size_max")
        if self.commit_size_falloff <= 0:
            raise ValueError("commit_size_falloff must be positive")
        if self.debt_penalty < 0:
            raise ValueError("debt_penalty must be non-negative")
        if self.large_commit_files < 1:
            raise ValueError("large_commit_files must be at least 1")


DEFAULT_SCORING = ScoringConfig()


@dataclass(frozen=True)
class AnalyticsConfig:
    """Configuration for analytics runs.

    Attributes:
        Git integration:
            git_max_commits: Maximum commits read from git log (0 = unlimited)
            include_line_stats: Collect insertions/deletions via --numstat
            git_timeout_seconds: Timeout for each git subprocess

        Engine:
            parallel: Run the five aggregators on a thread pool
            strict: Raise on unparsable commit dates instead of skipping them

        Output:
            default_focus: Focus label written into snapshot metadata
            default_format: Output format used by the CLI
            output_dir: Directory for generated reports
            verbosity: Console logging level (quiet, normal or verbose)
            log_file: Optional file receiving INFO and above logging
    """

    # Git integration
    git_max_commits: int = 100
    include_line_stats: bool = True
    git_timeout_seconds: int = 30

    # Engine
    parallel: bool = False
    strict: bool = False

    # Output
    default_focus: str = "all"
    default_format: str = "json"
    output_dir: str = "reports"
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.git_max_commits < 0:
            raise InvalidConfigError("git_max_commits", self.git_max_commits, "must be non-negative")
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if self.default_focus not in FOCUS_CHOICES:
            raise InvalidConfigError(
                "default_focus", self.default_focus, f"expected one of {', '.join(FOCUS_CHOICES)}"
            )
        if self.default_format not in FORMAT_CHOICES:
            raise InvalidConfigError(
                "default_format", self.default_format, f"expected one of {', '.join(FORMAT_CHOICES)}"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet, normal or verbose")


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalyticsConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalyticsConfig instance

    Raises:
        CommitPulseError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".commit-pulse.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise CommitPulseError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "commit-pulse.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise CommitPulseError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise CommitPulseError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise CommitPulseError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Verbosity booleans from the CLI collapse into the literal
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    scoring = merged.pop("scoring", None)
    if scoring is not None:
        if isinstance(scoring, dict):
            try:
                merged["scoring"] = ScoringConfig(**scoring)
            except (TypeError, ValueError) as e:
                raise CommitPulseError(f"Invalid [scoring] config: {e}")
        elif isinstance(scoring, ScoringConfig):
            merged["scoring"] = scoring

    try:
        return AnalyticsConfig(**merged)
    except TypeError as e:
        raise CommitPulseError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COMMIT_PULSE_* environment variables.

    Only top-level scalar fields are read, e.g. COMMIT_PULSE_GIT_MAX_COMMITS,
    COMMIT_PULSE_PARALLEL, COMMIT_PULSE_VERBOSITY, COMMIT_PULSE_LOG_FILE.
    """
    type_hints = get_type_hints(AnalyticsConfig)

    result: dict[str, Any] = {}

    for field_name in AnalyticsConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise CommitPulseError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot come from the environment.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    # Optional[str]
    if origin is Union and str in type_hint.__args__:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
