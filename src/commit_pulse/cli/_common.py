"""Shared CLI helpers."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalyticsConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
) -> AnalyticsConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    if log_file is not None:
        overrides["log_file"] = str(log_file)
    return load_config(config_file=config, **overrides)


def default_output_path(output_dir: str, extension: str, now: Optional[datetime] = None) -> Path:
    """reports/analytics-2025-01-31T10-15-00-000Z.json style path."""
    now = now or datetime.now(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H-%M-%S-") + f"{now.microsecond // 1000:03d}Z"
    return Path(output_dir) / f"analytics-{stamp}.{extension}"
