"""Configuration exceptions: settings and period descriptors."""

from typing import Any

from .base import CommitPulseError


class ConfigurationError(CommitPulseError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidPeriodError(ConfigurationError):
    """Raised when a since/until descriptor cannot be resolved."""

    def __init__(self, descriptor: str, field_name: str = "since"):
        super().__init__(
            f"Invalid '{field_name}' date format: {descriptor}",
            details={
                "value": descriptor,
                "hint": "use YYYY-MM-DD, today, yesterday or relative dates like 7d, 2w, 1m",
            },
        )
        self.descriptor = descriptor
        self.field_name = field_name
