"""Base formatter interface for Commit Pulse output rendering."""

from abc import ABC, abstractmethod

from ..analytics.models import AnalyticsData


class BaseFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters read the snapshot as-is and never recompute aggregate fields.
    """

    extension = "txt"

    @abstractmethod
    def render(self, data: AnalyticsData) -> None:
        """Render the snapshot to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, data: AnalyticsData) -> str:
        """Return formatted string representation of the snapshot."""
