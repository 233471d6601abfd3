"""JSON formatter for Commit Pulse."""

from ..analytics.models import AnalyticsData
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the snapshot as indented camelCase JSON."""

    extension = "json"

    def render(self, data: AnalyticsData) -> None:
        print(self.format(data))

    def format(self, data: AnalyticsData) -> str:
        return data.to_json(indent=2)
