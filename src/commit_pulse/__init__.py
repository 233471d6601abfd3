"""
Commit Pulse - development analytics from git history

Turns a list of commits into temporal patterns, file churn, productivity,
collaboration and code-quality indicators, each with a 0-100 composite score.
"""

__version__ = "0.1.0"

from .analytics import AnalyticsData, AnalyticsEngine, generate_analytics_data
from .api import analyze, analyze_records, load_commits
from .history import Commit

__all__ = [
    "analyze",  # git repository -> snapshot
    "analyze_records",  # commit list -> snapshot
    "AnalyticsData",
    "AnalyticsEngine",
    "Commit",
    "generate_analytics_data",
    "load_commits",
]
