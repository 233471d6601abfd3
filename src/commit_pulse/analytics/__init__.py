"""Commit analytics: five independent aggregators and the facade that joins them."""

from .classifiers import CommitCategory, CommitClassifier, KeywordClassifier
from .collaboration import analyze_collaboration
from .commits import analyze_commits
from .engine import AnalyticsEngine, RepositorySource, generate_analytics_data
from .files import analyze_file_changes
from .models import (
    AnalyticsData,
    AnalyticsFocus,
    CodeQualityAnalytics,
    CollaborationAnalytics,
    CommitAnalytics,
    FileChangeAnalytics,
    OutputFormat,
    ProductivityAnalytics,
)
from .productivity import analyze_productivity
from .quality import analyze_code_quality

__all__ = [
    "AnalyticsData",
    "AnalyticsEngine",
    "AnalyticsFocus",
    "CodeQualityAnalytics",
    "CollaborationAnalytics",
    "CommitAnalytics",
    "CommitCategory",
    "CommitClassifier",
    "FileChangeAnalytics",
    "KeywordClassifier",
    "OutputFormat",
    "ProductivityAnalytics",
    "RepositorySource",
    "analyze_code_quality",
    "analyze_collaboration",
    "analyze_commits",
    "analyze_file_changes",
    "analyze_productivity",
    "generate_analytics_data",
]
