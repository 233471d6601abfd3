"""Commit history input: records and the git collaborator that produces them."""

from .git_extractor import GitExtractor
from .models import Commit, parse_commit_date

__all__ = [
    "Commit",
    "GitExtractor",
    "parse_commit_date",
]
