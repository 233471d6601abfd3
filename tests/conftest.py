"""Shared test fixtures for Commit Pulse tests."""

import logging
from datetime import datetime, timezone

import pytest

from commit_pulse.history.models import Commit


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def fixed_clock():
    """Clock that always reports 2024-03-15T12:00:00Z."""
    moment = datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def team_history():
    """Two weeks of activity from three authors with a mix of commit types."""
    return [
        Commit(
            hash="a1" * 20,
            date="2024-03-04T09:15:00Z",
            message="feat: add login form",
            author="Alice <alice@example.com>",
            files=("src/login.ts", "src/login.css"),
        ),
        Commit(
            hash="b2" * 20,
            date="2024-03-04T14:30:00Z",
            message="fix bug in session refresh",
            author="Bob <bob@example.com>",
            files=("src/session.ts",),
        ),
        Commit(
            hash="c3" * 20,
            date="2024-03-05T10:00:00Z",
            message="refactor auth helpers",
            author="Alice <alice@example.com>",
            files=("src/auth.ts", "src/legacy/auth.js"),
        ),
        Commit(
            hash="d4" * 20,
            date="2024-03-06T19:45:00Z",
            message="Merge branch 'feature/login' into main",
            author="Carol <carol@example.com>",
            files=(),
        ),
        Commit(
            hash="e5" * 20,
            date="2024-03-11T23:10:00Z",
            message="skip flaky test while CI is down",
            author="Bob <bob@example.com>",
            files=("tests/session.test.ts",),
        ),
        Commit(
            hash="f6" * 20,
            date="2024-03-12T08:00:00Z",
            message="Update README",
            author="Alice <alice@example.com>",
            files=("README.md",),
        ),
    ]


@pytest.fixture
def clean_logging():
    """Detach handlers that setup_logging installs, restoring the logger level."""
    logger = logging.getLogger("commit_pulse")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
