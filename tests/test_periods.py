"""Tests for period descriptor resolution."""

from datetime import date

import pytest

from commit_pulse.exceptions import InvalidPeriodError
from commit_pulse.periods import days_between, resolve_date

TODAY = date(2024, 3, 15)


class TestResolveDate:
    """Test resolve_date."""

    @pytest.mark.parametrize("descriptor", [None, "", "   "])
    def test_all_history(self, descriptor):
        assert resolve_date(descriptor, TODAY) is None

    def test_today_and_yesterday(self):
        assert resolve_date("today", TODAY) == "2024-03-15"
        assert resolve_date("Yesterday", TODAY) == "2024-03-14"

    @pytest.mark.parametrize(
        "descriptor,expected",
        [
            ("7d", "2024-03-08"),
            ("2w", "2024-03-01"),
            ("1m", "2024-02-14"),
            ("1y", "2023-03-16"),
        ],
    )
    def test_relative(self, descriptor, expected):
        assert resolve_date(descriptor, TODAY) == expected

    def test_absolute(self):
        assert resolve_date("2025-01-31", TODAY) == "2025-01-31"

    @pytest.mark.parametrize("descriptor", ["last week", "7x", "2025-02-30", "31/01/2025"])
    def test_invalid(self, descriptor):
        with pytest.raises(InvalidPeriodError) as exc_info:
            resolve_date(descriptor, TODAY, field_name="until")
        assert exc_info.value.field_name == "until"
        assert descriptor in str(exc_info.value)


class TestDaysBetween:
    """Test days_between."""

    def test_whole_days(self):
        assert days_between("2024-03-01", "2024-03-08") == 7

    def test_rounds_up(self):
        assert days_between("2024-03-01T00:00:00", "2024-03-02T06:00:00") == 2

    def test_same_day(self):
        assert days_between("2024-03-01", "2024-03-01") == 0

    @pytest.mark.parametrize(
        "since,until",
        [(None, "2024-03-08"), ("2024-03-01", None), (None, None), ("today", "2024-03-08")],
    )
    def test_missing_or_unparsable_is_zero(self, since, until):
        assert days_between(since, until) == 0
