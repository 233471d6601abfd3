"""Tests for snapshot serialization helpers."""

import json
from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from commit_pulse.analytics.models import (
    AnalyticsFocus,
    AuthorActivity,
    LargestCommit,
    WorkPatterns,
    camel_case,
    format_instant,
    frozen_mapping,
    to_json_value,
)


class TestCamelCase:
    """Test field name conversion."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("total_commits", "totalCommits"),
            ("commits_by_day", "commitsByDay"),
            ("files_changed", "filesChanged"),
            ("percentage", "percentage"),
        ],
    )
    def test_conversion(self, name, expected):
        assert camel_case(name) == expected


class TestFormatInstant:
    """Test ISO instant rendering."""

    def test_utc_with_milliseconds(self):
        moment = datetime(2024, 3, 15, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert format_instant(moment) == "2024-03-15T12:00:00.123Z"

    def test_offset_converted_to_utc(self):
        moment = datetime(2024, 3, 15, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_instant(moment) == "2024-03-15T12:00:00.000Z"

    def test_naive_treated_as_utc(self):
        assert format_instant(datetime(2024, 3, 15, 12, 0)) == "2024-03-15T12:00:00.000Z"


class TestToJsonValue:
    """Test the generic JSON walker."""

    def test_dataclass_keys_camel_cased(self):
        value = to_json_value(LargestCommit(hash="abc", files_changed=3, date="2024-03-04"))
        assert value == {"hash": "abc", "filesChanged": 3, "date": "2024-03-04"}

    def test_nested_collections(self):
        value = to_json_value(
            {
                "activity": (AuthorActivity(author="Alice", commits=2, percentage=100.0),),
                "patterns": WorkPatterns(morning=2),
            }
        )
        assert value == {
            "activity": [{"author": "Alice", "commits": 2, "percentage": 100.0}],
            "patterns": {"morning": 2, "afternoon": 0, "evening": 0, "night": 0},
        }

    def test_enum_to_value(self):
        assert to_json_value(AnalyticsFocus.QUALITY) == "quality"

    def test_mapping_proxy(self):
        assert json.dumps(to_json_value(frozen_mapping({"9:00": 1}))) == '{"9:00": 1}'


class TestImmutability:
    """Snapshot pieces cannot be mutated after construction."""

    def test_frozen_dataclass(self):
        commit = LargestCommit(hash="abc", files_changed=3, date="2024-03-04")
        with pytest.raises(FrozenInstanceError):
            commit.hash = "def"

    def test_frozen_mapping_is_a_copy(self):
        source = {"a": 1}
        view = frozen_mapping(source)
        source["a"] = 2
        assert view["a"] == 1
        with pytest.raises(TypeError):
            view["a"] = 3
