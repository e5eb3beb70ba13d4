"""Tests for the filter/sort query engine."""

from __future__ import annotations

import pytest

from apps.log_journal.models.log_models import LogFilterCriteria
from apps.log_journal.services.entry_validator import validate_entry
from apps.log_journal.services.query_engine import (
    InvalidQueryError,
    compile_criteria,
    query_logs,
)


@pytest.fixture
def entries(make_entry):
    raw = [
        make_entry(level="error", resourceId="a", message="Database connection failed",
                   timestamp="2023-09-15T08:00:00Z", traceId="t1", spanId="s1", commit="c1"),
        make_entry(level="warn", resourceId="a", message="High memory usage",
                   timestamp="2023-09-15T09:00:00Z", traceId="t1", spanId="s2", commit="c1"),
        make_entry(level="info", resourceId="b", message="User login",
                   timestamp="2023-09-15T10:00:00Z", traceId="t2", spanId="s3", commit="c2"),
    ]
    return [validate_entry(e) for e in raw]


def _messages(results):
    return [e.message for e in results]


class TestFilters:
    def test_no_criteria_matches_everything(self, entries) -> None:
        assert len(query_logs(entries, LogFilterCriteria())) == 3

    def test_and_semantics(self, entries) -> None:
        both = query_logs(entries, LogFilterCriteria(level="error", resourceId="a"))
        assert _messages(both) == ["Database connection failed"]

        by_resource = query_logs(entries, LogFilterCriteria(resourceId="a"))
        assert set(_messages(by_resource)) == {"Database connection failed", "High memory usage"}

    def test_message_is_case_insensitive_substring(self, entries) -> None:
        results = query_logs(entries, LogFilterCriteria(message="DATABASE"))
        assert _messages(results) == ["Database connection failed"]

    @pytest.mark.parametrize(
        "field,value,expected",
        [
            ("traceId", "t1", 2),
            ("spanId", "s3", 1),
            ("commit", "c2", 1),
            ("resourceId", "A", 0),  # exact, case-sensitive
            ("traceId", "t", 0),     # no substring matching
        ],
    )
    def test_exact_match_fields(self, entries, field, value, expected) -> None:
        assert len(query_logs(entries, LogFilterCriteria(**{field: value}))) == expected

    def test_unknown_level_matches_nothing(self, entries) -> None:
        assert query_logs(entries, LogFilterCriteria(level="fatal")) == []

    def test_empty_strings_are_ignored(self, entries) -> None:
        criteria = LogFilterCriteria(level="", message="", timestamp_start="", timestamp_end="")
        assert len(query_logs(entries, criteria)) == 3


class TestTimeRange:
    def test_bounds_are_inclusive(self, entries) -> None:
        criteria = LogFilterCriteria(
            timestamp_start="2023-09-15T08:00:00Z",
            timestamp_end="2023-09-15T09:00:00Z",
        )
        assert _messages(query_logs(entries, criteria)) == ["High memory usage", "Database connection failed"]

    def test_strictly_outside_excluded(self, entries) -> None:
        criteria = LogFilterCriteria(
            timestamp_start="2023-09-15T08:00:00.001Z",
            timestamp_end="2023-09-15T09:59:59.999Z",
        )
        assert _messages(query_logs(entries, criteria)) == ["High memory usage"]

    def test_bounds_compare_as_instants(self, entries) -> None:
        # 11:00+02:00 == 09:00Z
        criteria = LogFilterCriteria(timestamp_start="2023-09-15T11:00:00+02:00")
        assert set(_messages(query_logs(entries, criteria))) == {"High memory usage", "User login"}

    def test_inverted_range_matches_nothing(self, entries) -> None:
        criteria = LogFilterCriteria(
            timestamp_start="2023-09-15T10:00:00Z",
            timestamp_end="2023-09-15T08:00:00Z",
        )
        assert query_logs(entries, criteria) == []

    def test_unparsable_bounds_rejected(self, entries) -> None:
        criteria = LogFilterCriteria(timestamp_start="soon", timestamp_end="later")
        with pytest.raises(InvalidQueryError) as exc_info:
            query_logs(entries, criteria)
        assert len(exc_info.value.reasons) == 2
        assert exc_info.value.reasons[0].startswith("timestamp_start:")

    def test_compile_rejects_without_entries(self) -> None:
        with pytest.raises(InvalidQueryError):
            compile_criteria(LogFilterCriteria(timestamp_end="not-a-date"))


class TestOrdering:
    def test_newest_first(self, entries) -> None:
        results = query_logs(entries, LogFilterCriteria())
        assert [e.timestamp for e in results] == [
            "2023-09-15T10:00:00Z",
            "2023-09-15T09:00:00Z",
            "2023-09-15T08:00:00Z",
        ]

    def test_orders_by_instant_not_string(self, make_entry) -> None:
        later = validate_entry(make_entry(message="later", timestamp="2023-09-15T09:30:00+00:00"))
        earlier = validate_entry(make_entry(message="earlier", timestamp="2023-09-15T10:00:00+02:00"))
        assert _messages(query_logs([earlier, later], LogFilterCriteria())) == ["later", "earlier"]

    def test_ties_keep_store_order(self, make_entry) -> None:
        same = "2023-09-15T08:00:00Z"
        batch = [validate_entry(make_entry(message=f"m{i}", timestamp=same)) for i in range(4)]
        assert _messages(query_logs(batch, LogFilterCriteria())) == ["m0", "m1", "m2", "m3"]

    def test_input_not_mutated(self, entries) -> None:
        before = list(entries)
        query_logs(entries, LogFilterCriteria(level="error"))
        assert entries == before
