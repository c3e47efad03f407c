"""Tests for history search, statistics and merging."""

from datetime import date, datetime

import pytest
from dateutil import tz

from coachpairing.exceptions import HistoryException
from coachpairing.history import (
    default_search_range,
    history_statistics,
    merge_histories,
    search_history,
)
from conftest import make_participant, make_session

LOCAL = tz.tzlocal()
A, B, C, D = (make_participant(pid) for pid in "abcd")


def at(year, month, day, hour=12):
    return datetime(year, month, day, hour, 0, tzinfo=LOCAL)


@pytest.fixture
def history():
    return [
        make_session([(A, B), (C, D)], at(2025, 12, 30), "new year"),
        make_session([(A, C), (B, None)], at(2026, 3, 10, 23), "march"),
        make_session([(A, B)], at(2026, 3, 12), "later"),
    ]


def test_search_includes_whole_end_day(history):
    results = search_history(history, date(2026, 3, 1), date(2026, 3, 10))
    assert [e.name for e in results] == ["march"]


def test_search_accepts_strings_and_sorts_newest_first(history):
    results = search_history(history, "2025-12-01", "2026-03-31")
    assert [e.name for e in results] == ["later", "march", "new year"]


@pytest.mark.parametrize(
    "end, expected",
    [
        ("2026-03-10", ["march", "new year"]),
        ("2026-03-10T12:00", ["new year"]),
        (at(2026, 3, 10, 12), ["new year"]),
    ],
)
def test_end_with_a_time_is_not_widened(history, end, expected):
    results = search_history(history, "2025-12-01", end)
    assert [e.name for e in results] == expected


@pytest.mark.parametrize("start, end", [(None, "2026-01-01"), ("2026-01-01", ""), (None, None)])
def test_search_requires_both_dates(history, start, end):
    with pytest.raises(HistoryException, match="Please select both start and end dates"):
        search_history(history, start, end)


def test_search_rejects_garbage(history):
    with pytest.raises(HistoryException):
        search_history(history, "someday", "2026-01-01")


def test_default_search_range_is_thirty_days():
    start, end = default_search_range(date(2026, 3, 31))
    assert end == date(2026, 3, 31)
    assert start == date(2026, 3, 1)


def test_statistics(history):
    stats = history_statistics(history)
    assert stats.total_sessions == 3
    assert stats.total_pairs == 4
    assert stats.sessions_per_year == {2025: 1, 2026: 2}
    assert stats.first_session.name == "new year"
    assert stats.last_session.name == "later"
    assert list(stats.most_frequent_pairs.items())[0] == ("A & B", 2)


def test_statistics_of_empty_history():
    stats = history_statistics([])
    assert stats.total_sessions == 0
    assert stats.first_session is None
    assert stats.most_frequent_pairs == {}


def test_merge_drops_duplicates(history):
    imported = [history[0], make_session([(D, A)], at(2026, 4, 1), "april")]
    merged = merge_histories(history, imported)
    assert [e.name for e in merged] == ["april", "later", "march", "new year"]
