"""Searching, summarising and merging saved session history."""

# Coach Pairing
# Copyright (C) 2025  Coach Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Tuple, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from coachpairing.constants import DEFAULT_SEARCH_DAYS, MOST_FREQUENT_PAIRS_LIMIT
from coachpairing.exceptions import HistoryException
from coachpairing.session import SessionHistoryEntry
from coachpairing.utils import parse_datetime, setup_logger

logger = setup_logger(__name__)

DateLike = Union[str, date, datetime]


def _newest_first(entries: Iterable[SessionHistoryEntry]) -> List[SessionHistoryEntry]:
    return sorted(entries, key=lambda e: e.created_at, reverse=True)


def _has_time(value: DateLike) -> bool:
    """Whether ``value`` names a time of day, not just a calendar day."""
    if isinstance(value, datetime):
        return True
    if not isinstance(value, str):
        return False
    # a string without a time takes it from the default
    early = date_parser.parse(value, default=datetime(2000, 1, 1, 0, 0, 0))
    late = date_parser.parse(value, default=datetime(2000, 1, 1, 23, 59, 59))
    return early.time() == late.time()


def _day_bounds(start: DateLike, end: DateLike) -> Tuple[datetime, datetime]:
    try:
        start_moment = parse_datetime(start)
        end_moment = parse_datetime(end)
        end_has_time = _has_time(end)
    except (ValueError, OverflowError) as e:
        raise HistoryException(f"Could not read the date range: {e}") from e
    # a bare end day is included whole
    if not end_has_time:
        end_moment = datetime.combine(end_moment.date(), time.max, tzinfo=end_moment.tzinfo)
    return start_moment, end_moment


def search_history(
    entries: Iterable[SessionHistoryEntry],
    start: Optional[DateLike],
    end: Optional[DateLike],
) -> List[SessionHistoryEntry]:
    """Return the sessions created between ``start`` and ``end``.

    Parameters
    ----------
    entries : Iterable[SessionHistoryEntry]
        The saved sessions
    start, end : str | datetime.date | datetime.datetime
        Bounds of the range. Dates and date strings without a time cover
        whole days. Bounds with a time are used exactly.

    Returns
    -------
    List[SessionHistoryEntry]
        Matching sessions, newest first

    Raises
    ------
    HistoryException
        When a bound is missing or can not be parsed
    """
    if not start or not end:
        raise HistoryException("Please select both start and end dates")
    start_moment, end_moment = _day_bounds(start, end)
    if start_moment > end_moment:
        logger.warning("search range starts after it ends: %s > %s", start, end)
    results = [e for e in entries if start_moment <= e.created_at <= end_moment]
    return _newest_first(results)


def default_search_range(today: Optional[date] = None) -> Tuple[date, date]:
    """The last 30 days, ending today."""
    end = today or date.today()
    return end - relativedelta(days=DEFAULT_SEARCH_DAYS), end


@dataclass
class HistoryStatistics:
    """Summary of the saved sessions."""

    total_sessions: int = 0
    total_pairs: int = 0
    sessions_per_year: Dict[int, int] = field(default_factory=dict)
    most_frequent_pairs: Dict[str, int] = field(default_factory=dict)
    first_session: Optional[SessionHistoryEntry] = None
    last_session: Optional[SessionHistoryEntry] = None


def history_statistics(entries: Iterable[SessionHistoryEntry]) -> HistoryStatistics:
    """Count sessions and pairs, and find the most frequently repeated pairs."""
    stats = HistoryStatistics()
    pair_counts: Counter = Counter()

    for entry in entries:
        stats.total_sessions += 1
        year = entry.created_at.year
        stats.sessions_per_year[year] = stats.sessions_per_year.get(year, 0) + 1

        if stats.first_session is None or entry.created_at < stats.first_session.created_at:
            stats.first_session = entry
        if stats.last_session is None or entry.created_at > stats.last_session.created_at:
            stats.last_session = entry

        for record in entry.pairings:
            if record.is_unpaired:
                continue
            stats.total_pairs += 1
            names = sorted((record.coach.name, record.coachee.name))  # type: ignore[union-attr]
            pair_counts[" & ".join(names)] += 1

    stats.sessions_per_year = dict(sorted(stats.sessions_per_year.items()))
    stats.most_frequent_pairs = dict(pair_counts.most_common(MOST_FREQUENT_PAIRS_LIMIT))
    return stats


def _entry_key(entry: SessionHistoryEntry) -> Tuple[datetime, Tuple[Tuple[str, ...], ...]]:
    return entry.created_at, tuple(sorted(r.participant_ids() for r in entry.pairings))


def merge_histories(
    current: Iterable[SessionHistoryEntry], imported: Iterable[SessionHistoryEntry]
) -> List[SessionHistoryEntry]:
    """Combine two histories, dropping sessions that appear in both.

    Two sessions are the same when they were created at the same moment with
    the same pairs.
    """
    seen = set()
    merged: List[SessionHistoryEntry] = []
    duplicates = 0
    for entry in list(current) + list(imported):
        key = _entry_key(entry)
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        merged.append(entry)
    logger.info("merged histories: %d sessions, %d duplicates dropped", len(merged), duplicates)
    return _newest_first(merged)


#  LocalWords:  relativedelta
