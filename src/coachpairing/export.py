"""JSON and CSV export of a pairing session."""

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


import csv
import io
import json
from typing import List, TextIO

from coachpairing.constants import CSV_HEADER, UNPAIRED_MARKER
from coachpairing.session import PairingRecord, SessionHistoryEntry
from coachpairing.utils import maybe_str, slugify


def _csv_row(index: int, record: PairingRecord) -> List[str]:
    coach = record.coach
    row = [str(index), coach.name, maybe_str(coach.email), maybe_str(coach.location)]
    coachee = record.partner
    if coachee is None:
        row += [UNPAIRED_MARKER, "", ""]
    else:
        row += [coachee.name, maybe_str(coachee.email), maybe_str(coachee.location)]
    return row


def write_session_csv(entry: SessionHistoryEntry, stream: TextIO) -> None:
    """Write one row per pairing record to ``stream``.

    Open files with ``newline=""`` so the csv module controls line endings.
    """
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADER)
    for index, record in enumerate(entry.pairings, start=1):
        writer.writerow(_csv_row(index, record))


def session_to_csv(entry: SessionHistoryEntry) -> str:
    buffer = io.StringIO(newline="")
    write_session_csv(entry, buffer)
    return buffer.getvalue()


def session_to_json(entry: SessionHistoryEntry) -> str:
    return json.dumps(entry.to_dict(), indent=2)


def export_filename(entry: SessionHistoryEntry, extension: str) -> str:
    """Suggested file name, e.g. ``pairings-week-3-2026-10-17.csv``."""
    day = entry.created_at.date().isoformat()
    return f"pairings-{slugify(entry.name)}-{day}.{extension.lstrip('.')}"
