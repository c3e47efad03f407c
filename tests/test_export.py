"""Tests for session export."""

import csv
import io
import json
from datetime import datetime, timezone

from coachpairing.constants import CSV_HEADER
from coachpairing.export import export_filename, session_to_csv, session_to_json
from coachpairing.session import SessionHistoryEntry
from conftest import make_participant, make_session


def sample_session():
    coach = make_participant("ada", location="Leeds", email="ada@example.org")
    coachee = make_participant("bob", location="York")
    alone = make_participant("cy")
    return make_session(
        [(coach, coachee), (alone, None)],
        datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc),
        name="Week 3",
    )


def test_csv_rows():
    rows = list(csv.reader(io.StringIO(session_to_csv(sample_session()))))
    assert rows[0] == CSV_HEADER
    assert rows[1] == ["1", "ADA", "ada@example.org", "Leeds", "BOB", "", "York"]
    assert rows[2] == ["2", "CY", "", "", "UNPAIRED", "", ""]


def test_json_is_flat_and_reloadable():
    session = sample_session()
    data = json.loads(session_to_json(session))
    assert data["name"] == "Week 3"
    assert data["pairings"][1]["coachee"] == "UNPAIRED"
    assert data["pairings"][0]["coachee"]["id"] == "bob"

    restored = SessionHistoryEntry.from_dict(data)
    assert restored.created_at == session.created_at
    assert restored.pairings[1].is_unpaired


def test_export_filename():
    assert export_filename(sample_session(), "csv") == "pairings-week-3-2026-10-17.csv"
    assert export_filename(sample_session(), ".json").endswith(".json")
