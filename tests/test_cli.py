"""Tests for the coach-pairing command line."""

import csv
import json

import pytest

from coachpairing.__main__ import run


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / "data.json")


def cli(data_file, *args):
    return run(["--data-file", data_file, *args])


def add(data_file, capsys, *args):
    assert cli(data_file, "add", *args) == 0
    return capsys.readouterr().out.strip()


def test_add_and_list(data_file, capsys):
    ada = add(data_file, capsys, "Ada", "--location", "Leeds", "--category", "Coach Only")
    add(data_file, capsys, "Bob", "--exclude", ada)

    assert cli(data_file, "list") == 0
    out = capsys.readouterr().out
    assert "Ada" in out and "[Coach Only]" in out
    assert "excludes: Ada" in out
    assert "2 participants" in out


def test_invalid_participant_reports_error(data_file, capsys):
    assert cli(data_file, "add", "Ada", "--email", "nope") == 1
    assert "error:" in capsys.readouterr().err


def test_pair_save_and_export(data_file, capsys, tmp_path):
    for name in ("Ada", "Bob", "Cy"):
        add(data_file, capsys, name)

    assert cli(data_file, "pair", "--name", "Week 1", "--save", "--seed", "4") == 0
    out = capsys.readouterr().out
    assert out.startswith("Week 1")
    assert "Unpaired:" in out
    assert "could not be paired and will work alone" in out
    assert "saved session" in out

    output = tmp_path / "week1.csv"
    assert cli(data_file, "export", "--format", "csv", "--output", str(output)) == 0
    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0][1] == "Coach"
    assert len(rows) == 3

    assert cli(data_file, "history") == 0
    assert "Found 1 session" in capsys.readouterr().out

    assert cli(data_file, "stats") == 0
    assert "Sessions: 1" in capsys.readouterr().out


def test_export_without_sessions(data_file, capsys):
    assert cli(data_file, "export") == 1
    assert "No saved session" in capsys.readouterr().err


def test_import_history(data_file, capsys, tmp_path):
    for name in ("Ada", "Bob"):
        add(data_file, capsys, name)
    cli(data_file, "pair", "--save")
    capsys.readouterr()

    exported = tmp_path / "export.json"
    assert cli(data_file, "export", "--output", str(exported)) == 0
    session = json.loads(exported.read_text(encoding="utf-8"))

    other = str(tmp_path / "other.json")
    history_file = tmp_path / "history.json"
    history_file.write_text(json.dumps([session]), encoding="utf-8")
    assert cli(other, "import-history", str(history_file)) == 0
    assert "imported 1 new session" in capsys.readouterr().out


def test_settings(data_file, capsys):
    assert cli(data_file, "settings", "--location", "Same", "--ignore-exclusions") == 0
    out = capsys.readouterr().out
    assert "location_preference: Same" in out
    assert "respect_exclusions: False" in out


def test_remove_unknown_participant(data_file, capsys):
    assert cli(data_file, "remove", "ghost") == 1
    assert "No participant with id ghost" in capsys.readouterr().err


@pytest.mark.parametrize(
    "content",
    [
        [{"name": "x", "pairings": []}],
        ["not a session"],
        [{"created_at": 5}],
        {"pairings_history": {"x": 1}},
    ],
)
def test_malformed_history_import_reports_error(data_file, capsys, tmp_path, content):
    history_file = tmp_path / "history.json"
    history_file.write_text(json.dumps(content), encoding="utf-8")

    assert cli(data_file, "import-history", str(history_file)) == 1
    assert "error:" in capsys.readouterr().err


def test_unreadable_data_file_is_kept(data_file, capsys):
    with open(data_file, "w", encoding="utf-8") as f:
        f.write('{"participants": {"x": 1}}')

    assert cli(data_file, "list") == 0
    assert "0 participants" in capsys.readouterr().out
    with open(data_file + ".corrupt", encoding="utf-8") as f:
        assert f.read() == '{"participants": {"x": 1}}'
