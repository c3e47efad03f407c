"""Tests for the orchestration of storage and the pairing engine."""

import pytest

from coachpairing.constants import CATEGORY_COACH_ONLY, CATEGORY_COACHEE_ONLY
from coachpairing.exceptions import StorageException
from coachpairing.program import CoachingProgram
from coachpairing.session import PairingResult
from conftest import ZeroRandom, make_participant, make_session


@pytest.fixture
def program(storage):
    for participant in (
        make_participant("a", CATEGORY_COACH_ONLY, location="Leeds"),
        make_participant("b", CATEGORY_COACHEE_ONLY, location="York"),
        make_participant("c", location="Leeds"),
        make_participant("d", location="York", exclusions=["c"]),
    ):
        storage.save_participant(participant)
    return CoachingProgram(storage, rng=ZeroRandom())


def test_generate_uses_stored_settings(program):
    result = program.generate_pairings()
    # c and d exclude each other, so they cannot pair
    assert result.pair_count == 1
    assert result.warnings == ["2 participants could not be paired due to restrictions"]


def test_arguments_override_settings(program):
    result = program.generate_pairings(respect_exclusions=False)
    assert result.pair_count == 2
    assert result.warnings == []


def test_saved_sessions_feed_the_next_run(program, storage):
    first = program.generate_pairings(respect_exclusions=False)
    entry = program.save_session(first, "Week 1")

    assert entry.name == "Week 1"
    assert entry.participant_count == 4
    assert storage.get_pairing_history()[0].id == entry.id

    # the roster only allows the same pairs again, repeats are penalised not forbidden
    second = program.generate_pairings(respect_exclusions=False)
    assert second.pair_count == 2


def test_saving_nothing_is_an_error(program):
    with pytest.raises(StorageException):
        program.save_session(PairingResult())


def test_default_session_name(program):
    entry = program.save_session(program.generate_pairings(), name="  ")
    assert entry.name == "Pairing Session"


def test_statistics_and_search(program):
    program.save_session(program.generate_pairings(), "Week 1")
    stats = program.statistics()
    assert stats.total_sessions == 1
    assert stats.total_pairs == 1
    day = stats.last_session.created_at.astimezone().date()
    assert len(program.search_history(day, day)) == 1


def test_import_history_merges(program, storage):
    a, b = make_participant("a"), make_participant("b")
    imported = [make_session([(a, b)], name="old")]
    assert program.import_history(imported) == 1
    assert program.import_history(imported) == 0
    assert [s.name for s in storage.get_pairing_history()] == ["old"]
