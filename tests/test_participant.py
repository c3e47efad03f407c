"""Tests for participant validation and serialization."""

import pytest

from coachpairing.constants import CATEGORY_BOTH, CATEGORY_COACHEE_ONLY
from coachpairing.exceptions import ParticipantException
from coachpairing.participant import Participant


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_name_rejected(name):
    with pytest.raises(ParticipantException, match="Please enter a name"):
        Participant(name)


def test_invalid_email_rejected():
    with pytest.raises(ParticipantException):
        Participant("Ada", email="not-an-email")


def test_unknown_category_rejected():
    with pytest.raises(ParticipantException):
        Participant("Ada", category="Mentor")  # type: ignore[arg-type]


def test_defaults_and_cleanup():
    p = Participant("  Ada  ", email="", location="  ")
    assert p.name == "Ada"
    assert p.email is None
    assert p.location is None
    assert p.category == CATEGORY_BOTH
    assert p.exclusions == frozenset()
    assert p.id.startswith("Participant")


def test_self_exclusion_is_dropped():
    p = Participant("Ada", id="ada", exclusions=["ada", "bob"])
    assert p.exclusions == frozenset({"bob"})


def test_exclusion_works_from_either_side():
    ada = Participant("Ada", id="ada", exclusions=["bob"])
    bob = Participant("Bob", id="bob")
    assert ada.excludes(bob)
    assert bob.excludes(ada)


def test_dict_round_trip():
    p = Participant(
        "Grace",
        email="grace@example.org",
        location="Leeds",
        category=CATEGORY_COACHEE_ONLY,
        exclusions=["z", "a"],
        id="grace",
    )
    data = p.to_dict()
    assert data["exclusions"] == ["a", "z"]

    restored = Participant.from_dict(data)
    assert restored.to_dict() == data
