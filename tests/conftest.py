"""Shared fixtures for the Coach Pairing tests."""

from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

import pytest

from coachpairing.constants import CATEGORY_BOTH, UNPAIRED_MARKER
from coachpairing.participant import Participant
from coachpairing.session import PairingRecord, SessionHistoryEntry
from coachpairing.storage import DataStorage


class ZeroRandom:
    """Random source whose tie-break term is always 0."""

    def random(self) -> float:
        return 0.0


@pytest.fixture
def zero_rng() -> ZeroRandom:
    return ZeroRandom()


def make_participant(
    pid: str,
    category: str = CATEGORY_BOTH,
    location: Optional[str] = None,
    exclusions: Iterable[str] = (),
    email: Optional[str] = None,
) -> Participant:
    return Participant(
        name=pid.upper(),
        email=email,
        location=location,
        category=category,
        exclusions=exclusions,
        id=pid,
    )


def make_session(
    pairs: Iterable[Tuple[Participant, Optional[Participant]]],
    created_at: Optional[datetime] = None,
    name: str = "Session",
) -> SessionHistoryEntry:
    """Session with ``(coach, coachee)`` pairs; a None coachee is unpaired."""
    records = [
        PairingRecord(coach=coach, coachee=coachee if coachee is not None else UNPAIRED_MARKER)
        for coach, coachee in pairs
    ]
    return SessionHistoryEntry.create(
        records,
        name=name,
        created_at=created_at or datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def participant_factory():
    return make_participant


@pytest.fixture
def session_factory():
    return make_session


@pytest.fixture
def storage(tmp_path) -> DataStorage:
    return DataStorage(str(tmp_path / "data.json"))
