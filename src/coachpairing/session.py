"""Pairing records, pairing results and session history entries."""

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


from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from coachpairing.constants import (
    DEFAULT_SESSION_NAME,
    LOCATION_IGNORE,
    UNPAIRED_MARKER,
)
from coachpairing.participant import Participant
from coachpairing.type_hints import LocationPreference, MaybeCoachee
from coachpairing.utils import generate_id, parse_datetime, to_iso, utc_now


@dataclass(frozen=True, slots=True)
class PairingRecord:
    """One coach and their coachee, or a coach left to work alone."""

    coach: Participant
    coachee: MaybeCoachee

    @property
    def is_unpaired(self) -> bool:
        return isinstance(self.coachee, str) and self.coachee == UNPAIRED_MARKER

    @property
    def partner(self) -> Optional[Participant]:
        """The coachee, or None for an unpaired record."""
        return None if self.is_unpaired else self.coachee  # type: ignore[return-value]

    def participant_ids(self) -> Tuple[str, ...]:
        if self.is_unpaired:
            return (self.coach.id,)
        return (self.coach.id, self.coachee.id)  # type: ignore[union-attr]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coach": self.coach.to_dict(),
            "coachee": (
                UNPAIRED_MARKER if self.is_unpaired else self.coachee.to_dict()  # type: ignore[union-attr]
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingRecord":
        coachee_data = data.get("coachee")
        if not coachee_data or coachee_data == UNPAIRED_MARKER:
            coachee: MaybeCoachee = UNPAIRED_MARKER
        else:
            coachee = Participant.from_dict(coachee_data)
        return cls(coach=Participant.from_dict(data["coach"]), coachee=coachee)


@dataclass(slots=True)
class PairingResult:
    """Result of a pairing run: the pairings and any warnings for display."""

    pairings: List[PairingRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def pair_count(self) -> int:
        """Number of real pairs, unpaired records excluded."""
        return sum(1 for record in self.pairings if not record.is_unpaired)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pairings": [record.to_dict() for record in self.pairings],
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True, slots=True)
class SessionHistoryEntry:
    """A saved round of pairings.

    Entries are never edited once created; the history they belong to only
    grows, newest entry first.
    """

    name: str
    created_at: datetime
    pairings: Tuple[PairingRecord, ...]
    location_preference: LocationPreference = LOCATION_IGNORE
    participant_count: int = 0
    id: str = field(default_factory=lambda: generate_id("Session"))

    @classmethod
    def create(
        cls,
        pairings: List[PairingRecord],
        name: Optional[str] = None,
        location_preference: LocationPreference = LOCATION_IGNORE,
        participant_count: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> "SessionHistoryEntry":
        """Build a new entry stamped with the current time."""
        if participant_count is None:
            participant_count = sum(len(r.participant_ids()) for r in pairings)
        return cls(
            name=(name or "").strip() or DEFAULT_SESSION_NAME,
            created_at=created_at or utc_now(),
            pairings=tuple(pairings),
            location_preference=location_preference,
            participant_count=participant_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the entry to a dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "created_at": to_iso(self.created_at),
            "pairings": [record.to_dict() for record in self.pairings],
            "location_preference": self.location_preference,
            "participant_count": self.participant_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionHistoryEntry":
        """Deserialize an entry written by ``to_dict``."""
        return cls(
            id=data.get("id") or generate_id("Session"),
            name=data.get("name") or DEFAULT_SESSION_NAME,
            created_at=parse_datetime(data["created_at"]),
            pairings=tuple(PairingRecord.from_dict(p) for p in data.get("pairings", [])),
            location_preference=data.get("location_preference", LOCATION_IGNORE),
            participant_count=int(data.get("participant_count", 0)),
        )


#  LocalWords:  coachee
