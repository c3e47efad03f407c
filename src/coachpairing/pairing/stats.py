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

"""
Pairing Statistics

Derives, from the saved session history, everything the pairing engine needs
to know about the past:

- how many times each unordered pair has been paired (``pair_counts``)
- when each pair was last paired (``last_pairing_date``)
- which roles each participant held against each partner (``role_history``)

Statistics are a pure function of the history. They are rebuilt for every
pairing run and handed out as read-only mappings.

Example:
    >>> stats = compute_stats(storage.get_pairing_history())
    >>> stats.pair_count("alice", "bob")
    2
"""

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Set

from coachpairing.constants import PAIR_KEY_SEPARATOR, ROLE_COACH, ROLE_COACHEE
from coachpairing.session import SessionHistoryEntry
from coachpairing.type_hints import PairKey, PartnerRoles, Role, RoleHistory
from coachpairing.utils import setup_logger

logger = setup_logger(__name__)

_EMPTY_ROLES: Mapping[str, frozenset] = MappingProxyType({})


def canonical_key(id1: str, id2: str) -> PairKey:
    """Order independent key for the pair of participants ``id1`` and ``id2``.

    Generated ids contain underscores, so the ids are joined with a separator
    they can not contain. ``("a_b", "c")`` and ``("a", "b_c")`` stay apart.
    """
    return PAIR_KEY_SEPARATOR.join(sorted((id1, id2)))


@dataclass(frozen=True)
class PairingStats:
    """Read-only statistics derived from pairing history.

    Attributes:
        pair_counts: pair key -> number of earlier sessions pairing them
        last_pairing_date: pair key -> time of the most recent such session
        role_history: participant id -> partner id -> roles held against that partner
    """

    pair_counts: Mapping[PairKey, int]
    last_pairing_date: Mapping[PairKey, datetime]
    role_history: RoleHistory

    @classmethod
    def empty(cls) -> "PairingStats":
        return cls(MappingProxyType({}), MappingProxyType({}), MappingProxyType({}))

    def pair_count(self, id1: str, id2: str) -> int:
        return self.pair_counts.get(canonical_key(id1, id2), 0)

    def roles_with(self, participant_id: str) -> PartnerRoles:
        """Roles ``participant_id`` held, keyed by partner id."""
        return self.role_history.get(participant_id, _EMPTY_ROLES)


def _record_role(
    role_history: Dict[str, Dict[str, Set[Role]]],
    person_id: str,
    partner_id: str,
    role: Role,
) -> None:
    role_history.setdefault(person_id, {}).setdefault(partner_id, set()).add(role)


def compute_stats(history: Iterable[SessionHistoryEntry]) -> PairingStats:
    """Derive pairing statistics from session history.

    Parameters
    ----------
    history : Iterable[SessionHistoryEntry]
        Saved sessions, in any order

    Returns
    -------
    PairingStats
        Fresh, read-only statistics; empty when there is no history
    """
    pair_counts: Dict[PairKey, int] = {}
    last_pairing_date: Dict[PairKey, datetime] = {}
    role_history: Dict[str, Dict[str, Set[Role]]] = {}

    sessions = 0
    for session in history:
        sessions += 1
        for pairing in session.pairings:
            if pairing.is_unpaired:
                continue
            coach_id = pairing.coach.id
            coachee_id = pairing.coachee.id  # type: ignore[union-attr]
            key = canonical_key(coach_id, coachee_id)

            pair_counts[key] = pair_counts.get(key, 0) + 1

            current = last_pairing_date.get(key)
            if current is None or session.created_at > current:
                last_pairing_date[key] = session.created_at

            _record_role(role_history, coach_id, coachee_id, ROLE_COACH)
            _record_role(role_history, coachee_id, coach_id, ROLE_COACHEE)

    logger.debug(
        "computed stats from %d sessions: %d distinct pairs", sessions, len(pair_counts)
    )
    frozen_roles = {
        person_id: MappingProxyType(
            {partner_id: frozenset(roles) for partner_id, roles in partners.items()}
        )
        for person_id, partners in role_history.items()
    }
    return PairingStats(
        pair_counts=MappingProxyType(pair_counts),
        last_pairing_date=MappingProxyType(last_pairing_date),
        role_history=MappingProxyType(frozen_roles),
    )


def coach_count(stats: PairingStats, participant_id: str) -> int:
    """Number of partners ``participant_id`` has coached at least once."""
    return sum(1 for roles in stats.roles_with(participant_id).values() if ROLE_COACH in roles)


#  LocalWords:  coachee
