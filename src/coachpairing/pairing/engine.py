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
Coach/Coachee Pairing Engine

Greedy pairing of a roster into coach/coachee pairs for one session.

Pairing runs in two phases:
- Phase 1 pairs "Coach Only" participants with "Coachee Only" participants.
- Phase 2 repeatedly commits the best scoring pair among everyone left.

Scores favour pairs that have not met before, the requested location
preference, and pairs whose roles can be swapped from last time. A small
random term breaks ties; pass a seeded ``random.Random`` (or any object with a
``random()`` method) for reproducible results.

Example:
    >>> engine = PairingEngine(participants, compute_stats(history))
    >>> result = engine.generate_pairings("Same", respect_exclusions=True)
    >>> result.warnings
    []
"""

import math
import random
from typing import List, Optional, Protocol, Sequence, Tuple

from coachpairing.constants import (
    LOCATION_BONUS,
    LOCATION_DIFFERENT,
    LOCATION_IGNORE,
    LOCATION_PREFERENCES,
    LOCATION_SAME,
    MIN_PARTICIPANTS,
    REPEAT_PENALTY,
    ROLE_COACHEE,
    ROLE_REVERSAL_BONUS,
    TIE_BREAK_RANGE,
    UNPAIRED_MARKER,
)
from coachpairing.exceptions import PairingException
from coachpairing.pairing.stats import PairingStats, coach_count
from coachpairing.participant import Participant
from coachpairing.session import PairingRecord, PairingResult
from coachpairing.type_hints import LocationPreference
from coachpairing.utils import setup_logger

logger = setup_logger(__name__)

# Candidate pair found by a scan of the remaining participants
Candidate = Tuple[Participant, Participant]


class RandomSource(Protocol):
    def random(self) -> float: ...


class PairingEngine:
    """Pairs a roster for one session using statistics from earlier sessions.

    The engine keeps no state between calls and never modifies the roster or
    the statistics it was given.

    Attributes:
        participants: The roster, in the order it was supplied
        stats: Statistics derived from the pairing history
        rng: Source of the tie-break term
    """

    def __init__(
        self,
        participants: Sequence[Participant],
        stats: PairingStats,
        rng: Optional[RandomSource] = None,
    ) -> None:
        if participants is None or stats is None:
            raise PairingException("PairingEngine needs a roster and pairing stats")
        self.participants: Tuple[Participant, ...] = tuple(participants)
        self.stats = stats
        self.rng: RandomSource = rng if rng is not None else random.Random()

    def generate_pairings(
        self,
        location_preference: LocationPreference = LOCATION_IGNORE,
        respect_exclusions: bool = True,
    ) -> PairingResult:
        """Generate the pairings for one session.

        Parameters
        ----------
        location_preference : {"Ignore", "Same", "Different"}
            How participant locations should influence phase 2
        respect_exclusions : bool
            Never pair two participants when either one excludes the other

        Returns
        -------
        PairingResult
            The pairings and warnings to show the organiser

        Raises
        ------
        PairingException
            When ``location_preference`` is not a known preference
        """
        if location_preference not in LOCATION_PREFERENCES:
            raise PairingException(
                f"Unknown location preference {location_preference!r}, "
                f"expected one of {', '.join(LOCATION_PREFERENCES)}"
            )
        result = PairingResult()
        if len(self.participants) < MIN_PARTICIPANTS:
            result.warnings.append("Need at least 2 participants to generate pairings")
            return result

        available: List[Participant] = list(self.participants)
        self._pair_restricted_participants(available, result, respect_exclusions)
        self._pair_remaining_participants(
            available, result, location_preference, respect_exclusions
        )
        logger.info(
            "generated %d pairs for %d participants with %d warnings",
            result.pair_count,
            len(self.participants),
            len(result.warnings),
        )
        return result

    # --- Phase 1 ---
    def _pair_restricted_participants(
        self,
        available: List[Participant],
        result: PairingResult,
        respect_exclusions: bool,
    ) -> None:
        """Pair "Coach Only" participants with "Coachee Only" participants.

        Notes
        -----
        "Both" participants are left for phase 2. Coaches are visited last to
        first and candidates are scored as if locations should differ.
        """
        coaches = [p for p in available if p.is_coach_only]
        coachees = [p for p in available if p.is_coachee_only]

        for coach in reversed(coaches):
            best_coachee: Optional[Participant] = None
            best_score = -math.inf

            for coachee in reversed(coachees):
                if respect_exclusions and self.is_excluded(coach, coachee):
                    continue
                score = self.score(coach, coachee, LOCATION_DIFFERENT)
                if score > best_score:
                    best_score = score
                    best_coachee = coachee

            if best_coachee is not None:
                result.pairings.append(PairingRecord(coach=coach, coachee=best_coachee))
                available.remove(coach)
                available.remove(best_coachee)
                coachees.remove(best_coachee)
                logger.debug("phase 1 paired %s -> %s", coach.name, best_coachee.name)
            elif not coachees:
                result.warnings.append(
                    f"No available coachees for coach-only participant: {coach.name}"
                )

    # --- Phase 2 ---
    def _pair_remaining_participants(
        self,
        available: List[Participant],
        result: PairingResult,
        location_preference: LocationPreference,
        respect_exclusions: bool,
    ) -> None:
        while len(available) >= MIN_PARTICIPANTS:
            best = self._find_best_pair(
                available, location_preference, respect_exclusions, compatible_only=True
            )
            if best is None:
                # only same-restriction pairs are left, e.g. two "Coach Only"
                best = self._find_best_pair(
                    available, location_preference, respect_exclusions, compatible_only=False
                )
                if best is None:
                    break
                person1, person2 = best
                result.warnings.append(
                    f"{person1.name} and {person2.name} share the "
                    f"'{person1.category}' category; roles were assigned anyway"
                )

            person1, person2 = best
            coach = self.determine_coach(person1, person2)
            coachee = person2 if coach is person1 else person1
            result.pairings.append(PairingRecord(coach=coach, coachee=coachee))
            available.remove(person1)
            available.remove(person2)
            logger.debug("phase 2 paired %s -> %s", coach.name, coachee.name)

        if len(available) == 1:
            alone = available[0]
            result.pairings.append(PairingRecord(coach=alone, coachee=UNPAIRED_MARKER))
            result.warnings.append(f"{alone.name} could not be paired and will work alone")
        elif len(available) > 1:
            logger.warning(
                "exclusions left %s unpaired", ", ".join(p.name for p in available)
            )
            result.warnings.append(
                f"{len(available)} participants could not be paired due to restrictions"
            )

    def _find_best_pair(
        self,
        available: Sequence[Participant],
        location_preference: LocationPreference,
        respect_exclusions: bool,
        compatible_only: bool,
    ) -> Optional[Candidate]:
        best_pair: Optional[Candidate] = None
        best_score = -math.inf
        for i, person1 in enumerate(available):
            for person2 in available[i + 1 :]:
                if respect_exclusions and self.is_excluded(person1, person2):
                    continue
                if compatible_only and not self.roles_compatible(person1, person2):
                    continue
                score = self.score(person1, person2, location_preference)
                if score > best_score:
                    best_score = score
                    best_pair = (person1, person2)
        return best_pair

    # --- Scoring ---
    def score(
        self,
        person1: Participant,
        person2: Participant,
        location_preference: LocationPreference,
    ) -> float:
        """Score a candidate pair, higher is better.

        Every earlier pairing costs 100 points, which outweighs the location
        bonus (50), the role reversal bonus (25) and the tie-break term
        (below 10) together.
        """
        score: float = -REPEAT_PENALTY * self.stats.pair_count(person1.id, person2.id)

        if location_preference != LOCATION_IGNORE and person1.location and person2.location:
            same_location = person1.location == person2.location
            if location_preference == LOCATION_SAME and same_location:
                score += LOCATION_BONUS
            elif location_preference == LOCATION_DIFFERENT and not same_location:
                score += LOCATION_BONUS

        if self.should_reverse_roles(person1, person2):
            score += ROLE_REVERSAL_BONUS

        score += self.rng.random() * TIE_BREAK_RANGE
        return score

    @staticmethod
    def is_excluded(person1: Participant, person2: Participant) -> bool:
        return person1.excludes(person2)

    @staticmethod
    def roles_compatible(person1: Participant, person2: Participant) -> bool:
        """False when both must coach, or both must be coached."""
        if person1.is_coach_only and person2.is_coach_only:
            return False
        if person1.is_coachee_only and person2.is_coachee_only:
            return False
        return True

    def should_reverse_roles(self, person1: Participant, person2: Participant) -> bool:
        """Whether the pair's earlier roles suggest swapping them.

        Notes
        -----
        Only the first direction with any history is consulted, and the check
        is whether that side was ever the coachee. For most pairs that met
        before this is true.
        """
        roles1 = self.stats.roles_with(person1.id)
        if person2.id in roles1:
            return ROLE_COACHEE in roles1[person2.id]
        roles2 = self.stats.roles_with(person2.id)
        if person1.id in roles2:
            return ROLE_COACHEE in roles2[person1.id]
        return False

    def determine_coach(self, person1: Participant, person2: Participant) -> Participant:
        """Decide which of the two coaches.

        Category restrictions come first, then role reversal, then whoever has
        coached fewer partners. Ties go to ``person1``.
        """
        if person1.is_coach_only and not person2.is_coach_only:
            return person1
        if person2.is_coach_only and not person1.is_coach_only:
            return person2
        if person1.is_coachee_only and not person2.is_coachee_only:
            return person2
        if person2.is_coachee_only and not person1.is_coachee_only:
            return person1

        if self.should_reverse_roles(person1, person2):
            roles1 = self.stats.roles_with(person1.id)
            if ROLE_COACHEE in roles1.get(person2.id, ()):
                return person1
            return person2

        if coach_count(self.stats, person1.id) <= coach_count(self.stats, person2.id):
            return person1
        return person2


#  LocalWords:  coachee coachees
