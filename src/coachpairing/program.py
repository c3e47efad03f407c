"""Relating to a coaching program managed by Coach Pairing."""

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


from typing import List, Optional

from coachpairing.exceptions import StorageException
from coachpairing.history import (
    DateLike,
    HistoryStatistics,
    history_statistics,
    merge_histories,
    search_history,
)
from coachpairing.pairing import PairingEngine, compute_stats
from coachpairing.pairing.engine import RandomSource
from coachpairing.session import PairingResult, SessionHistoryEntry
from coachpairing.storage import DataStorage
from coachpairing.type_hints import LocationPreference
from coachpairing.utils import setup_logger

logger = setup_logger(__name__)


class CoachingProgram:
    """Ties the stored roster and history to the pairing engine.

    Storage is handed in by the caller; nothing here reaches for a shared
    instance.
    """

    def __init__(self, storage: DataStorage, rng: Optional[RandomSource] = None) -> None:
        self.storage = storage
        self.rng = rng

    def generate_pairings(
        self,
        location_preference: Optional[LocationPreference] = None,
        respect_exclusions: Optional[bool] = None,
    ) -> PairingResult:
        """Generate pairings for the next session.

        Parameters left as None fall back to the stored settings. Nothing is
        saved; call ``save_session`` once the pairings are accepted.
        """
        settings = self.storage.get_settings()
        if location_preference is None:
            location_preference = settings["location_preference"]
        if respect_exclusions is None:
            respect_exclusions = settings["respect_exclusions"]

        participants = self.storage.get_participants()
        stats = compute_stats(self.storage.get_pairing_history())
        engine = PairingEngine(participants, stats, rng=self.rng)
        result = engine.generate_pairings(location_preference, respect_exclusions)
        for warning in result.warnings:
            logger.info("pairing warning: %s", warning)
        return result

    def save_session(
        self,
        result: PairingResult,
        name: Optional[str] = None,
        location_preference: Optional[LocationPreference] = None,
    ) -> SessionHistoryEntry:
        """Record accepted pairings in the history.

        Raises
        ------
        StorageException
            When there are no pairings to save or the file can not be written
        """
        if not result.pairings:
            raise StorageException("There are no pairings to save")
        if location_preference is None:
            location_preference = self.storage.get_settings()["location_preference"]
        entry = SessionHistoryEntry.create(
            result.pairings,
            name=name,
            location_preference=location_preference,
            participant_count=len(self.storage.get_participants()),
        )
        if not self.storage.save_pairing_session(entry):
            raise StorageException(f"Could not write the session to {self.storage.path}")
        return entry

    def search_history(self, start: DateLike, end: DateLike) -> List[SessionHistoryEntry]:
        return search_history(self.storage.get_pairing_history(), start, end)

    def statistics(self) -> HistoryStatistics:
        return history_statistics(self.storage.get_pairing_history())

    def import_history(self, sessions: List[SessionHistoryEntry]) -> int:
        """Merge imported sessions into the history, returning how many were new."""
        current = self.storage.get_pairing_history()
        merged = merge_histories(current, sessions)
        if not self.storage.replace_history(merged):
            raise StorageException(f"Could not write the history to {self.storage.path}")
        return len(merged) - len(current)


#  LocalWords:  coachee
