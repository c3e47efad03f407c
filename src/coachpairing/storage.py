"""JSON document storage for participants, session history and settings."""

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


import copy
import json
import os
from typing import Any, Dict, List, Optional

from coachpairing.constants import DATA_FILE_NAME, DEFAULT_SETTINGS, LOCATION_PREFERENCES
from coachpairing.exceptions import CoachPairingException, StorageException
from coachpairing.participant import Participant
from coachpairing.session import SessionHistoryEntry
from coachpairing.utils import (
    app_data_location,
    setup_logger,
    to_iso,
    utc_now,
)

logger = setup_logger(__name__)

CORRUPT_SUFFIX = ".corrupt"


def default_data_path() -> str:
    """Where the data document lives when no path is given."""
    folder = app_data_location() or os.getcwd()
    return os.path.join(folder, DATA_FILE_NAME)


def _as_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise StorageException(f"{key!r} must be a list")
    return value


def sessions_from_list(items: Any) -> List[SessionHistoryEntry]:
    """Deserialize a list of saved sessions.

    Raises
    ------
    StorageException
        When ``items`` is not a list of session objects
    """
    if not isinstance(items, list):
        raise StorageException("Session history must be a list of sessions")
    try:
        return [SessionHistoryEntry.from_dict(s) for s in items]
    except (KeyError, TypeError, AttributeError) as e:
        raise StorageException(f"Malformed session entry: {e!r}") from e


class DataStorage:
    """Keeps the whole data set in one JSON document on disk.

    Every mutating call writes the document straight back, so the file is
    always current.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path: str = path or default_data_path()
        self.participants: List[Participant] = []
        self.pairings_history: List[SessionHistoryEntry] = []
        self.settings: Dict[str, Any] = self._default_settings()
        self.load_data()

    @staticmethod
    def _default_settings() -> Dict[str, Any]:
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        settings["last_saved"] = to_iso(utc_now())
        return settings

    # --- document I/O ---
    def _reset(self) -> None:
        self.participants = []
        self.pairings_history = []
        self.settings = self._default_settings()

    def _apply(self, data: Dict[str, Any]) -> None:
        """Replace the in-memory state with ``data`` merged over the defaults.

        Raises
        ------
        StorageException
            When ``data`` is not a well formed document
        """
        if not isinstance(data, dict):
            raise StorageException("The data document must be a JSON object")
        try:
            participants = [
                Participant.from_dict(p) for p in _as_list(data, "participants")
            ]
            history = sessions_from_list(_as_list(data, "pairings_history"))
            settings = self._default_settings()
            settings.update(data.get("settings") or {})
        except (KeyError, TypeError, AttributeError) as e:
            raise StorageException(f"Malformed data document: {e!r}") from e

        self.participants = participants
        self.pairings_history = history
        self.settings = settings

    def load_data(self) -> None:
        """Load the document, writing the defaults when there is none.

        A document that can not be read is moved to ``<path>.corrupt`` rather
        than written over, and the defaults are kept in memory.
        """
        if not os.path.exists(self.path):
            logger.info("No data file at %s, starting empty", self.path)
            self._reset()
            self.save_data()
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                self._apply(json.load(f))
            logger.info(
                "Loaded %d participants and %d sessions from %s",
                len(self.participants),
                len(self.pairings_history),
                self.path,
            )
        except (OSError, ValueError, CoachPairingException):
            logger.exception("Error loading data from %s, starting empty:", self.path)
            self._reset()
            self._move_aside()

    def _move_aside(self) -> None:
        """Rename the unreadable document so the next save starts a new one."""
        backup = self.path + CORRUPT_SUFFIX
        try:
            os.replace(self.path, backup)
            logger.warning("Unreadable data file moved to %s", backup)
        except OSError:
            logger.exception("Could not move %s aside:", self.path)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the whole data set."""
        return {
            "participants": [p.to_dict() for p in self.participants],
            "pairings_history": [s.to_dict() for s in self.pairings_history],
            "settings": dict(self.settings),
        }

    def save_data(self) -> bool:
        """Write the document to disk.

        Returns
        -------
        bool
            False when the file could not be written
        """
        self.settings["last_saved"] = to_iso(utc_now())
        try:
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=4)
            logger.debug("Data saved to %s", self.path)
            return True
        except OSError:
            logger.exception("Error saving data to %s:", self.path)
            return False

    # --- participants ---
    def get_participants(self) -> List[Participant]:
        return list(self.participants)

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def save_participant(self, participant: Participant) -> bool:
        """Add a new participant or replace the stored one with the same id."""
        now = to_iso(utc_now())
        participant.updated_at = now
        for index, existing in enumerate(self.participants):
            if existing.id == participant.id:
                participant.created_at = existing.created_at or now
                self.participants[index] = participant
                logger.info("Updated participant %s", participant.name)
                break
        else:
            participant.created_at = participant.created_at or now
            self.participants.append(participant)
            logger.info("Added participant %s", participant.name)

        unknown = [
            pid for pid in participant.exclusions if self.get_participant(pid) is None
        ]
        if unknown:
            logger.warning(
                "%s excludes unknown participant ids: %s", participant.name, unknown
            )
        return self.save_data()

    def delete_participant(self, participant_id: str) -> bool:
        before = len(self.participants)
        self.participants = [p for p in self.participants if p.id != participant_id]
        if len(self.participants) == before:
            logger.warning("No participant with id %s to delete", participant_id)
        return self.save_data()

    # --- pairing history ---
    def get_pairing_history(self) -> List[SessionHistoryEntry]:
        """Saved sessions, newest first."""
        return list(self.pairings_history)

    def get_session(self, session_id: str) -> Optional[SessionHistoryEntry]:
        for session in self.pairings_history:
            if session.id == session_id:
                return session
        return None

    def save_pairing_session(self, session: SessionHistoryEntry) -> bool:
        if self.get_session(session.id) is not None:
            raise StorageException(f"Session {session.id} is already saved")
        self.pairings_history.insert(0, session)
        logger.info("Saved session %r with %d records", session.name, len(session.pairings))
        return self.save_data()

    def replace_history(self, sessions: List[SessionHistoryEntry]) -> bool:
        """Swap in a whole history, e.g. after merging an imported one."""
        self.pairings_history = list(sessions)
        return self.save_data()

    def clear_history(self) -> bool:
        self.pairings_history = []
        return self.save_data()

    # --- settings ---
    def get_settings(self) -> Dict[str, Any]:
        return dict(self.settings)

    def update_settings(self, **changes: Any) -> bool:
        """Update stored settings.

        Raises
        ------
        StorageException
            For unknown settings or an unknown location preference
        """
        unknown = set(changes) - set(DEFAULT_SETTINGS)
        if unknown:
            raise StorageException(f"Unknown settings: {', '.join(sorted(unknown))}")
        preference = changes.get("location_preference")
        if preference is not None and preference not in LOCATION_PREFERENCES:
            raise StorageException(
                f"Unknown location preference {preference!r}, "
                f"expected one of {', '.join(LOCATION_PREFERENCES)}"
            )
        if "respect_exclusions" in changes:
            changes["respect_exclusions"] = bool(changes["respect_exclusions"])
        self.settings.update(changes)
        return self.save_data()

    # --- whole document ---
    def export_data(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def import_data(self, json_data: str) -> bool:
        """Replace the data set with an exported document.

        Returns
        -------
        bool
            False, leaving the current data untouched, when the text is not a
            valid document
        """
        try:
            self._apply(json.loads(json_data))
        except (ValueError, CoachPairingException):
            logger.exception("Error importing data:")
            return False
        return self.save_data()

    def clear_all_data(self) -> bool:
        self._reset()
        return self.save_data()


#  LocalWords:  coachee
