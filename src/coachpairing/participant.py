"""A participant in a coaching program."""

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


import re
from typing import Any, Dict, Iterable, Optional

from coachpairing.constants import (
    CATEGORIES,
    CATEGORY_BOTH,
    CATEGORY_COACH_ONLY,
    CATEGORY_COACHEE_ONLY,
)
from coachpairing.exceptions import ParticipantException
from coachpairing.type_hints import Category
from coachpairing.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class Participant:
    """Represents a person taking part in coaching sessions."""

    email_regex = re.compile(
        r"([-!#-'*+/-9=?A-Z^-~]+(\.[-!#-'*+/-9=?A-Z^-~]+)*|\"([]!#-[^-~ \t]|(\\[\t -~]))+\")@([-!#-'*+/-9=?A-Z^-~]+(\.[-!#-'*+/-9=?A-Z^-~]+)*|\[[\t -Z^-~]*])"
    )

    def __init__(
        self,
        name: str,
        email: Optional[str] = None,
        location: Optional[str] = None,
        category: Category = CATEGORY_BOTH,
        exclusions: Optional[Iterable[str]] = None,
        id: Optional[str] = None,
        created_at: Optional[str] = None,
        updated_at: Optional[str] = None,
    ) -> None:
        if name is None or not str(name).strip():
            raise ParticipantException("Please enter a name")
        self.name: str = str(name).strip()

        # ids are normally handed out by storage, the engine only needs them stable
        self.id: str = id or generate_id(self.__class__.__name__)

        self.email: Optional[str] = None
        if email:
            if type(self).email_regex.fullmatch(str(email).strip()):
                self.email = str(email).strip()
            else:
                raise ParticipantException(
                    f"The email: {email} is not valid for participant: {self.name}"
                )
        else:
            logger.debug("No email given for: %s", self.name)

        self.location: Optional[str] = (location or "").strip() or None

        if category not in CATEGORIES:
            raise ParticipantException(
                f"Unknown category {category!r}, expected one of {', '.join(CATEGORIES)}"
            )
        self.category: Category = category

        self.exclusions: frozenset[str] = frozenset(exclusions or ())
        if self.id in self.exclusions:
            logger.warning("%s lists themselves as an exclusion, ignoring it", self.name)
            self.exclusions = self.exclusions - {self.id}

        self.created_at: Optional[str] = created_at
        self.updated_at: Optional[str] = updated_at

    def __repr__(self) -> str:
        return f"Participant(id={self.id!r}, name={self.name!r}, category={self.category!r})"

    @property
    def is_coach_only(self) -> bool:
        return self.category == CATEGORY_COACH_ONLY

    @property
    def is_coachee_only(self) -> bool:
        return self.category == CATEGORY_COACHEE_ONLY

    def excludes(self, other: "Participant") -> bool:
        """Return True if either participant lists the other as an exclusion."""
        return other.id in self.exclusions or self.id in other.exclusions

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant data."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "location": self.location,
            "category": self.category,
            "exclusions": sorted(self.exclusions),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Create a Participant from serialized data.

        Parameters
        ----------
        data : Dict[str, Any]
            the participant data, as written by ``to_dict``

        Returns
        -------
        Participant
            A Participant created from the data

        Raises
        ------
        ParticipantException
            When the data does not describe a valid participant
        """
        return cls(
            name=data.get("name", ""),
            email=data.get("email") or None,
            location=data.get("location") or None,
            category=data.get("category", CATEGORY_BOTH),
            exclusions=data.get("exclusions") or (),
            id=data.get("id") or None,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


#  LocalWords:  coachee
