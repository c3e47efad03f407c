"""Type hints used in Coach Pairing."""

from typing import TYPE_CHECKING, FrozenSet, Literal, Mapping, Union

if TYPE_CHECKING:
    from coachpairing.participant import Participant

# participant categories
CoachOnly = Literal["Coach Only"]
CoacheeOnly = Literal["Coachee Only"]
Both = Literal["Both"]
Category = Literal[CoachOnly, CoacheeOnly, Both]

LocationPreference = Literal["Ignore", "Same", "Different"]
Role = Literal["coach", "coachee"]

# canonical "<id>|<id>" key of an unordered pair
PairKey = str
# partner id -> roles held against that partner
PartnerRoles = Mapping[str, FrozenSet[Role]]
RoleHistory = Mapping[str, PartnerRoles]

# a partner, or the UNPAIRED marker
MaybeCoachee = Union["Participant", Literal["UNPAIRED"]]

#  LocalWords:  PairKey PartnerRoles
