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

# --- Constants ---
APP_NAME = "Coach Pairing"
DATA_FILE_NAME = "coach-pairing-data.json"
LOG_FILE_NAME = "coach-pairing.log"

# Participant categories
CATEGORY_COACH_ONLY = "Coach Only"
CATEGORY_COACHEE_ONLY = "Coachee Only"
CATEGORY_BOTH = "Both"
CATEGORIES = (CATEGORY_COACH_ONLY, CATEGORY_COACHEE_ONLY, CATEGORY_BOTH)

# Location preferences
LOCATION_IGNORE = "Ignore"
LOCATION_SAME = "Same"
LOCATION_DIFFERENT = "Different"
LOCATION_PREFERENCES = (LOCATION_IGNORE, LOCATION_SAME, LOCATION_DIFFERENT)

# Roles recorded in role history
ROLE_COACH = "coach"
ROLE_COACHEE = "coachee"

# Coachee slot of a participant left without a partner
UNPAIRED_MARKER = "UNPAIRED"
# never produced by generate_id, which uses "_"
PAIR_KEY_SEPARATOR = "|"

# Scoring weights
REPEAT_PENALTY = 100
LOCATION_BONUS = 50
ROLE_REVERSAL_BONUS = 25
TIE_BREAK_RANGE = 10

MIN_PARTICIPANTS = 2
DEFAULT_SESSION_NAME = "Pairing Session"
DEFAULT_SEARCH_DAYS = 30
MOST_FREQUENT_PAIRS_LIMIT = 10

DEFAULT_SETTINGS = {
    "location_preference": LOCATION_IGNORE,
    "respect_exclusions": True,
}

CSV_HEADER = [
    "#",
    "Coach",
    "Coach Email",
    "Coach Location",
    "Coachee",
    "Coachee Email",
    "Coachee Location",
]
