"""Utility functions used in Coach Pairing."""

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


import os
import random
import re
import sys
from datetime import date, datetime, timezone
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil import tz
from PyQt6 import QtCore
from PyQt6.QtCore import QDateTime

from coachpairing.constants import APP_NAME


# --- Utility Functions ---
def generate_id(prefix: str = "item_") -> str:
    """Generate a simple unique ID."""
    return f"{prefix}{random.randint(100000, 999999)}_{int(QDateTime.currentMSecsSinceEpoch())}"


def app_data_location() -> str:
    """Return the per-user folder Coach Pairing keeps its files in.

    Uses a dedicated "Coach Pairing" folder in roaming AppData on Windows,
    otherwise Qt's GenericDataLocation.

    Returns
    -------
    str
        The folder path, or an empty string if none could be determined
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return os.path.join(appdata, APP_NAME)
    base = QtCore.QStandardPaths.writableLocation(
        QtCore.QStandardPaths.StandardLocation.GenericDataLocation
    )
    if not base:
        base = QtCore.QStandardPaths.writableLocation(
            QtCore.QStandardPaths.StandardLocation.TempLocation
        )
    if not base:
        return ""
    return os.path.join(base, "coach-pairing")


def utc_now() -> datetime:
    """Timezone aware current time."""
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    return moment.isoformat()


def parse_datetime(value: Union[str, date, datetime]) -> datetime:
    """Parse a stored or user supplied timestamp.

    Naive values are taken to be in the local timezone, so a date typed on the
    command line means the local calendar day.

    Parameters
    ----------
    value : str | datetime.date | datetime.datetime
        An ISO timestamp, a free form date string, or a date object

    Returns
    -------
    datetime.datetime
        A timezone aware datetime

    Raises
    ------
    ValueError
        When the string can not be parsed
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    else:
        moment = date_parser.parse(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz.tzlocal())
    return moment


def slugify(text: str, fallback: str = "session") -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or fallback


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def maybe_str(value: Optional[object]) -> str:
    return "" if value is None else str(value)
