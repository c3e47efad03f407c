"""Exceptions raised by Coach Pairing."""

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


class CoachPairingException(Exception):
    """Base class for every error raised by Coach Pairing."""


class ParticipantException(CoachPairingException):
    """A participant record is invalid (blank name, bad email, unknown category)."""


class PairingException(CoachPairingException):
    """Pairing was requested with arguments the engine cannot work with."""


class StorageException(CoachPairingException):
    """The data document could not be read, written or updated."""


class HistoryException(CoachPairingException):
    """A history query is malformed."""
