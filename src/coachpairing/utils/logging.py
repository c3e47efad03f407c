"""Logging utilities."""

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


import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from PyQt6 import QtCore

from coachpairing.constants import LOG_FILE_NAME
from coachpairing.utils.utility_functions import app_data_location

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"

# shared by every logger so the log file is opened once
_file_handler: Optional[RotatingFileHandler] = None
_file_handler_tried = False


def _log_folder() -> Optional[str]:
    """Find a writable folder for the log file, or None."""
    log_folder = app_data_location()
    if not log_folder:
        return None
    log_folder = os.path.join(log_folder, "logs")
    try:
        os.makedirs(log_folder, exist_ok=True)
    except OSError:
        # If we can't create the folder, fall back to temp dir
        log_folder = QtCore.QStandardPaths.writableLocation(
            QtCore.QStandardPaths.StandardLocation.TempLocation
        )
        log_folder = os.path.join(log_folder, "coach-pairing-logs")
        os.makedirs(log_folder, exist_ok=True)
    return log_folder


def _shared_file_handler(log_formatter: logging.Formatter) -> Optional[RotatingFileHandler]:
    global _file_handler, _file_handler_tried
    if _file_handler_tried:
        return _file_handler
    _file_handler_tried = True
    try:
        log_folder = _log_folder()
        if log_folder:
            log_path = os.path.join(log_folder, LOG_FILE_NAME)
            # Use RotatingFileHandler to prevent unbounded log growth
            _file_handler = RotatingFileHandler(
                log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
            _file_handler.setFormatter(log_formatter)
        else:
            print(
                "Warning: Could not determine writable location for log file.",
                file=sys.stderr,
            )
    except OSError:
        # continue without file logging
        _file_handler = None
    return _file_handler


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up logger for a python module.

    Sets up file handler and console handler

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    lgr.setLevel(logging.INFO)
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    # Console Handler, stderr keeps command output on stdout clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.WARNING)
    lgr.addHandler(console_handler)

    file_handler = _shared_file_handler(log_formatter)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr


def set_log_level(level: int) -> None:
    """Apply ``level`` to every Coach Pairing logger and its console handler."""
    for name, lgr in logging.root.manager.loggerDict.items():
        if not name.startswith("coachpairing") or not isinstance(lgr, logging.Logger):
            continue
        lgr.setLevel(level)
        for handler in lgr.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(level)


#  LocalWords:  RotatingFileHandler
