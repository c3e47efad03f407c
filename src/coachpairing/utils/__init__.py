"""Utilities shared across Coach Pairing."""

from coachpairing.utils.logging import set_log_level, setup_logger
from coachpairing.utils.utility_functions import (
    app_data_location,
    generate_id,
    maybe_str,
    parse_datetime,
    plural,
    slugify,
    to_iso,
    utc_now,
)

__all__ = [
    "app_data_location",
    "generate_id",
    "maybe_str",
    "parse_datetime",
    "plural",
    "set_log_level",
    "setup_logger",
    "slugify",
    "to_iso",
    "utc_now",
]
