"""Core utilities package.

This package contains pure utility functions with no external dependencies,
used across the codebase for datetime parsing and formatting.
"""

from nielsen_dcr.core.datetime_utils import (
    NIELSEN_AIRDATE_FORMAT,
    current_epoch_seconds,
    format_airdate,
    is_iso_timestamp,
    is_simple_date,
    parse_iso_timestamp,
    parse_simple_date,
)

__all__ = [
    "NIELSEN_AIRDATE_FORMAT",
    "current_epoch_seconds",
    "format_airdate",
    "is_iso_timestamp",
    "is_simple_date",
    "parse_iso_timestamp",
    "parse_simple_date",
]
