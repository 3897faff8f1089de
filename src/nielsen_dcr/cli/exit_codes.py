"""CLI exit codes."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes for CLI commands."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENTS = 2
    SETTINGS_ERROR = 3
    INPUT_ERROR = 4
