"""Exit codes returned by rebar-bridge commands.

Values follow sysexits.h and errno conventions. The signal codes are listed
for reference only; lib_cli_exit_tools produces them when a signal stops a
run.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI error paths.

    Example:
        >>> int(ExitCode.CONFIG_ERROR)
        78
        >>> ExitCode(2).name
        'FILE_NOT_FOUND'
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2  # ENOENT: no rebar executable, missing directory
    INVALID_ARGUMENT = 22  # EINVAL: unknown config section
    CONFIG_ERROR = 78  # EX_CONFIG: unreadable rebar.config, bad requirement or entry
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
