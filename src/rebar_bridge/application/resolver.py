"""Locate the ``rebar`` or ``rebar3`` executable to invoke.

A copy found on the search path wins over the locally cached copy under the
configured home directory. Either way the result is wrapped for the current
platform.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..domain.commands import wrap_command
from ..domain.enums import RebarManager
from .ports import FindExecutable, IsRegularFile, IsWindowsFamily

logger = logging.getLogger(__name__)


def local_command_path(manager: RebarManager | str, *, home: Path) -> Path:
    """Return where the local copy of *manager* is expected to live.

    Example:
        >>> local_command_path(RebarManager.REBAR3, home=Path("/home/u/.mix")).as_posix()
        '/home/u/.mix/rebar3'
    """
    return home / RebarManager(manager).value


def global_command(
    manager: RebarManager | str,
    *,
    find_executable: FindExecutable,
    is_windows_family: IsWindowsFamily,
) -> str | None:
    """Return the invocation for a copy of *manager* on the search path."""
    return wrap_command(find_executable(RebarManager(manager).value), windows=is_windows_family())


def local_command(
    manager: RebarManager | str,
    *,
    home: Path,
    is_regular_file: IsRegularFile,
    is_windows_family: IsWindowsFamily,
) -> str | None:
    """Return the invocation for the locally cached copy, if it exists."""
    path = local_command_path(manager, home=home)
    candidate = str(path) if is_regular_file(path) else None
    return wrap_command(candidate, windows=is_windows_family())


def resolve_command(
    manager: RebarManager | str,
    *,
    home: Path,
    find_executable: FindExecutable,
    is_regular_file: IsRegularFile,
    is_windows_family: IsWindowsFamily,
) -> str | None:
    """Return the invocation for *manager*, preferring the search path.

    Returns:
        The (possibly wrapped) command, or ``None`` when neither a global
        nor a local copy exists.

    Example:
        >>> resolve_command(
        ...     "rebar",
        ...     home=Path("/cache"),
        ...     find_executable=lambda name: None,
        ...     is_regular_file=lambda path: True,
        ...     is_windows_family=lambda: False,
        ... )
        '/cache/rebar'
    """
    command = global_command(manager, find_executable=find_executable, is_windows_family=is_windows_family)
    if command is None:
        command = local_command(
            manager, home=home, is_regular_file=is_regular_file, is_windows_family=is_windows_family
        )
    logger.debug("Resolved %s command", RebarManager(manager).value, extra={"command": command})
    return command


__all__ = ["global_command", "local_command", "local_command_path", "resolve_command"]
