"""Executable lookup and platform detection."""

from __future__ import annotations

import shutil
import sys


def find_executable(name: str) -> str | None:
    """Return the full path of *name* on ``PATH``, or ``None``."""
    return shutil.which(name)


def is_windows_family() -> bool:
    return sys.platform == "win32"


__all__ = ["find_executable", "is_windows_family"]
