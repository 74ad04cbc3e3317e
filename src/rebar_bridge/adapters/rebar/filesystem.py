"""Filesystem checks used while walking ``sub_dirs``."""

from __future__ import annotations

import glob
from pathlib import Path


def expand_glob(pattern: str) -> list[str]:
    """Return the paths matching *pattern*, sorted so sibling order is stable."""
    return sorted(glob.glob(pattern, recursive=True))


def is_directory(path: str | Path) -> bool:
    return Path(path).is_dir()


def is_regular_file(path: str | Path) -> bool:
    return Path(path).is_file()


__all__ = ["expand_glob", "is_directory", "is_regular_file"]
