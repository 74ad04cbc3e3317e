"""Walk a rebar project and its ``sub_dirs`` in pre-order.

``sub_dirs`` holds glob patterns. Every pattern is expanded relative to the
directory of the configuration declaring it, matches that are not
directories are dropped, and each surviving directory is walked completely
before its next sibling. There is no cycle detection: a symlink pointing
back at an ancestor recurses until the interpreter gives up.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from ..domain.errors import InvalidSubDirError
from ..domain.terms import Atom, RawConfig, Term, stringify
from .ports import ExpandGlob, IsDirectory

R = TypeVar("R")

SUB_DIRS_KEY = Atom("sub_dirs")

logger = logging.getLogger(__name__)


def _patterns(config: RawConfig) -> list[Term]:
    declared = config.get(SUB_DIRS_KEY, [])
    if isinstance(declared, list):
        return declared
    return [declared]


def sub_directories(
    config: RawConfig,
    *,
    expand_glob: ExpandGlob,
    is_directory: IsDirectory,
    base_dir: Path | None = None,
) -> list[Path]:
    """Return the existing directories matched by the ``sub_dirs`` patterns.

    Patterns are expanded in declaration order and the expansions are
    concatenated; relative patterns resolve against ``config.directory``,
    then *base_dir*, then the current working directory.

    Raises:
        InvalidSubDirError: If a pattern is not text.
    """
    root = config.directory or base_dir or Path.cwd()
    found: list[Path] = []
    for pattern in _patterns(config):
        try:
            text = stringify(pattern)
        except (TypeError, ValueError) as exc:
            raise InvalidSubDirError(pattern, str(exc)) from exc
        absolute = text if Path(text).is_absolute() else str(root / text)
        found.extend(Path(match) for match in expand_glob(absolute) if is_directory(match))
    return found


def walk(
    start: str | Path | RawConfig,
    transform: Callable[[RawConfig], R],
    *,
    load: Callable[[Path], RawConfig],
    expand_glob: ExpandGlob,
    is_directory: IsDirectory,
    base_dir: Path | None = None,
) -> list[R]:
    """Apply *transform* to *start* and to every configuration below it.

    Args:
        start: A directory to load, or a configuration used as is.
        transform: Called once per configuration.
        load: Loads the configuration of a directory.
        expand_glob: Expands one ``sub_dirs`` pattern.
        is_directory: Filters the expanded matches.
        base_dir: Directory used for relative patterns of a configuration
            that does not know where it came from.

    Returns:
        ``[transform(start_config)]`` followed by the results of every
        sub directory, depth first, siblings in expansion order.

    Example:
        >>> walk(RawConfig(), len, load=RawConfig, expand_glob=lambda p: [], is_directory=bool)
        [0]
    """
    config = start if isinstance(start, RawConfig) else load(Path(start))
    results = [transform(config)]
    children = sub_directories(config, expand_glob=expand_glob, is_directory=is_directory, base_dir=base_dir)
    if children:
        logger.debug("Descending into sub_dirs", extra={"directory": str(config.directory), "count": len(children)})
    for child in children:
        results.extend(walk(child, transform, load=load, expand_glob=expand_glob, is_directory=is_directory))
    return results


__all__ = ["SUB_DIRS_KEY", "sub_directories", "walk"]
