"""Rebar adapter - filesystem, platform, and Erlang runtime access.

Contents:
    * :mod:`.files` - Read ``rebar.config`` terms from disk
    * :mod:`.script` - Evaluate ``rebar.config.script`` with ``erl``
    * :mod:`.filesystem` - Glob expansion and path checks
    * :mod:`.host` - Executable lookup and platform detection
"""

from __future__ import annotations

from .files import read_rebar_terms
from .filesystem import expand_glob, is_directory, is_regular_file
from .host import find_executable, is_windows_family
from .script import ErlScriptEvaluator

__all__ = [
    "ErlScriptEvaluator",
    "expand_glob",
    "find_executable",
    "is_directory",
    "is_regular_file",
    "is_windows_family",
    "read_rebar_terms",
]
