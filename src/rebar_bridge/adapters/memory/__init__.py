"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no Erlang runtime, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.logging` - In-memory logging adapter
    * :mod:`.rebar` - Filesystem, script evaluator and host doubles
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import display_config_in_memory, get_config_in_memory
from .logging import init_logging_in_memory
from .rebar import FakeHost, InMemoryFilesystem, ScriptEvaluatorSpy

# Static conformance assertions
if TYPE_CHECKING:
    from ...application.ports import (
        DisplayConfig,
        EvaluateScript,
        ExpandGlob,
        FindExecutable,
        GetConfig,
        InitLogging,
        IsDirectory,
        IsRegularFile,
        IsWindowsFamily,
        ReadTerms,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_read_terms: ReadTerms = InMemoryFilesystem().read_terms
    _assert_expand_glob: ExpandGlob = InMemoryFilesystem().expand_glob
    _assert_is_directory: IsDirectory = InMemoryFilesystem().is_directory
    _assert_is_regular_file: IsRegularFile = InMemoryFilesystem().is_regular_file
    _assert_evaluate_script: EvaluateScript = ScriptEvaluatorSpy()
    _assert_find_executable: FindExecutable = FakeHost().find_executable
    _assert_is_windows_family: IsWindowsFamily = FakeHost().is_windows_family

__all__ = [
    "FakeHost",
    "InMemoryFilesystem",
    "ScriptEvaluatorSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
]
