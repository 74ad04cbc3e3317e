"""Application layer - use cases and port definitions.

Contains use cases that orchestrate domain logic and port protocols that
define the interfaces for adapter implementations.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
    * :mod:`.loader` - Load ``rebar.config`` and evaluate its script
    * :mod:`.walker` - Pre-order walk over ``sub_dirs``
    * :mod:`.resolver` - Locate the rebar executables
"""

from __future__ import annotations

from .loader import load_config
from .ports import (
    DisplayConfig,
    EvaluateScript,
    ExpandGlob,
    FindExecutable,
    GetConfig,
    InitLogging,
    IsDirectory,
    IsRegularFile,
    IsWindowsFamily,
    LoadBridgeSettings,
    MakeScriptEvaluator,
    ReadTerms,
)
from .resolver import global_command, local_command, local_command_path, resolve_command
from .walker import walk

__all__ = [
    # Ports
    "DisplayConfig",
    "EvaluateScript",
    "ExpandGlob",
    "FindExecutable",
    "GetConfig",
    "InitLogging",
    "IsDirectory",
    "IsRegularFile",
    "IsWindowsFamily",
    "LoadBridgeSettings",
    "MakeScriptEvaluator",
    "ReadTerms",
    # Use cases
    "global_command",
    "load_config",
    "local_command",
    "local_command_path",
    "resolve_command",
    "walk",
]
