"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config
from ..adapters.config.settings import load_bridge_settings

# Logging services
from ..adapters.logging.setup import init_logging

# Rebar services
from ..adapters.rebar import (
    ErlScriptEvaluator,
    expand_glob,
    find_executable,
    is_directory,
    is_regular_file,
    is_windows_family,
    read_rebar_terms,
)

# Static conformance assertions: pyright checks that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory import FakeHost, InMemoryFilesystem, ScriptEvaluatorSpy
    from ..application.ports import (
        DisplayConfig,
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

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_load_bridge_settings: LoadBridgeSettings = load_bridge_settings
    _assert_init_logging: InitLogging = init_logging
    _assert_read_terms: ReadTerms = read_rebar_terms
    _assert_make_script_evaluator: MakeScriptEvaluator = ErlScriptEvaluator
    _assert_expand_glob: ExpandGlob = expand_glob
    _assert_is_directory: IsDirectory = is_directory
    _assert_is_regular_file: IsRegularFile = is_regular_file
    _assert_find_executable: FindExecutable = find_executable
    _assert_is_windows_family: IsWindowsFamily = is_windows_family


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    load_bridge_settings: LoadBridgeSettings
    init_logging: InitLogging
    read_terms: ReadTerms
    make_script_evaluator: MakeScriptEvaluator
    expand_glob: ExpandGlob
    is_directory: IsDirectory
    is_regular_file: IsRegularFile
    find_executable: FindExecutable
    is_windows_family: IsWindowsFamily


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        load_bridge_settings=load_bridge_settings,
        init_logging=init_logging,
        read_terms=read_rebar_terms,
        make_script_evaluator=ErlScriptEvaluator,
        expand_glob=expand_glob,
        is_directory=is_directory,
        is_regular_file=is_regular_file,
        find_executable=find_executable,
        is_windows_family=is_windows_family,
    )


def build_testing(
    *,
    filesystem: InMemoryFilesystem | None = None,
    evaluator: ScriptEvaluatorSpy | None = None,
    host: FakeHost | None = None,
) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        filesystem: Files and directories the loader and walker see. When
            None, an empty InMemoryFilesystem is created.
        evaluator: Spy standing in for ``erl``. Pass your own to assert on
            the evaluations it captured.
        host: Canned executable lookup and platform answer.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        FakeHost,
        InMemoryFilesystem,
        ScriptEvaluatorSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
    )

    fs = filesystem if filesystem is not None else InMemoryFilesystem()
    spy = evaluator if evaluator is not None else ScriptEvaluatorSpy()
    fake_host = host if host is not None else FakeHost()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        load_bridge_settings=load_bridge_settings,
        init_logging=init_logging_in_memory,
        read_terms=fs.read_terms,
        make_script_evaluator=spy.bind,
        expand_glob=fs.expand_glob,
        is_directory=fs.is_directory,
        is_regular_file=fs.is_regular_file,
        find_executable=fake_host.find_executable,
        is_windows_family=fake_host.is_windows_family,
    )


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    "load_bridge_settings",
    # Logging
    "init_logging",
    # Rebar
    "read_rebar_terms",
    "ErlScriptEvaluator",
    "expand_glob",
    "is_directory",
    "is_regular_file",
    "find_executable",
    "is_windows_family",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
