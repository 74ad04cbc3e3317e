"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function.  Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``BridgeSettings``) are imported under ``TYPE_CHECKING`` only so that
    import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat
from ..domain.terms import Term

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.config.settings import BridgeSettings


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadBridgeSettings(Protocol):
    """Validate the ``[rebar_bridge]`` section into typed settings."""

    def __call__(self, config_dict: Mapping[str, Any]) -> BridgeSettings: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


class ReadTerms(Protocol):
    """Read and parse a file of Erlang terms.

    Raises ``FileNotFoundError`` when the file is absent and
    ``ConfigParseError`` when it cannot be parsed.
    """

    def __call__(self, path: Path) -> list[Term]: ...


class EvaluateScript(Protocol):
    """Evaluate a ``rebar.config.script`` with ``CONFIG`` and ``SCRIPT`` bound.

    Returns the new list of configuration terms or raises ``ScriptEvalError``.
    """

    def __call__(self, script: Path, bindings: Mapping[str, Term]) -> list[Term]: ...


class MakeScriptEvaluator(Protocol):
    """Build an :class:`EvaluateScript` that runs scripts with *erl_command*."""

    def __call__(self, erl_command: str) -> EvaluateScript: ...


class ExpandGlob(Protocol):
    """Expand a glob pattern into matching paths, in a stable order."""

    def __call__(self, pattern: str) -> list[str]: ...


class IsDirectory(Protocol):
    """Return True when the path exists and is a directory."""

    def __call__(self, path: str | Path) -> bool: ...


class IsRegularFile(Protocol):
    """Return True when the path exists and is a regular file."""

    def __call__(self, path: str | Path) -> bool: ...


class FindExecutable(Protocol):
    """Locate an executable on the search path."""

    def __call__(self, name: str) -> str | None: ...


class IsWindowsFamily(Protocol):
    """Report whether the current platform belongs to the Windows family."""

    def __call__(self) -> bool: ...


__all__ = [
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
]
