"""Domain layer - pure business logic with no I/O or framework dependencies.

Contains the term model of a rebar configuration and the pure services that
transform it.

Contents:
    * :mod:`.terms` - Atoms and the ordered :class:`RawConfig`
    * :mod:`.term_syntax` - Erlang term reader and writer
    * :mod:`.overrides` - Three-phase override protocol
    * :mod:`.dependencies` - Dependency entry translation
    * :mod:`.commands` - Platform wrapping of rebar invocations
    * :mod:`.enums` - Domain enumerations (OutputFormat, RebarManager, RefKind)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .commands import wrap_command
from .dependencies import DependencyDescriptor, SourceSpec, parse_dependency, translate, translate_dependencies
from .enums import OutputFormat, RebarManager, RefKind
from .errors import (
    ConfigParseError,
    InvalidDependencyError,
    InvalidSubDirError,
    PatternCompileError,
    RebarBridgeError,
    ScriptEvalError,
    TermSyntaxError,
)
from .overrides import apply_overrides, overrides_from_config, parse_directive
from .term_syntax import format_term, format_terms, parse_term, parse_terms
from .terms import Atom, RawConfig

__all__ = [
    # Terms
    "Atom",
    "RawConfig",
    "format_term",
    "format_terms",
    "parse_term",
    "parse_terms",
    # Services
    "DependencyDescriptor",
    "SourceSpec",
    "apply_overrides",
    "overrides_from_config",
    "parse_dependency",
    "parse_directive",
    "translate",
    "translate_dependencies",
    "wrap_command",
    # Enums
    "OutputFormat",
    "RebarManager",
    "RefKind",
    # Errors
    "ConfigParseError",
    "InvalidDependencyError",
    "InvalidSubDirError",
    "PatternCompileError",
    "RebarBridgeError",
    "ScriptEvalError",
    "TermSyntaxError",
]
