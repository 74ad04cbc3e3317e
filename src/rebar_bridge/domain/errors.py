"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

from pathlib import Path


class RebarBridgeError(Exception):
    """Base class for every error raised while translating rebar configuration."""


class TermSyntaxError(RebarBridgeError):
    """Erlang term text could not be tokenized or parsed.

    Carries the 1-based line number where parsing stopped so callers can
    point users at the offending spot.

    Example:
        >>> err = TermSyntaxError(3, "syntax error before: '}'")
        >>> str(err)
        "line 3: syntax error before: '}'"
        >>> err.line
        3
    """

    def __init__(self, line: int, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"line {line}: {reason}")


class ConfigParseError(RebarBridgeError):
    """A ``rebar.config`` file exists but cannot be read or parsed.

    Fatal: a malformed build configuration aborts the whole operation.

    Example:
        >>> err = ConfigParseError(Path("app/rebar.config"), "line 1: unterminated string")
        >>> str(err)
        'Error consulting rebar config app/rebar.config: line 1: unterminated string'
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error consulting rebar config {path}: {reason}")


class ScriptEvalError(RebarBridgeError):
    """Evaluating ``rebar.config.script`` failed.

    Non-fatal by contract: the loader logs a warning and keeps the
    configuration read from ``rebar.config``.

    Example:
        >>> err = ScriptEvalError(Path("rebar.config.script"), "erl executable not found")
        >>> str(err)
        'Error evaluating rebar config script rebar.config.script: erl executable not found'
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error evaluating rebar config script {path}: {reason}")


class PatternCompileError(RebarBridgeError):
    """A dependency version requirement is not a valid regular expression.

    Example:
        >>> err = PatternCompileError("1.(", "missing ), unterminated subpattern at position 2")
        >>> str(err)
        'Unable to compile version regex: "1.(", missing ), unterminated subpattern at position 2'
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f'Unable to compile version regex: "{pattern}", {reason}')


class InvalidDependencyError(RebarBridgeError):
    """A ``deps`` entry matches none of the accepted dependency shapes.

    Example:
        >>> err = InvalidDependencyError(42, "expected an atom or a tuple")
        >>> str(err)
        'Invalid dependency entry 42: expected an atom or a tuple'
    """

    def __init__(self, entry: object, reason: str) -> None:
        self.entry = entry
        self.reason = reason
        super().__init__(f"Invalid dependency entry {entry!r}: {reason}")



class InvalidSubDirError(RebarBridgeError):
    """A ``sub_dirs`` entry is not a path pattern.

    Example:
        >>> str(InvalidSubDirError((1, 2), "expected text"))
        'Invalid sub_dirs entry (1, 2): expected text'
    """

    def __init__(self, entry: object, reason: str) -> None:
        self.entry = entry
        self.reason = reason
        super().__init__(f"Invalid sub_dirs entry {entry!r}: {reason}")


__all__ = [
    "ConfigParseError",
    "InvalidDependencyError",
    "InvalidSubDirError",
    "PatternCompileError",
    "RebarBridgeError",
    "ScriptEvalError",
    "TermSyntaxError",
]
