"""In-memory stand-ins for the filesystem, ``erl`` and host lookups.

Contents:
    * :class:`InMemoryFilesystem` - Files and directories held in dicts.
    * :class:`ScriptEvaluatorSpy` - Records script evaluations, returns canned results.
    * :class:`FakeHost` - Canned executable lookup and platform answer.
"""

from __future__ import annotations

import errno
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path, PurePath, PurePosixPath
from typing import Any

from ...domain.errors import ConfigParseError, ScriptEvalError, TermSyntaxError
from ...domain.term_syntax import parse_terms
from ...domain.terms import Term


def _key(path: str | PurePath) -> str:
    return PurePath(path).as_posix()


def _segment_matches(name: str, pattern: str) -> bool:
    if name.startswith(".") and not pattern.startswith("."):
        return False
    return fnmatchcase(name, pattern)


@dataclass
class InMemoryFilesystem:
    """Filesystem double for the loader and walker ports.

    Adding a file registers every parent as a directory. Glob patterns match
    one path segment per pattern segment, like :func:`glob.glob` without
    ``**``, and results come back sorted.

    Example:
        >>> fs = InMemoryFilesystem()
        >>> fs.add_file("/repo/rebar.config", "{sub_dirs, [\\"apps/*\\"]}.")
        >>> fs.add_directory("/repo/apps/a")
        >>> fs.expand_glob("/repo/apps/*")
        ['/repo/apps/a']
        >>> fs.read_terms(Path("/repo/rebar.config"))
        [(Atom('sub_dirs'), ['apps/*'])]
    """

    files: dict[str, str] = field(default_factory=dict)
    directories: set[str] = field(default_factory=set)

    def add_file(self, path: str | PurePath, content: str = "") -> None:
        key = _key(path)
        self.files[key] = content
        self.directories.update(_key(parent) for parent in PurePosixPath(key).parents)

    def add_directory(self, path: str | PurePath) -> None:
        key = _key(path)
        self.directories.add(key)
        self.directories.update(_key(parent) for parent in PurePosixPath(key).parents)

    def remove(self, path: str | PurePath) -> None:
        """Delete a file, or a directory together with everything below it."""
        key = _key(path)
        prefix = key.rstrip("/") + "/"
        self.files = {name: text for name, text in self.files.items() if name != key and not name.startswith(prefix)}
        self.directories = {name for name in self.directories if name != key and not name.startswith(prefix)}

    def read_terms(self, path: Path) -> list[Term]:
        key = _key(path)
        if key not in self.files:
            if key in self.directories:
                raise ConfigParseError(path, "illegal operation on a directory")
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        try:
            return parse_terms(self.files[key])
        except TermSyntaxError as exc:
            raise ConfigParseError(path, str(exc)) from exc

    def expand_glob(self, pattern: str) -> list[str]:
        wanted = _key(pattern).split("/")
        return [
            name
            for name in sorted(self.files.keys() | self.directories)
            if len(name.split("/")) == len(wanted)
            and all(_segment_matches(part, want) for part, want in zip(name.split("/"), wanted))
        ]

    def is_directory(self, path: str | PurePath) -> bool:
        return _key(path) in self.directories

    def is_regular_file(self, path: str | PurePath) -> bool:
        return _key(path) in self.files


def _no_calls() -> list[dict[str, Any]]:
    return []


@dataclass
class ScriptEvaluatorSpy:
    """Captures script evaluations for test assertions.

    Without a canned result the spy behaves like a script that returns
    ``CONFIG`` unchanged.

    Attributes:
        results: Result per script path (POSIX form); an exception instance
            is raised instead of returned.
        handler: Optional callable computing the result from the bindings.
        calls: One record per evaluation (``script``, ``cwd``, ``bindings``).
        erl_command: Last command handed to :meth:`bind`.

    Example:
        >>> spy = ScriptEvaluatorSpy(results={"/p/rebar.config.script": ScriptEvalError("/p", "boom")})
        >>> spy(Path("/q/rebar.config.script"), {"CONFIG": [], "SCRIPT": "rebar.config.script"})
        []
        >>> len(spy.calls)
        1
    """

    results: dict[str, object] = field(default_factory=dict)
    handler: Callable[[Path, Mapping[str, Term]], object] | None = None
    calls: list[dict[str, Any]] = field(default_factory=_no_calls)
    erl_command: str | None = None

    def bind(self, erl_command: str) -> ScriptEvaluatorSpy:
        """Factory hook matching ``ErlScriptEvaluator(erl_command)``."""
        self.erl_command = erl_command
        return self

    def __call__(self, script: Path, bindings: Mapping[str, Term]) -> list[Term]:
        self.calls.append({"script": script, "cwd": script.parent, "bindings": dict(bindings)})
        key = _key(script)
        if key in self.results:
            outcome = self.results[key]
        elif self.handler is not None:
            outcome = self.handler(script, bindings)
        else:
            outcome = bindings["CONFIG"]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome  # type: ignore[return-value]

    def clear(self) -> None:
        """Reset captured calls for the next test."""
        self.calls.clear()


@dataclass
class FakeHost:
    """Canned answers for executable lookup and platform detection.

    Example:
        >>> host = FakeHost(executables={"rebar3": "/usr/bin/rebar3"}, windows=True)
        >>> host.find_executable("rebar3"), host.find_executable("rebar")
        ('/usr/bin/rebar3', None)
        >>> host.is_windows_family()
        True
    """

    executables: dict[str, str] = field(default_factory=dict)
    windows: bool = False

    def find_executable(self, name: str) -> str | None:
        return self.executables.get(name)

    def is_windows_family(self) -> bool:
        return self.windows


__all__ = ["FakeHost", "InMemoryFilesystem", "ScriptEvaluatorSpy"]
