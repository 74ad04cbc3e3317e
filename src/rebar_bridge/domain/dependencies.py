"""Translate rebar ``deps`` entries into canonical dependency descriptors.

A rebar dependency can be written in five shapes::

    cowboy                                              % bare name
    {cowboy, "1\\.0.*"}                                 % name + requirement
    {cowboy, {git, "https://..."}}                      % name + source
    {cowboy, "1\\.0.*", {git, "https://...", "v1"}}     % name + requirement + source
    {cowboy, "1\\.0.*", {git, "https://..."}, [raw]}    % full form

Each shape is parsed into its own entry class, and every entry class
desugars into :class:`FullEntry` through ``normalize()``; a single function
then produces the :class:`DependencyDescriptor`.

Contents:
    * Entry classes: :class:`BareName`, :class:`NameRequirement`,
      :class:`NameSource`, :class:`NameRequirementSource`, :class:`FullEntry`.
    * :class:`SourceSpec` - Decomposed source tuple.
    * :class:`DependencyDescriptor` - Canonical output.
    * :func:`parse_dependency`, :func:`translate`, :func:`compile_requirement`,
      :func:`translate_dependencies`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from .enums import RefKind
from .errors import InvalidDependencyError, PatternCompileError
from .overrides import OverrideDirective, apply_overrides
from .terms import FALSE, Atom, RawConfig, Term, as_atom, is_char_list, is_empty_chars, proplist_get, stringify

DEPS_KEY = Atom("deps")
_REF_KINDS: dict[Atom, RefKind] = {Atom(kind.value): kind for kind in RefKind}
# Atoms a config file uses for "no requirement".
_NO_REQUIREMENT = (Atom("nil"), Atom("undefined"))


def is_absent_requirement(requirement: Term) -> bool:
    """Return True for ``None`` and the atoms ``nil`` and ``undefined``.

    Example:
        >>> is_absent_requirement(Atom("nil")), is_absent_requirement("1.*")
        (True, False)
    """
    return requirement is None or requirement in _NO_REQUIREMENT


@dataclass(frozen=True, slots=True)
class FullEntry:
    """``{Name, Requirement, Source, Opts}`` with every part explicit.

    ``source`` is ``None`` for entries declared without one (bare names and
    name-plus-requirement pairs).
    """

    name: Atom
    requirement: Term = None
    source: tuple[Term, ...] | None = None
    opts: tuple[Term, ...] = ()

    def normalize(self) -> FullEntry:
        return self


@dataclass(frozen=True, slots=True)
class BareName:
    """``Name``: no requirement, no source."""

    name: Atom

    def normalize(self) -> FullEntry:
        return NameRequirement(self.name, None).normalize()


@dataclass(frozen=True, slots=True)
class NameRequirement:
    """``{Name, Requirement}`` where the requirement is a character sequence."""

    name: Atom
    requirement: Term

    def normalize(self) -> FullEntry:
        return FullEntry(self.name, self.requirement)


@dataclass(frozen=True, slots=True)
class NameSource:
    """``{Name, Source}``."""

    name: Atom
    source: tuple[Term, ...]

    def normalize(self) -> FullEntry:
        return NameRequirementSource(self.name, None, self.source).normalize()


@dataclass(frozen=True, slots=True)
class NameRequirementSource:
    """``{Name, Requirement, Source}``."""

    name: Atom
    requirement: Term
    source: tuple[Term, ...]

    def normalize(self) -> FullEntry:
        return FullEntry(self.name, self.requirement, self.source, ())


DependencyEntry: TypeAlias = BareName | NameRequirement | NameSource | NameRequirementSource | FullEntry
_ENTRY_TYPES = (BareName, NameRequirement, NameSource, NameRequirementSource, FullEntry)


@dataclass(frozen=True, slots=True)
class SourceSpec:
    """A dependency's source tuple ``{Scm, Url, Ref...}`` taken apart.

    Example:
        >>> spec = SourceSpec.from_term((Atom("git"), "https://h/x.git", (Atom("tag"), "v1")))
        >>> spec.options()
        [('git', 'https://h/x.git'), ('tag', 'v1')]
        >>> SourceSpec.from_term((Atom("git"), "https://h/x.git", "")).options()
        [('git', 'https://h/x.git'), ('branch', 'HEAD')]
    """

    scm_kind: Atom
    url: str
    ref_kind: RefKind | None = None
    ref: str | None = None

    @classmethod
    def from_term(cls, source: tuple[Term, ...]) -> SourceSpec:
        """Decompose a source tuple; only the first ref element is considered.

        Raises:
            InvalidDependencyError: If the tuple is too short, the SCM kind is
                not an atom, or the URL or ref cannot be rendered as text.
        """
        if len(source) < 2 or not isinstance(source[0], Atom):
            raise InvalidDependencyError(source, "source must be {Scm, Url, ...} with an atom Scm")
        scm_kind, url, *ref_tail = source
        try:
            url_text = stringify(url)
            if not ref_tail:
                return cls(scm_kind, url_text)
            ref_kind, ref = _select_ref(ref_tail[0])
        except (TypeError, ValueError) as exc:
            raise InvalidDependencyError(source, str(exc)) from exc
        return cls(scm_kind, url_text, ref_kind, ref)

    def options(self) -> list[tuple[str, object]]:
        """Return the ``(key, value)`` options this source contributes."""
        options: list[tuple[str, object]] = [(self.scm_kind.name, self.url)]
        if self.ref_kind is not None:
            options.append((self.ref_kind.value, self.ref))
        return options


def _select_ref(head: Term) -> tuple[RefKind, str]:
    if is_empty_chars(head):
        return RefKind.BRANCH, "HEAD"
    if isinstance(head, tuple) and len(head) == 2 and head[0] in _REF_KINDS:
        return _REF_KINDS[head[0]], stringify(head[1])  # type: ignore[index]
    return RefKind.REF, stringify(head)


@dataclass(frozen=True, slots=True)
class DependencyDescriptor:
    """Canonical dependency: name, optional compiled requirement, options.

    Example:
        >>> dep = translate((Atom("jsx"), "2\\\\.[0-9]+"))
        >>> dep.accepts("2.8"), dep.accepts("1.0")
        (True, False)
        >>> translate(Atom("jsx")).to_dict()
        {'name': 'jsx', 'requirement': None, 'options': []}
    """

    name: Atom
    requirement: re.Pattern[str] | None = None
    options: tuple[tuple[str, object], ...] = ()

    def option(self, key: str, default: object = None) -> object:
        """Return the first option value stored under *key*."""
        for name, value in self.options:
            if name == key:
                return value
        return default

    def accepts(self, version: str) -> bool:
        """Return True when *version* satisfies the requirement (or there is none)."""
        if self.requirement is None:
            return True
        return self.requirement.search(version) is not None

    def to_dict(self) -> dict[str, object]:
        """Plain-data view used for JSON output."""
        return {
            "name": self.name.name,
            "requirement": self.requirement.pattern if self.requirement is not None else None,
            "options": [[key, value] for key, value in self.options],
        }


def parse_dependency(term: Term) -> DependencyEntry:
    """Classify a raw ``deps`` entry into one of the five entry shapes.

    Raises:
        InvalidDependencyError: If *term* matches none of them.

    Example:
        >>> parse_dependency(Atom("cowboy"))
        BareName(name=Atom('cowboy'))
        >>> parse_dependency((Atom("cowboy"), "1.*"))
        NameRequirement(name=Atom('cowboy'), requirement='1.*')
        >>> parse_dependency((Atom("cowboy"), (Atom("git"), "u")))
        NameSource(name=Atom('cowboy'), source=(Atom('git'), 'u'))
    """
    if isinstance(term, Atom):
        return BareName(term)
    if not isinstance(term, tuple) or not 2 <= len(term) <= 4:
        raise InvalidDependencyError(term, "expected an atom or a tuple of 2 to 4 elements")
    name = term[0]
    if not isinstance(name, Atom):
        raise InvalidDependencyError(term, "dependency name must be an atom")

    if len(term) == 2:
        second = term[1]
        if is_absent_requirement(second) or is_char_list(second):
            return NameRequirement(name, second)
        if isinstance(second, tuple):
            return NameSource(name, second)
        raise InvalidDependencyError(term, "second element must be a requirement string or a source tuple")

    requirement, source = term[1], term[2]
    if not isinstance(source, tuple):
        raise InvalidDependencyError(term, "source must be a tuple")
    if len(term) == 3:
        return NameRequirementSource(name, requirement, source)
    opts = term[3]
    if not isinstance(opts, list):
        raise InvalidDependencyError(term, "options must be a list")
    return FullEntry(name, requirement, source, tuple(opts))


def compile_requirement(requirement: Term) -> re.Pattern[str] | None:
    """Compile a version requirement into a regular expression.

    Raises:
        PatternCompileError: If the requirement is not a valid pattern.
        InvalidDependencyError: If the requirement is not text at all.

    Example:
        >>> compile_requirement(None) is None
        True
        >>> compile_requirement(Atom("nil")) is None
        True
        >>> compile_requirement("1\\\\.0.*").pattern
        '1\\\\.0.*'
    """
    if is_absent_requirement(requirement):
        return None
    if isinstance(requirement, Atom):
        raise InvalidDependencyError(requirement, "requirement must be text, nil, or undefined")
    try:
        text = stringify(requirement)
    except (TypeError, ValueError) as exc:
        raise InvalidDependencyError(requirement, f"requirement is not text: {exc}") from exc
    try:
        return re.compile(text)
    except re.error as exc:
        raise PatternCompileError(text, str(exc)) from exc


def _is_truthy(value: Term) -> bool:
    return not (value is None or value is False or value == FALSE)


def translate(entry: DependencyEntry | Term) -> DependencyDescriptor:
    """Translate one dependency (parsed entry or raw term) into a descriptor.

    Raises:
        InvalidDependencyError: For unsupported shapes or unrenderable parts.
        PatternCompileError: For requirements that do not compile.

    Example:
        >>> source = (Atom("git"), "https://h/cowboy.git", (Atom("branch"), "main"))
        >>> dep = translate((Atom("cowboy"), None, source, [Atom("raw")]))
        >>> dep.options
        (('git', 'https://h/cowboy.git'), ('branch', 'main'), ('compile', False))
    """
    parsed = entry if isinstance(entry, _ENTRY_TYPES) else parse_dependency(entry)
    full = parsed.normalize()

    options: list[tuple[str, object]] = []
    if full.source is not None:
        options.extend(SourceSpec.from_term(full.source).options())
    if _is_truthy(proplist_get(full.opts, "raw", FALSE)):
        options.append(("compile", False))

    return DependencyDescriptor(full.name, compile_requirement(full.requirement), tuple(options))


def translate_dependencies(
    app: Atom | str,
    config: RawConfig,
    overrides: Iterable[OverrideDirective | Term] = (),
) -> list[DependencyDescriptor]:
    """Apply *overrides* for *app* and translate every ``deps`` entry.

    A configuration without a ``deps`` key yields an empty list.

    Raises:
        InvalidDependencyError: If ``deps`` is not a list or holds a bad entry.
        PatternCompileError: For requirements that do not compile.

    Example:
        >>> translate_dependencies("app", RawConfig())
        []
        >>> cfg = RawConfig(((Atom("deps"), [Atom("jsx")]),))
        >>> [dep.name for dep in translate_dependencies("app", cfg)]
        [Atom('jsx')]
    """
    effective = apply_overrides(as_atom(app), config, overrides)
    deps = effective.get(DEPS_KEY)
    if deps is None:
        return []
    if not isinstance(deps, list):
        raise InvalidDependencyError(deps, "deps must be a list")
    return [translate(dep) for dep in deps]


__all__ = [
    "BareName",
    "DependencyDescriptor",
    "DependencyEntry",
    "FullEntry",
    "NameRequirement",
    "NameRequirementSource",
    "NameSource",
    "SourceSpec",
    "compile_requirement",
    "is_absent_requirement",
    "parse_dependency",
    "translate",
    "translate_dependencies",
]
