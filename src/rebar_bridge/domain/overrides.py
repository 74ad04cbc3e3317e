"""Three-phase ``overrides`` protocol for rebar configurations.

A parent project can adjust the configuration of the packages it pulls in
through an ``overrides`` list:

* ``{override, Changes}`` sets keys for every package,
* ``{override, App, Changes}`` sets keys for ``App`` only,
* ``{add, App, Changes}`` prepends list values for ``App`` only.

:func:`apply_overrides` runs three separate passes over the directive list,
one per kind and in that order. App-scoped values therefore always win over
global ones, whatever their position in the list, and additions always see
the fully overridden configuration.

Contents:
    * :class:`GlobalOverride`, :class:`AppOverride`, :class:`AppAdd`,
      :class:`UnrecognizedDirective` - Directive variants.
    * :func:`parse_directive` / :func:`parse_directives` - Terms to directives.
    * :func:`overrides_from_config` - Read the ``overrides`` key.
    * :func:`apply_overrides` - Produce the overridden configuration.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from .terms import Atom, RawConfig, Term, as_atom

Changes: TypeAlias = tuple[tuple[Atom, Term], ...]

OVERRIDE = Atom("override")
ADD = Atom("add")
OVERRIDES_KEY = Atom("overrides")


@dataclass(frozen=True, slots=True)
class GlobalOverride:
    """``{override, Changes}``: overwrite keys for every package."""

    changes: Changes


@dataclass(frozen=True, slots=True)
class AppOverride:
    """``{override, App, Changes}``: overwrite keys for one package."""

    app: Atom
    changes: Changes


@dataclass(frozen=True, slots=True)
class AppAdd:
    """``{add, App, Changes}``: prepend values for one package."""

    app: Atom
    changes: Changes


@dataclass(frozen=True, slots=True)
class UnrecognizedDirective:
    """Any other term found in an ``overrides`` list; inert in every pass."""

    term: Term


OverrideDirective: TypeAlias = GlobalOverride | AppOverride | AppAdd | UnrecognizedDirective
_DIRECTIVE_TYPES = (GlobalOverride, AppOverride, AppAdd, UnrecognizedDirective)


def _parse_changes(term: Term) -> Changes | None:
    if not isinstance(term, list):
        return None
    changes: list[tuple[Atom, Term]] = []
    for item in term:
        if not (isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], Atom)):
            return None
        changes.append((item[0], item[1]))
    return tuple(changes)


def parse_directive(term: Term) -> OverrideDirective:
    """Classify one ``overrides`` entry by its shape.

    Entries whose change list is not a list of ``{Key, Value}`` pairs are
    treated like any other unknown shape.

    Example:
        >>> parse_directive((Atom("override"), [(Atom("deps"), [])]))
        GlobalOverride(changes=((Atom('deps'), []),))
        >>> parse_directive((Atom("add"), Atom("jsx"), [(Atom("erl_opts"), [Atom("debug_info")])]))
        AppAdd(app=Atom('jsx'), changes=((Atom('erl_opts'), [Atom('debug_info')]),))
        >>> parse_directive((Atom("add"), [(Atom("deps"), [])]))
        UnrecognizedDirective(term=(Atom('add'), [(Atom('deps'), [])]))
    """
    if isinstance(term, tuple):
        if len(term) == 2 and term[0] == OVERRIDE:
            changes = _parse_changes(term[1])
            if changes is not None:
                return GlobalOverride(changes)
        elif len(term) == 3 and term[0] in (OVERRIDE, ADD) and isinstance(term[1], Atom):
            changes = _parse_changes(term[2])
            if changes is not None:
                if term[0] == OVERRIDE:
                    return AppOverride(term[1], changes)
                return AppAdd(term[1], changes)
    return UnrecognizedDirective(term)


def parse_directives(terms: Iterable[Term]) -> list[OverrideDirective]:
    """Classify every entry, keeping directives that are already parsed."""
    return [term if isinstance(term, _DIRECTIVE_TYPES) else parse_directive(term) for term in terms]


def overrides_from_config(config: RawConfig) -> list[OverrideDirective]:
    """Return the directives declared under the ``overrides`` key.

    Example:
        >>> cfg = RawConfig(((Atom("overrides"), [(Atom("override"), [(Atom("deps"), [])])]),))
        >>> overrides_from_config(cfg)
        [GlobalOverride(changes=((Atom('deps'), []),))]
        >>> overrides_from_config(RawConfig())
        []
    """
    declared = config.get(OVERRIDES_KEY, [])
    if not isinstance(declared, list):
        return []
    return parse_directives(declared)


def _as_list(term: Term) -> list[Term]:
    if isinstance(term, list):
        return term
    if isinstance(term, str):
        return [ord(ch) for ch in term]
    return [term]


def _prepend(new: Term, old: Term) -> Term:
    if isinstance(new, str) and isinstance(old, str):
        return new + old
    return _as_list(new) + _as_list(old)


def apply_overrides(
    app: Atom | str,
    config: RawConfig,
    overrides: Iterable[OverrideDirective | Term],
) -> RawConfig:
    """Apply global overrides, then app overrides, then app additions.

    Each phase is a full scan of *overrides* in list order; later directives
    of the same phase win for the same key. The three scans are kept
    separate on purpose: phase two must see the result of every global
    override and phase three the result of every override.

    Args:
        app: Name of the package whose configuration is being adjusted.
        config: Configuration of that package.
        overrides: Directives (or raw ``overrides`` terms) from the parent.

    Returns:
        A new configuration; *config* itself is left untouched.

    Example:
        >>> cfg = RawConfig(((Atom("erl_opts"), [Atom("b")]),))
        >>> result = apply_overrides("jsx", cfg, [
        ...     (Atom("add"), Atom("jsx"), [(Atom("erl_opts"), [Atom("a")])]),
        ...     (Atom("override"), Atom("jsx"), [(Atom("deps"), [])]),
        ...     (Atom("override"), [(Atom("deps"), [Atom("global")])]),
        ... ])
        >>> result.get("erl_opts"), result.get("deps")
        ([Atom('a'), Atom('b')], [])
    """
    target = as_atom(app)
    directives = parse_directives(overrides)

    for directive in directives:
        if isinstance(directive, GlobalOverride):
            for key, value in directive.changes:
                config = config.put(key, value)

    for directive in directives:
        if isinstance(directive, AppOverride) and directive.app == target:
            for key, value in directive.changes:
                config = config.put(key, value)

    for directive in directives:
        if isinstance(directive, AppAdd) and directive.app == target:
            for key, value in directive.changes:
                config = config.put(key, _prepend(value, config.get(key, [])))

    return config


__all__ = [
    "AppAdd",
    "AppOverride",
    "GlobalOverride",
    "OverrideDirective",
    "UnrecognizedDirective",
    "apply_overrides",
    "overrides_from_config",
    "parse_directive",
    "parse_directives",
]
