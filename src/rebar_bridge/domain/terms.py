"""Python representation of Erlang terms and of a parsed ``rebar.config``.

Erlang values map onto Python values as follows: atoms become :class:`Atom`,
strings (character lists) become ``str``, binaries become ``bytes``, tuples,
lists and maps become ``tuple``, ``list`` and ``dict``, and numbers stay
numbers. Erlang does not distinguish ``""`` from ``[]``; callers that care
use :func:`is_empty_chars`.

Contents:
    * :class:`Atom` - Symbolic name, distinct from strings.
    * :class:`RawConfig` - Ordered, duplicate-preserving configuration terms.
    * :func:`stringify` - Render a term the way ``to_string`` would.
    * :func:`proplist_get` - ``proplists:get_value/3`` lookup.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
from pathlib import Path

Term = object
"""Any value produced by the term parser (atoms, strings, numbers, containers)."""


@dataclass(frozen=True, slots=True, repr=False)
class Atom:
    """An Erlang atom such as ``deps`` or ``'quoted atom'``.

    Example:
        >>> Atom("deps") == Atom("deps")
        True
        >>> Atom("deps") == "deps"
        False
        >>> str(Atom("git"))
        'git'
        >>> Atom("sub_dirs")
        Atom('sub_dirs')
    """

    name: str

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Atom({self.name!r})"


TRUE = Atom("true")
FALSE = Atom("false")


def as_atom(key: Atom | str) -> Atom:
    """Accept plain strings wherever a key atom is expected.

    Example:
        >>> as_atom("deps")
        Atom('deps')
        >>> as_atom(Atom("deps"))
        Atom('deps')
    """
    return key if isinstance(key, Atom) else Atom(key)


def is_empty_chars(term: Term) -> bool:
    """Return True for the Erlang empty string, written ``""`` or ``[]``.

    Example:
        >>> is_empty_chars(""), is_empty_chars([]), is_empty_chars("x")
        (True, True, False)
    """
    return term == "" or term == []


def is_char_list(term: Term) -> bool:
    """Return True for values Erlang would treat as a list (strings included)."""
    return isinstance(term, (str, list))


def stringify(term: Term) -> str:
    """Convert a term to text the way Elixir's ``to_string`` does.

    Strings pass through, binaries decode as UTF-8, atoms yield their name,
    numbers format naturally and character lists (possibly nested) are
    joined.

    Raises:
        TypeError: For tuples, maps and lists holding non-character data.
        ValueError: For binaries that are not valid UTF-8.

    Example:
        >>> stringify("https://example.com/x.git")
        'https://example.com/x.git'
        >>> stringify(b"v1.0")
        'v1.0'
        >>> stringify(Atom("master"))
        'master'
        >>> stringify([104, 105, "!"])
        'hi!'
        >>> stringify(7)
        '7'
    """
    if isinstance(term, str):
        return term
    if isinstance(term, bytes):
        return term.decode("utf-8")
    if isinstance(term, Atom):
        return term.name
    if isinstance(term, bool):
        return "true" if term else "false"
    if isinstance(term, (int, float)):
        return str(term)
    if isinstance(term, list):
        return "".join(_chardata_piece(item) for item in term)
    raise TypeError(f"cannot convert {term!r} to a string")


def _chardata_piece(item: Term) -> str:
    if isinstance(item, bool):
        raise TypeError(f"not character data: {item!r}")
    if isinstance(item, int):
        if not 0 <= item <= 0x10FFFF:
            raise TypeError(f"not a character code: {item}")
        return chr(item)
    if isinstance(item, (str, bytes, list)):
        return stringify(item)
    raise TypeError(f"not character data: {item!r}")


def proplist_get(items: Iterable[Term], key: Atom | str, default: Term = None) -> Term:
    """Look up *key* in a property list with ``proplists:get_value/3`` semantics.

    A bare atom equal to *key* counts as ``{key, true}``. The first tuple
    whose head is *key* decides the result; tuples that are not pairs yield
    *default*.

    Example:
        >>> opts = [Atom("raw"), (Atom("tag"), "v1")]
        >>> proplist_get(opts, "raw")
        Atom('true')
        >>> proplist_get(opts, "tag")
        'v1'
        >>> proplist_get(opts, "missing", FALSE)
        Atom('false')
    """
    wanted = as_atom(key)
    for item in items:
        if item == wanted:
            return TRUE
        if isinstance(item, tuple) and item and item[0] == wanted:
            return item[1] if len(item) == 2 else default
    return default


def _is_entry_for(term: Term, key: Atom) -> bool:
    return isinstance(term, tuple) and len(term) == 2 and term[0] == key


@dataclass(frozen=True, slots=True)
class RawConfig:
    """Ordered terms of one ``rebar.config`` with keyword-list access.

    Order and duplicate keys survive loading. Lookup is first-match over
    ``{Key, Value}`` pairs; :meth:`put` overwrites the first matching pair
    in place (later duplicates stay shadowed) or appends a new pair. Terms
    that are not pairs are kept but never addressable.

    Attributes:
        terms: Top-level terms in file order.
        directory: Directory the configuration was loaded from, if any.

    Example:
        >>> cfg = RawConfig((
        ...     (Atom("deps"), [Atom("a")]),
        ...     (Atom("deps"), [Atom("b")]),
        ... ))
        >>> cfg.get("deps")
        [Atom('a')]
        >>> updated = cfg.put("deps", [])
        >>> updated.terms
        ((Atom('deps'), []), (Atom('deps'), [Atom('b')]))
        >>> cfg.put("sub_dirs", ["apps/*"]).keys()
        (Atom('deps'), Atom('deps'), Atom('sub_dirs'))
    """

    terms: tuple[Term, ...] = ()
    directory: Path | None = None

    @classmethod
    def from_terms(cls, terms: Sequence[Term], *, directory: Path | None = None) -> RawConfig:
        """Build a configuration from a list of top-level terms.

        Raises:
            TypeError: If *terms* is not a list or tuple.
        """
        if not isinstance(terms, (list, tuple)):
            raise TypeError(f"expected a list of terms, got {terms!r}")
        return cls(tuple(terms), directory)

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (Atom, str)):
            return False
        wanted = as_atom(key)
        return any(_is_entry_for(term, wanted) for term in self.terms)

    def get(self, key: Atom | str, default: Term = None) -> Term:
        """Return the value of the first ``{key, Value}`` pair, else *default*."""
        wanted = as_atom(key)
        for term in self.terms:
            if _is_entry_for(term, wanted):
                return term[1]  # type: ignore[index]
        return default

    def put(self, key: Atom | str, value: Term) -> RawConfig:
        """Return a copy with *key* set to *value*.

        The first matching pair is replaced where it stands; when no pair
        matches, the new pair is appended.
        """
        wanted = as_atom(key)
        terms = list(self.terms)
        for index, term in enumerate(terms):
            if _is_entry_for(term, wanted):
                terms[index] = (wanted, value)
                break
        else:
            terms.append((wanted, value))
        return replace(self, terms=tuple(terms))

    def keys(self) -> tuple[Atom, ...]:
        """Return the keys of all pair entries in order, duplicates included."""
        return tuple(
            term[0]
            for term in self.terms
            if isinstance(term, tuple) and len(term) == 2 and isinstance(term[0], Atom)
        )

    def to_terms(self) -> list[Term]:
        """Return the terms as a fresh list (the form a script sees as ``CONFIG``)."""
        return list(self.terms)

    def with_directory(self, directory: Path | None) -> RawConfig:
        """Return a copy tagged with the directory it belongs to."""
        return replace(self, directory=directory)


EMPTY_CONFIG = RawConfig()


__all__ = [
    "EMPTY_CONFIG",
    "FALSE",
    "TRUE",
    "Atom",
    "RawConfig",
    "Term",
    "as_atom",
    "is_char_list",
    "is_empty_chars",
    "proplist_get",
    "stringify",
]
