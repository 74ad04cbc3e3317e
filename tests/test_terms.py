"""Erlang term values: atoms, stringify, proplists, and RawConfig access."""

from __future__ import annotations

from pathlib import Path

import pytest

from rebar_bridge.domain.terms import (
    EMPTY_CONFIG,
    FALSE,
    TRUE,
    Atom,
    RawConfig,
    as_atom,
    is_empty_chars,
    proplist_get,
    stringify,
)

DEPS = Atom("deps")


@pytest.mark.os_agnostic
def test_atom_is_not_equal_to_string_of_same_name() -> None:
    """An atom and a string with the same text are different values."""
    assert Atom("deps") != "deps"
    assert Atom("deps") == as_atom("deps")


@pytest.mark.os_agnostic
def test_atoms_are_hashable_dictionary_keys() -> None:
    """Atoms work as map keys."""
    assert {Atom("a"): 1}[Atom("a")] == 1


@pytest.mark.os_agnostic
@pytest.mark.parametrize("value", ["", []])
def test_empty_string_and_empty_list_are_both_empty_chars(value: object) -> None:
    """Erlang does not tell "" from []."""
    assert is_empty_chars(value)


@pytest.mark.os_agnostic
def test_stringify_joins_nested_character_data() -> None:
    """Deep character lists flatten into one string."""
    assert stringify([[104, "e"], b"ll", "o"]) == "hello"


@pytest.mark.os_agnostic
def test_stringify_renders_atoms_and_numbers() -> None:
    """Atoms yield their name and numbers their decimal text."""
    assert stringify(Atom("master")) == "master"
    assert stringify(42) == "42"
    assert stringify(1.5) == "1.5"


@pytest.mark.os_agnostic
def test_stringify_rejects_tuples() -> None:
    """Tuples have no text form."""
    with pytest.raises(TypeError):
        stringify((Atom("branch"), "main"))


@pytest.mark.os_agnostic
def test_stringify_rejects_lists_holding_tuples() -> None:
    """A list that is not character data cannot be stringified."""
    with pytest.raises(TypeError):
        stringify([(Atom("a"), 1)])


@pytest.mark.os_agnostic
def test_proplist_bare_atom_means_true() -> None:
    """A bare atom in a property list reads as ``{Atom, true}``."""
    assert proplist_get([Atom("raw")], "raw", FALSE) == TRUE


@pytest.mark.os_agnostic
def test_proplist_first_match_wins() -> None:
    """The first matching entry decides the value."""
    opts = [(Atom("raw"), FALSE), Atom("raw")]

    assert proplist_get(opts, "raw") == FALSE


@pytest.mark.os_agnostic
def test_proplist_missing_key_returns_default() -> None:
    """A missing key yields the default."""
    assert proplist_get([], "raw", "fallback") == "fallback"


@pytest.mark.os_agnostic
def test_raw_config_get_returns_first_of_duplicate_keys() -> None:
    """Lookup is first-match over pairs."""
    cfg = RawConfig(((DEPS, [Atom("a")]), (DEPS, [Atom("b")])))

    assert cfg.get(DEPS) == [Atom("a")]


@pytest.mark.os_agnostic
def test_raw_config_get_returns_default_for_missing_key() -> None:
    """A missing key yields the given default."""
    assert EMPTY_CONFIG.get("deps", []) == []


@pytest.mark.os_agnostic
def test_raw_config_put_overwrites_first_occurrence_in_place() -> None:
    """put replaces the first pair where it stands and keeps later duplicates."""
    cfg = RawConfig(((Atom("erl_opts"), []), (DEPS, [Atom("a")]), (DEPS, [Atom("b")])))

    updated = cfg.put("deps", [Atom("c")])

    assert updated.terms == ((Atom("erl_opts"), []), (DEPS, [Atom("c")]), (DEPS, [Atom("b")]))


@pytest.mark.os_agnostic
def test_raw_config_put_appends_new_key() -> None:
    """put appends a pair when the key is absent."""
    cfg = RawConfig(((Atom("erl_opts"), []),))

    assert cfg.put("deps", []).keys() == (Atom("erl_opts"), DEPS)


@pytest.mark.os_agnostic
def test_raw_config_put_leaves_original_untouched() -> None:
    """RawConfig is immutable; put returns a copy."""
    cfg = RawConfig(((DEPS, []),))

    cfg.put("deps", [Atom("x")])

    assert cfg.get("deps") == []


@pytest.mark.os_agnostic
def test_raw_config_put_keeps_directory() -> None:
    """The directory tag survives updates."""
    cfg = RawConfig(directory=Path("/repo"))

    assert cfg.put("deps", []).directory == Path("/repo")


@pytest.mark.os_agnostic
def test_raw_config_non_pair_terms_are_kept_but_not_addressable() -> None:
    """Terms that are not pairs stay in order and never match a key."""
    cfg = RawConfig((Atom("stray"), (DEPS, []), (Atom("deps"), 1, 2)))

    assert cfg.keys() == (DEPS,)
    assert len(cfg) == 3
    assert "stray" not in cfg
    assert "deps" in cfg


@pytest.mark.os_agnostic
def test_raw_config_from_terms_rejects_non_list() -> None:
    """Only a list of terms is a configuration."""
    with pytest.raises(TypeError):
        RawConfig.from_terms(Atom("ok"))  # type: ignore[arg-type]


@pytest.mark.os_agnostic
def test_raw_config_to_terms_returns_fresh_list() -> None:
    """to_terms hands out a list the caller may mutate."""
    cfg = RawConfig(((DEPS, []),))
    terms = cfg.to_terms()
    terms.clear()

    assert len(cfg) == 1
