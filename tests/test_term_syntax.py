"""Reading and writing ``rebar.config`` term text."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rebar_bridge.domain.errors import TermSyntaxError
from rebar_bridge.domain.term_syntax import format_term, format_terms, parse_term, parse_terms
from rebar_bridge.domain.terms import Atom

SAMPLE_CONFIG = """\
%% Project configuration
{erl_opts, [debug_info, {d, 'DEBUG', true}]}.
{deps, [
    cowboy,
    {jsx, "2\\\\.[0-9]+"},
    {ranch, ".*", {git, "https://github.com/ninenines/ranch.git", {tag, "1.7.1"}}},
    {lager, "3.*", {git, "git://github.com/basho/lager.git", ""}, [raw]}
]}.
{sub_dirs, ["apps/*", "rel"]}.
"""


@pytest.mark.os_agnostic
def test_parse_terms_reads_a_realistic_config() -> None:
    """A typical rebar.config parses into its three top-level pairs."""
    terms = parse_terms(SAMPLE_CONFIG)

    assert [term[0] for term in terms] == [Atom("erl_opts"), Atom("deps"), Atom("sub_dirs")]  # type: ignore[index]
    deps = terms[1][1]  # type: ignore[index]
    assert deps[1] == (Atom("jsx"), "2\\.[0-9]+")
    assert deps[3][3] == [Atom("raw")]


@pytest.mark.os_agnostic
def test_parse_terms_reads_quoted_atoms_and_escapes() -> None:
    """Quoted atoms and string escapes decode."""
    assert parse_terms("{'Quoted atom', \"a\\tb\\x{41}\"}.") == [(Atom("Quoted atom"), "a\tbA")]


@pytest.mark.os_agnostic
def test_adjacent_string_literals_concatenate() -> None:
    """``"a" "b"`` is one string."""
    assert parse_term('"https://" "example.com"') == "https://example.com"


@pytest.mark.os_agnostic
def test_numbers_in_all_notations() -> None:
    """Integers, based integers, separators, floats, signs, and char literals."""
    assert parse_terms("[16#ff, 2#1010, 1_000, -3, 2.5e3, $a, $\\n].") == [[255, 10, 1000, -3, 2500.0, 97, 10]]


@pytest.mark.os_agnostic
def test_binaries_and_maps() -> None:
    """Binaries made of segments and maps parse."""
    assert parse_term('<<"ab", 67, "é"/utf8>>') == b"abC\xc3\xa9"
    assert parse_term("#{key => <<>>, 1 => []}") == {Atom("key"): b"", 1: []}


@pytest.mark.os_agnostic
def test_map_keys_holding_lists_are_read_as_tuples() -> None:
    """``#{[a] => 1}`` is valid Erlang; list keys become hashable tuples."""
    assert parse_terms("{relx, #{[a] => 1, {b, [c]} => 2}}.") == [
        (Atom("relx"), {(Atom("a"),): 1, (Atom("b"), (Atom("c"),)): 2})
    ]


@pytest.mark.os_agnostic
def test_list_with_tail() -> None:
    """Proper ``[H | T]`` lists flatten."""
    assert parse_term("[a | [b, c]]") == [Atom("a"), Atom("b"), Atom("c")]


@pytest.mark.os_agnostic
def test_empty_document_has_no_terms() -> None:
    """Comments and blanks only yield nothing."""
    assert parse_terms("% nothing here\n\n") == []


@pytest.mark.os_agnostic
def test_missing_dot_is_a_syntax_error() -> None:
    """Every term must be terminated by a dot."""
    with pytest.raises(TermSyntaxError, match="missing '.'"):
        parse_terms("{deps, []}")


@pytest.mark.os_agnostic
def test_variables_are_rejected_with_line_number() -> None:
    """Unbound variables are not data and report their line."""
    with pytest.raises(TermSyntaxError) as exc:
        parse_terms("{deps, []}.\n{sub_dirs, Dirs}.")

    assert exc.value.line == 2


@pytest.mark.os_agnostic
def test_unbalanced_brackets_are_rejected() -> None:
    """A tuple closed by a bracket does not parse."""
    with pytest.raises(TermSyntaxError):
        parse_terms("{deps, [}.")


@pytest.mark.os_agnostic
def test_improper_list_is_rejected() -> None:
    """``[a | b]`` has no Python counterpart."""
    with pytest.raises(TermSyntaxError, match="improper"):
        parse_term("[a | b]")


@pytest.mark.os_agnostic
def test_parse_term_rejects_trailing_input() -> None:
    """parse_term reads exactly one term."""
    with pytest.raises(TermSyntaxError):
        parse_term("a. b.")


@pytest.mark.os_agnostic
def test_format_term_quotes_reserved_and_capitalised_atoms() -> None:
    """Atoms that would not read back as atoms are quoted."""
    assert format_term(Atom("end")) == "'end'"
    assert format_term(Atom("Mixed")) == "'Mixed'"
    assert format_term(Atom("plain_atom@host")) == "plain_atom@host"


@pytest.mark.os_agnostic
def test_format_terms_writes_one_dotted_term_per_line() -> None:
    """format_terms produces a consult-style document."""
    text = format_terms([(Atom("deps"), [Atom("jsx")]), (Atom("sub_dirs"), [])])

    assert text == "{deps, [jsx]}.\n{sub_dirs, []}.\n"


@pytest.mark.os_agnostic
def test_format_term_rejects_unrepresentable_values() -> None:
    """Objects without an Erlang form raise TypeError."""
    with pytest.raises(TypeError):
        format_term(object())


_atoms = st.from_regex(r"[a-z][a-z0-9_]{0,8}", fullmatch=True).map(Atom) | st.text(max_size=6).map(Atom)
_leaves = (
    _atoms
    | st.text(max_size=12)
    | st.integers(min_value=-(10**12), max_value=10**12)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.binary(max_size=8)
)
_terms = st.recursive(
    _leaves,
    lambda children: (
        st.lists(children, max_size=4).map(tuple)
        | st.lists(children, max_size=4)
        | st.dictionaries(_atoms, children, max_size=3)
    ),
    max_leaves=12,
)


@pytest.mark.os_agnostic
@given(term=_terms)
@settings(max_examples=200)
def test_formatted_terms_parse_back_to_themselves(term: object) -> None:
    """Any supported term survives format_term followed by parse_terms."""
    assert parse_terms(format_term(term) + ".") == [term]
