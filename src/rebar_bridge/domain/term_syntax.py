"""Read and write Erlang term text as found in ``rebar.config`` files.

Purpose
-------
``rebar.config`` is a sequence of Erlang terms, each terminated by a dot,
the format ``file:consult/1`` reads. This module turns that text into the
Python values described in :mod:`rebar_bridge.domain.terms` and renders
Python values back into term text (used to hand ``CONFIG`` to a script
evaluator and to display configurations).

Contents
--------
* ``parse_terms`` - parse a whole consult-style document.
* ``parse_term`` - parse exactly one term (trailing dot optional).
* ``format_term`` / ``format_terms`` - render terms as Erlang source.

Supported syntax: atoms (bare and quoted), strings with escapes (adjacent
literals concatenate), character literals, integers (``16#ff``, ``1_000``),
floats, tuples, proper lists (including ``[H | T]`` with a list tail),
binaries made of string and byte segments, maps, and ``%`` comments.
Variables, pids, references and funs are rejected.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import TermSyntaxError
from .terms import Atom, Term

_TOKEN_SPEC: tuple[tuple[str, str], ...] = (
    ("NEWLINE", r"\n"),
    ("WS", r"[ \t\r\f\v]+"),
    ("COMMENT", r"%[^\n]*"),
    ("FLOAT", r"\d(?:_?\d)*\.\d(?:_?\d)*(?:[eE][+-]?\d+)?"),
    ("BASED", r"\d{1,2}#[0-9a-zA-Z](?:_?[0-9a-zA-Z])*"),
    ("INTEGER", r"\d(?:_?\d)*"),
    ("CHAR", r"\$(?:\\(?:[0-7]{1,3}|x[0-9a-fA-F]{2}|x\{[0-9a-fA-F]+\}|\^[\s\S]|[\s\S])|[\s\S])"),
    ("STRING", r'"(?:\\[\s\S]|[^"\\])*"'),
    ("QATOM", r"'(?:\\[\s\S]|[^'\\])*'"),
    ("ATOM", r"[a-z][A-Za-z0-9_@]*"),
    ("VAR", r"[A-Z_][A-Za-z0-9_@]*"),
    ("PUNCT", r"<<|>>|#\{|=>|[{}\[\],|/]"),
    ("DOT", r"\.(?=\s|%|\Z)"),
    ("SIGN", r"[-+]"),
    ("MISMATCH", r"[\s\S]"),
)
_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC))
_ESCAPE_RE = re.compile(r"\\([0-7]{1,3}|x[0-9a-fA-F]{2}|x\{[0-9a-fA-F]+\}|\^[\s\S]|[\s\S])")
_BARE_ATOM_RE = re.compile(r"[a-z][A-Za-z0-9_@]*\Z")

_SIMPLE_ESCAPES: dict[str, str] = {
    "b": "\b",
    "d": "\x7f",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "s": " ",
    "t": "\t",
    "v": "\v",
}

_RESERVED_WORDS = frozenset(
    {
        "after", "and", "andalso", "band", "begin", "bnot", "bor", "bsl", "bsr", "bxor",
        "case", "catch", "cond", "div", "else", "end", "fun", "if", "let", "maybe", "not",
        "of", "or", "orelse", "receive", "rem", "try", "when", "xor",
    }
)  # fmt: skip


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    text: str
    line: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    line = 1
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup or "MISMATCH"
        value = match.group()
        if kind == "MISMATCH":
            raise TermSyntaxError(line, f"illegal character {value!r}")
        if kind not in ("NEWLINE", "WS", "COMMENT"):
            tokens.append(_Token(kind, value, line))
        line += value.count("\n")
    return tokens


def _unescape(body: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        seq = match.group(1)
        if seq[0] in "01234567":
            return chr(int(seq, 8))
        if seq.startswith("x{"):
            return chr(int(seq[2:-1], 16))
        if seq[0] == "x" and len(seq) == 3:
            return chr(int(seq[1:], 16))
        if seq[0] == "^" and len(seq) == 2:
            return chr(ord(seq[1]) & 31)
        return _SIMPLE_ESCAPES.get(seq, seq)

    return _ESCAPE_RE.sub(_replace, body)


class _Parser:
    def __init__(self, tokens: list[_Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    # -- cursor helpers -------------------------------------------------

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _peek(self) -> _Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _last_line(self) -> int:
        return self._tokens[-1].line if self._tokens else 1

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise TermSyntaxError(self._last_line(), "unexpected end of input")
        self._pos += 1
        return token

    def _check(self, text: str) -> bool:
        token = self._peek()
        return token is not None and token.kind in ("PUNCT", "DOT") and token.text == text

    def _expect(self, text: str) -> _Token:
        token = self._next()
        if token.text != text or token.kind not in ("PUNCT", "DOT"):
            raise TermSyntaxError(token.line, f"syntax error before: {token.text!r}")
        return token

    def expect_dot(self) -> None:
        token = self._peek()
        if token is None:
            raise TermSyntaxError(self._last_line(), "premature end, missing '.' after term")
        self._expect(".")

    def skip_optional_dot(self) -> None:
        if self._check("."):
            self._pos += 1

    # -- grammar --------------------------------------------------------

    def term(self) -> Term:
        token = self._next()
        kind = token.kind
        if kind == "INTEGER":
            return int(token.text.replace("_", ""))
        if kind == "BASED":
            return _parse_based(token)
        if kind == "FLOAT":
            return float(token.text.replace("_", ""))
        if kind == "SIGN":
            return self._signed_number(token)
        if kind == "CHAR":
            return ord(_unescape(token.text[1:]))
        if kind == "STRING":
            return self._string(token)
        if kind == "QATOM":
            return Atom(_unescape(token.text[1:-1]))
        if kind == "ATOM":
            return Atom(token.text)
        if kind == "VAR":
            raise TermSyntaxError(token.line, f"variable {token.text!r} is unbound")
        if kind == "PUNCT":
            if token.text == "{":
                return tuple(self._elements("}"))
            if token.text == "[":
                return self._list()
            if token.text == "<<":
                return self._binary()
            if token.text == "#{":
                return self._map()
        raise TermSyntaxError(token.line, f"syntax error before: {token.text!r}")

    def _signed_number(self, sign: _Token) -> Term:
        operand = self._next()
        if operand.kind == "INTEGER":
            value: int | float = int(operand.text.replace("_", ""))
        elif operand.kind == "BASED":
            value = _parse_based(operand)
        elif operand.kind == "FLOAT":
            value = float(operand.text.replace("_", ""))
        elif operand.kind == "CHAR":
            value = ord(_unescape(operand.text[1:]))
        else:
            raise TermSyntaxError(sign.line, f"syntax error before: {operand.text!r}")
        return -value if sign.text == "-" else value

    def _string(self, first: _Token) -> str:
        parts = [_unescape(first.text[1:-1])]
        while (token := self._peek()) is not None and token.kind == "STRING":
            self._pos += 1
            parts.append(_unescape(token.text[1:-1]))
        return "".join(parts)

    def _elements(self, closing: str) -> list[Term]:
        items: list[Term] = []
        if self._check(closing):
            self._pos += 1
            return items
        while True:
            items.append(self.term())
            if self._check(","):
                self._pos += 1
                continue
            self._expect(closing)
            return items

    def _list(self) -> list[Term]:
        items: list[Term] = []
        if self._check("]"):
            self._pos += 1
            return items
        while True:
            items.append(self.term())
            if self._check(","):
                self._pos += 1
                continue
            if self._check("|"):
                bar = self._next()
                tail = self.term()
                self._expect("]")
                if isinstance(tail, str):
                    return items + [ord(ch) for ch in tail]
                if isinstance(tail, list):
                    return items + tail
                raise TermSyntaxError(bar.line, "improper lists are not supported")
            self._expect("]")
            return items

    def _binary(self) -> bytes:
        chunks: list[bytes] = []
        if self._check(">>"):
            self._pos += 1
            return b""
        while True:
            chunks.append(self._segment())
            if self._check(","):
                self._pos += 1
                continue
            self._expect(">>")
            return b"".join(chunks)

    def _segment(self) -> bytes:
        token = self._next()
        if token.kind == "STRING":
            value: str | int = self._string(token)
        elif token.kind in ("INTEGER", "BASED", "CHAR"):
            self._pos -= 1
            value = self.term()  # type: ignore[assignment]
        else:
            raise TermSyntaxError(token.line, f"syntax error before: {token.text!r}")

        encoding = "latin-1"
        if self._check("/"):
            self._pos += 1
            spec = self._next()
            if spec.kind != "ATOM" or spec.text not in ("utf8", "binary", "integer"):
                raise TermSyntaxError(spec.line, f"unsupported binary segment type {spec.text!r}")
            if spec.text == "utf8":
                encoding = "utf-8"

        if isinstance(value, str):
            try:
                return value.encode(encoding)
            except UnicodeEncodeError as exc:
                raise TermSyntaxError(token.line, "character out of byte range in binary, use /utf8") from exc
        if encoding == "utf-8":
            return chr(value).encode("utf-8")
        return bytes([value & 0xFF])

    def _map(self) -> dict[Term, Term]:
        result: dict[Term, Term] = {}
        if self._check("}"):
            self._pos += 1
            return result
        while True:
            key = self.term()
            self._expect("=>")
            value = self.term()
            result[_hashable_key(key)] = value
            if self._check(","):
                self._pos += 1
                continue
            self._expect("}")
            return result


def _hashable_key(key: Term) -> Term:
    """Turn list keys (at any depth) into tuples so they can key a dict.

    Example:
        >>> _hashable_key([Atom("a"), [1]])
        (Atom('a'), (1,))
    """
    if isinstance(key, (list, tuple)):
        return tuple(_hashable_key(item) for item in key)
    if isinstance(key, dict):
        return tuple((_hashable_key(k), _hashable_key(v)) for k, v in key.items())
    return key


def _parse_based(token: _Token) -> int:
    base_text, digits = token.text.split("#", 1)
    base = int(base_text)
    if not 2 <= base <= 36:
        raise TermSyntaxError(token.line, f"illegal base {base}")
    try:
        return int(digits.replace("_", ""), base)
    except ValueError as exc:
        raise TermSyntaxError(token.line, f"illegal integer {token.text!r}") from exc


def parse_terms(text: str) -> list[Term]:
    """Parse a consult-style document into its list of terms.

    Raises:
        TermSyntaxError: On any lexical or grammatical error.

    Example:
        >>> parse_terms('{deps, [cowboy, {jsx, "2.*"}]}.  % comment\\n{sub_dirs, ["apps/*"]}.')
        [(Atom('deps'), [Atom('cowboy'), (Atom('jsx'), '2.*')]), (Atom('sub_dirs'), ['apps/*'])]
        >>> parse_terms("")
        []
    """
    parser = _Parser(_tokenize(text))
    terms: list[Term] = []
    while not parser.at_end():
        terms.append(parser.term())
        parser.expect_dot()
    return terms


def parse_term(text: str) -> Term:
    """Parse exactly one term; a trailing dot is accepted but not required.

    Example:
        >>> parse_term("{git, <<\\"https://h/x.git\\">>, {tag, \\"v1\\"}}")
        (Atom('git'), b'https://h/x.git', (Atom('tag'), 'v1'))
        >>> parse_term("16#ff.")
        255
    """
    parser = _Parser(_tokenize(text))
    term = parser.term()
    parser.skip_optional_dot()
    if not parser.at_end():
        token = parser._next()
        raise TermSyntaxError(token.line, f"syntax error before: {token.text!r}")
    return term


def _escape_char(ch: str, quote: str) -> str:
    if ch == "\\":
        return "\\\\"
    if ch == quote:
        return "\\" + quote
    if ch == "\n":
        return "\\n"
    if ch == "\t":
        return "\\t"
    if ch == "\r":
        return "\\r"
    code = ord(ch)
    if code < 0x20 or code >= 0x7F:
        return f"\\x{{{code:X}}}"
    return ch


def _format_atom(atom: Atom) -> str:
    if _BARE_ATOM_RE.match(atom.name) and atom.name not in _RESERVED_WORDS:
        return atom.name
    return "'" + "".join(_escape_char(ch, "'") for ch in atom.name) + "'"


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise TypeError(f"{value!r} has no Erlang representation")
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        if "." not in mantissa:
            mantissa += ".0"
        return f"{mantissa}e{exponent}"
    return text


def format_term(term: Term) -> str:
    """Render a Python term as Erlang source text.

    Raises:
        TypeError: For values with no Erlang term equivalent.

    Example:
        >>> format_term((Atom("deps"), [Atom("cowboy"), (Atom("jsx"), "2.*")]))
        '{deps, [cowboy, {jsx, "2.*"}]}'
        >>> format_term(Atom("Quoted Atom"))
        "'Quoted Atom'"
        >>> format_term({Atom("k"): b"v"})
        '#{k => <<"v">>}'
    """
    if isinstance(term, Atom):
        return _format_atom(term)
    if isinstance(term, bool):
        return "true" if term else "false"
    if term is None:
        return "undefined"
    if isinstance(term, int):
        return str(term)
    if isinstance(term, float):
        return _format_float(term)
    if isinstance(term, str):
        return '"' + "".join(_escape_char(ch, '"') for ch in term) + '"'
    if isinstance(term, bytes):
        if not term:
            return "<<>>"
        return '<<"' + "".join(_escape_char(chr(b), '"') for b in term) + '">>'
    if isinstance(term, tuple):
        return "{" + ", ".join(format_term(item) for item in term) + "}"
    if isinstance(term, list):
        return "[" + ", ".join(format_term(item) for item in term) + "]"
    if isinstance(term, dict):
        pairs = ", ".join(f"{format_term(k)} => {format_term(v)}" for k, v in term.items())
        return "#{" + pairs + "}"
    raise TypeError(f"{term!r} has no Erlang representation")


def format_terms(terms: Iterable[Term]) -> str:
    """Render terms as a consult-style document, one dotted term per line.

    Example:
        >>> print(format_terms([(Atom("deps"), []), (Atom("sub_dirs"), ["apps/*"])]), end="")
        {deps, []}.
        {sub_dirs, ["apps/*"]}.
    """
    return "".join(f"{format_term(term)}.\n" for term in terms)


__all__ = [
    "format_term",
    "format_terms",
    "parse_term",
    "parse_terms",
]
