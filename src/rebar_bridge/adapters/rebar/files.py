"""Read ``rebar.config`` files the way ``file:consult/1`` does."""

from __future__ import annotations

import logging
from pathlib import Path

from ...domain.errors import ConfigParseError, TermSyntaxError
from ...domain.term_syntax import parse_terms
from ...domain.terms import Term

logger = logging.getLogger(__name__)


def _decode(raw: bytes) -> str:
    # Erlang reads source files as UTF-8 and falls back to Latin-1.
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def read_rebar_terms(path: Path) -> list[Term]:
    """Return the dotted terms stored in *path*.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigParseError: If *path* cannot be read or holds invalid terms.
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        raise
    except OSError as exc:
        raise ConfigParseError(path, exc.strerror or str(exc)) from exc

    try:
        terms = parse_terms(_decode(raw))
    except TermSyntaxError as exc:
        raise ConfigParseError(path, str(exc)) from exc
    logger.debug("Read rebar config", extra={"path": str(path), "terms": len(terms)})
    return terms


__all__ = ["read_rebar_terms"]
