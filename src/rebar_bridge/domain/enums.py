"""Type-safe domain enums for output formats, rebar managers and source refs."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration and dependency display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable output (tables, Erlang term text).
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class RebarManager(str, Enum):
    """The rebar generations a host package manager can delegate builds to.

    Example:
        >>> RebarManager("rebar3").value
        'rebar3'
        >>> [m.value for m in RebarManager]
        ['rebar', 'rebar3']
    """

    REBAR = "rebar"
    REBAR3 = "rebar3"


class RefKind(str, Enum):
    """How a source dependency pins the revision to fetch.

    Attributes:
        BRANCH: Follow a branch (``HEAD`` when the ref is an empty string).
        TAG: A tag name.
        REF: An exact revision, also used for bare ref values.

    Example:
        >>> RefKind.TAG == "tag"
        True
    """

    BRANCH = "branch"
    TAG = "tag"
    REF = "ref"


__all__ = [
    "OutputFormat",
    "RebarManager",
    "RefKind",
]
