"""``--set SECTION.KEY=VALUE`` options merged over the loaded settings.

Values are decoded as JSON when possible (``true``, ``42``, ``["a"]``) and
kept as plain text otherwise, so ``--set rebar_bridge.erl_command=erl23``
and ``--set lib_log_rich.console_level=DEBUG`` both work without quoting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

SetValue = str | int | float | bool | None | list[object] | dict[str, object]


@dataclass(frozen=True, slots=True)
class SetOption:
    """One ``--set`` option split into section, nested key path, and value."""

    section: str
    key_path: tuple[str, ...]
    value: SetValue


def decode_value(raw: str) -> SetValue:
    """Decode *raw* as JSON, falling back to the text itself.

    Examples:
        >>> decode_value("false"), decode_value("3"), decode_value("erl")
        (False, 3, 'erl')
        >>> decode_value("")
        ''
    """
    if not raw:
        return ""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def parse_set_option(raw: str) -> SetOption:
    """Split ``SECTION.KEY[.SUB...]=VALUE`` at the first ``=`` and the dots before it.

    Raises:
        ValueError: If ``=`` is missing, there is no dot, or a part is empty.

    Examples:
        >>> parse_set_option("rebar_bridge.home=/opt/mix")
        SetOption(section='rebar_bridge', key_path=('home',), value='/opt/mix')
        >>> parse_set_option("lib_log_rich.payload_limits.max_chars=512").key_path
        ('payload_limits', 'max_chars')
    """
    path, sep, value = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    if "." not in path:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    section, *keys = path.split(".")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(keys):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")
    return SetOption(section, tuple(keys), decode_value(value))


def _insert(tree: dict[str, dict[str, object]], option: SetOption) -> None:
    node: dict[str, object] = tree.setdefault(option.section, {})
    for key in option.key_path[:-1]:
        child = node.setdefault(key, {})
        if not isinstance(child, dict):
            raise TypeError(f"Expected dict at key {key!r}, got {type(child).__name__}")
        node = cast("dict[str, object]", child)
    node[option.key_path[-1]] = option.value


def merge_set_options(config: Config, raw_options: tuple[str, ...]) -> Config:
    """Return *config* with every ``--set`` option deep-merged on top.

    Raises:
        ValueError: If an option is malformed.

    Examples:
        >>> cfg = Config({"rebar_bridge": {"erl_command": "erl"}}, {})
        >>> merge_set_options(cfg, ("rebar_bridge.erl_command=erl26",))["rebar_bridge"]["erl_command"]
        'erl26'
        >>> merge_set_options(cfg, ()) is cfg
        True
    """
    if not raw_options:
        return config
    tree: dict[str, dict[str, object]] = {}
    for raw in raw_options:
        _insert(tree, parse_set_option(raw))
    return config.with_overrides(tree)


__all__ = ["SetOption", "SetValue", "decode_value", "merge_set_options", "parse_set_option"]
