"""Typed view of the ``[rebar_bridge]`` settings section."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, field_validator

SECTION = "rebar_bridge"


class BridgeSettings(BaseModel):
    """Validated, immutable settings of the translator.

    Attributes:
        home: Directory caching the local ``rebar`` and ``rebar3`` copies.
        erl_command: Executable used to evaluate ``rebar.config.script``.
        default_app: Application name used when none is given on the
            command line; empty means the name of the walked directory.

    Example:
        >>> settings = BridgeSettings(home="/opt/mix")
        >>> settings.home.as_posix()
        '/opt/mix'
        >>> settings.erl_command
        'erl'
    """

    model_config = ConfigDict(frozen=True)

    home: Path = Path("~/.mix").expanduser()
    erl_command: str = "erl"
    default_app: str = ""

    @field_validator("home", mode="before")
    @classmethod
    def _expand_home(cls, v: Any) -> Any:
        """Expand ``~`` and treat empty values as the default.

        Examples:
            >>> BridgeSettings._expand_home("~/x") == Path("~/x").expanduser()
            True
            >>> BridgeSettings._expand_home("") == Path("~/.mix").expanduser()
            True
        """
        if isinstance(v, str) and not v.strip():
            return Path("~/.mix").expanduser()
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @field_validator("erl_command")
    @classmethod
    def _require_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("erl_command must not be empty")
        return v.strip()


def load_bridge_settings(config_dict: Mapping[str, Any]) -> BridgeSettings:
    """Build :class:`BridgeSettings` from the merged configuration dictionary.

    A missing section yields the defaults.

    Raises:
        pydantic.ValidationError: If a value has the wrong type.

    Example:
        >>> load_bridge_settings({"rebar_bridge": {"erl_command": "erl26"}}).erl_command
        'erl26'
        >>> load_bridge_settings({}).default_app
        ''
    """
    section: object = config_dict.get(SECTION, {})
    return BridgeSettings.model_validate(cast("dict[str, Any]", section) if section else {})


__all__ = ["BridgeSettings", "SECTION", "load_bridge_settings"]
