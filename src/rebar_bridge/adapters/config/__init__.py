"""Configuration adapter built on lib_layered_config.

Contents:
    * :mod:`.loader` - Layered configuration loading with caching
    * :mod:`.display` - Configuration display in human/JSON formats
    * :mod:`.set_options` - ``--set SECTION.KEY=VALUE`` parsing and merging
    * :mod:`.settings` - Validated ``[rebar_bridge]`` settings
"""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path
from .set_options import merge_set_options, parse_set_option
from .settings import BridgeSettings, load_bridge_settings

__all__ = [
    "BridgeSettings",
    "display_config",
    "get_config",
    "get_default_config_path",
    "load_bridge_settings",
    "merge_set_options",
    "parse_set_option",
]
