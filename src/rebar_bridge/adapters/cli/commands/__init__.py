"""Subcommands registered on the root ``rebar-bridge`` group.

Contents:
    * :mod:`.info` - Package metadata
    * :mod:`.config` - The tool's own merged settings
    * :mod:`.deps_cmd` - Dependency translation over a project tree
    * :mod:`.show_config_cmd` - Effective ``rebar.config`` terms
    * :mod:`.resolve_cmd` - Locating ``rebar`` and ``rebar3``
"""

from __future__ import annotations

from .config import cli_config
from .deps_cmd import cli_deps
from .info import cli_info
from .resolve_cmd import cli_local_path, cli_resolve
from .show_config_cmd import cli_show_config

__all__ = [
    "cli_config",
    "cli_deps",
    "cli_info",
    "cli_local_path",
    "cli_resolve",
    "cli_show_config",
]
