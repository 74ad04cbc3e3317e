"""Adapters layer: the outside world as seen by the translator.

Contents:
    * :mod:`.config` - Layered settings, ``--set`` handling, and display
    * :mod:`.logging` - lib_log_rich runtime setup
    * :mod:`.rebar` - Reading ``rebar.config``, running ``erl``, host lookups
    * :mod:`.memory` - In-memory stand-ins used by tests
    * :mod:`.cli` - rich-click command line
"""

from __future__ import annotations

__all__: list[str] = []
