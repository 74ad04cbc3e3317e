"""Public package surface for the rebar configuration translator.

Routes imports through the architectural layers:
- Domain exports: terms, overrides, dependency translation
- Application exports: directory loading and walking
- Composition exports: wired adapter services
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application.loader import load_config
from .application.walker import walk

# Composition exports (wired adapters)
from .composition import build_production, get_config

# Domain exports
from .domain.dependencies import DependencyDescriptor, translate_dependencies
from .domain.overrides import apply_overrides, parse_directives
from .domain.terms import Atom, RawConfig

__all__ = [
    "Atom",
    "DependencyDescriptor",
    "RawConfig",
    "apply_overrides",
    "build_production",
    "get_config",
    "load_config",
    "parse_directives",
    "print_info",
    "translate_dependencies",
    "walk",
]
