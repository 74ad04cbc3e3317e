"""Static package metadata and the ``info`` printout."""

from __future__ import annotations

name = "rebar_bridge"
title = "Translate legacy rebar build configuration into Mix dependency descriptors"
version = "0.1.0"
homepage = "https://github.com/rebar-bridge/rebar_bridge"
author = "rebar_bridge contributors"
author_email = "maintainers@rebar-bridge.invalid"
shell_command = "rebar-bridge"

# lib_layered_config coordinates: /etc/xdg/<slug>, ~/.config/<slug>, <VENDOR>/<APP> on Windows
LAYEREDCONF_VENDOR = "rebar-bridge"
LAYEREDCONF_APP = "rebar-bridge"
LAYEREDCONF_SLUG = "rebar-bridge"


def print_info() -> None:
    """Print the package metadata as an aligned key/value block.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for rebar_bridge:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
