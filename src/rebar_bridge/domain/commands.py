"""Invocation strings for rebar executables.

On Windows an escript cannot be executed directly; it has to be handed to
``escript.exe`` unless it already ships as a ``.cmd`` wrapper.
"""

from __future__ import annotations


def wrap_command(path: str | None, *, windows: bool) -> str | None:
    """Return the string used to invoke the executable at *path*.

    Example:
        >>> wrap_command("/usr/bin/rebar3", windows=False)
        '/usr/bin/rebar3'
        >>> wrap_command("C:/mix/rebar3", windows=True)
        'escript.exe "C:/mix/rebar3"'
        >>> wrap_command("C:/tools/rebar3.cmd", windows=True)
        'C:/tools/rebar3.cmd'
        >>> wrap_command(None, windows=True) is None
        True
    """
    if path is None:
        return None
    if windows and not path.endswith(".cmd"):
        return f'escript.exe "{path}"'
    return path


__all__ = ["wrap_command"]
