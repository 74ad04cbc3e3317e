"""Helpers shared by the rebar commands.

Contents:
    * :func:`make_loader` - ``load_config`` bound to the run's services.
    * :func:`app_name_for` - Application name used for override matching.
    * :func:`exit_on_config_errors` - Turn fatal translation errors into exit codes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import partial
from pathlib import Path

import rich_click as click
from pydantic import ValidationError

from ....application.loader import load_config
from ....domain.errors import ConfigParseError, InvalidDependencyError, InvalidSubDirError, PatternCompileError
from ....domain.terms import RawConfig
from ..context import CLIContext
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def _report_to_stderr(line: str) -> None:
    click.echo(line, err=True)


def make_loader(cli_ctx: CLIContext) -> Callable[[Path], RawConfig]:
    """Return a one-argument loader wired to the services of this run."""
    services = cli_ctx.services
    return partial(
        load_config,
        read_terms=services.read_terms,
        evaluate_script=services.make_script_evaluator(cli_ctx.settings.erl_command),
        is_regular_file=services.is_regular_file,
        report=_report_to_stderr,
    )


def app_name_for(config: RawConfig, app: str | None, default_app: str) -> str:
    """Pick the application name for *config*.

    ``--app`` wins, then the configured default, then the directory name.

    Example:
        >>> app_name_for(RawConfig(directory=Path("/src/cowboy")), None, "")
        'cowboy'
        >>> app_name_for(RawConfig(directory=Path("/src/cowboy")), "ranch", "jsx")
        'ranch'
    """
    if app:
        return app
    if default_app:
        return default_app
    return config.directory.name if config.directory is not None else ""


def absolute_directory(directory: str) -> Path:
    """Anchor *directory* at the working directory without resolving symlinks."""
    return Path(directory).absolute()


@contextmanager
def exit_on_config_errors(command: str) -> Iterator[None]:
    """Convert fatal configuration errors into ``SystemExit(CONFIG_ERROR)``.

    Raises:
        SystemExit: With :attr:`ExitCode.CONFIG_ERROR` for unreadable
            ``rebar.config`` files, bad requirements, unknown dependency
            shapes, non-text ``sub_dirs`` entries, and invalid ``[rebar_bridge]`` settings.
    """
    try:
        yield
    except (ConfigParseError, PatternCompileError, InvalidDependencyError, InvalidSubDirError, ValidationError) as exc:
        logger.error("Configuration error", extra={"command": command, "error": str(exc)})
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc


__all__ = ["absolute_directory", "app_name_for", "exit_on_config_errors", "make_loader"]
