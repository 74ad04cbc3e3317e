"""``resolve`` and ``local-path`` commands for the rebar executables.

Contents:
    * :func:`cli_resolve` - Print how to invoke rebar or rebar3.
    * :func:`cli_local_path` - Print where the local copy is expected.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from ....application.resolver import local_command_path, resolve_command
from ....domain.enums import RebarManager
from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode
from ._shared import exit_on_config_errors

logger = logging.getLogger(__name__)

_MANAGER_CHOICES = [m.value for m in RebarManager]


@click.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("manager", type=click.Choice(_MANAGER_CHOICES, case_sensitive=False), default="rebar3")
@click.pass_context
def cli_resolve(ctx: click.Context, manager: str) -> None:
    """Print the command used to run MANAGER (default: rebar3).

    A copy on PATH is preferred over the local copy in the configured home
    directory. Exits with status 2 when neither exists.
    """
    cli_ctx = get_cli_context(ctx)
    tool = RebarManager(manager.lower())

    with lib_log_rich.runtime.bind(job_id="cli-resolve", extra={"command": "resolve", "manager": tool.value}):
        with exit_on_config_errors("resolve"):
            home = cli_ctx.settings.home
        services = cli_ctx.services
        command = resolve_command(
            tool,
            home=home,
            find_executable=services.find_executable,
            is_regular_file=services.is_regular_file,
            is_windows_family=services.is_windows_family,
        )
        if command is None:
            logger.warning("No %s executable found", tool.value, extra={"home": str(home)})
            expected = local_command_path(tool, home=home)
            click.echo(f"Error: {tool.value} not found on PATH or at {expected}", err=True)
            raise SystemExit(ExitCode.FILE_NOT_FOUND)
        click.echo(command)


@click.command("local-path", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("manager", type=click.Choice(_MANAGER_CHOICES, case_sensitive=False), default="rebar3")
@click.pass_context
def cli_local_path(ctx: click.Context, manager: str) -> None:
    """Print where the local copy of MANAGER lives (it may not exist yet)."""
    cli_ctx = get_cli_context(ctx)
    tool = RebarManager(manager.lower())
    with lib_log_rich.runtime.bind(job_id="cli-local-path", extra={"command": "local-path", "manager": tool.value}):
        with exit_on_config_errors("local-path"):
            home = cli_ctx.settings.home
        click.echo(str(local_command_path(tool, home=home)))


__all__ = ["cli_local_path", "cli_resolve"]
