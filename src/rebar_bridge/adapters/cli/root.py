"""Root ``rebar-bridge`` command group.

Loads the layered settings once, applies ``--set`` options, starts logging,
and hands a :class:`~.context.CLIContext` to the subcommands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from ... import __init__conf__
from ..config.set_options import merge_set_options
from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from ...composition import AppServices


def _with_set_options(config: Config, set_options: tuple[str, ...]) -> Config:
    """Merge ``--set`` options into *config*.

    Raises:
        click.UsageError: If an option is malformed.
    """
    try:
        return merge_set_options(config, set_options)
    except (TypeError, ValueError) as exc:
        raise click.UsageError(str(exc)) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", is_flag=True, default=False, help="Show full Python traceback on errors")
@click.option("--profile", type=str, default=None, help="Load settings from a named profile (e.g. 'ci')")
@click.option(
    "--set",
    "set_options",
    multiple=True,
    default=(),
    metavar="SECTION.KEY=VALUE",
    help="Override a setting, e.g. rebar_bridge.erl_command=erl26 (repeatable).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_options: tuple[str, ...]) -> None:
    """Prepare settings, logging, and traceback preferences for the subcommand.

    Prints the help text when no subcommand is given.
    """
    if not callable(ctx.obj):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = ctx.obj()  # type: ignore[assignment]  # Click types obj as Any
    config = _with_set_options(services.get_config(profile=profile), set_options)
    services.init_logging(config)
    store_cli_context(ctx, traceback=traceback, config=config, services=services, profile=profile)
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Command modules import from this package, so registration happens after ``cli`` exists.
def _register_commands() -> None:
    from .commands import cli_config, cli_deps, cli_info, cli_local_path, cli_resolve, cli_show_config

    for cmd in (cli_info, cli_config, cli_deps, cli_show_config, cli_resolve, cli_local_path):
        cli.add_command(cmd)


_register_commands()


__all__ = ["cli"]
