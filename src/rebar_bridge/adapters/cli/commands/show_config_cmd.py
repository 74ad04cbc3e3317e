"""``show-config`` command: print a directory's effective rebar configuration."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from ....domain.overrides import apply_overrides, overrides_from_config
from ....domain.term_syntax import format_terms
from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ._shared import absolute_directory, exit_on_config_errors, make_loader

logger = logging.getLogger(__name__)


@click.command("show-config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("directory", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--app", type=str, default=None, help="Apply the configuration's own overrides for this application")
@click.pass_context
def cli_show_config(ctx: click.Context, directory: str, app: str | None) -> None:
    """Print the rebar configuration of DIRECTORY as Erlang terms.

    The output is what the translator works on: ``rebar.config`` after
    ``rebar.config.script`` ran, and with ``--app`` after the configuration's
    ``overrides`` were applied for that application.
    """
    cli_ctx = get_cli_context(ctx)
    root = absolute_directory(directory)

    with lib_log_rich.runtime.bind(job_id="cli-show-config", extra={"command": "show-config", "directory": str(root)}):
        logger.info("Showing rebar configuration", extra={"directory": str(root), "app": app})
        with exit_on_config_errors("show-config"):
            config = make_loader(cli_ctx)(root)
        if app:
            config = apply_overrides(app, config, overrides_from_config(config))
        click.echo(format_terms(config.terms), nl=False)


__all__ = ["cli_show_config"]
