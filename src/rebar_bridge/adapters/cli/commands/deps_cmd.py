"""``deps`` command: translate the dependencies of a rebar project tree.

The project's root ``rebar.config`` supplies the ``overrides``; they are
applied to the root and to every ``sub_dirs`` configuration before its
``deps`` are translated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import lib_log_rich.runtime
import orjson
import rich_click as click
from rich.console import Console
from rich.table import Table

from ....application.walker import walk
from ....domain.dependencies import DependencyDescriptor, translate_dependencies
from ....domain.enums import OutputFormat
from ....domain.overrides import overrides_from_config
from ....domain.terms import RawConfig
from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ._shared import absolute_directory, app_name_for, exit_on_config_errors, make_loader

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DirectoryDependencies:
    """Translated dependencies of one visited configuration."""

    directory: Path | None
    app: str
    dependencies: tuple[DependencyDescriptor, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "directory": str(self.directory) if self.directory is not None else None,
            "app": self.app,
            "dependencies": [dep.to_dict() for dep in self.dependencies],
        }


def collect_dependencies(
    cli_ctx: CLIContext, directory: Path, *, app: str | None, recurse: bool
) -> list[DirectoryDependencies]:
    """Load *directory*, walk its ``sub_dirs`` if asked, and translate each ``deps``."""
    services = cli_ctx.services
    default_app = cli_ctx.settings.default_app
    load = make_loader(cli_ctx)
    root = load(directory)
    overrides = overrides_from_config(root)

    def translate_one(config: RawConfig) -> DirectoryDependencies:
        name = app_name_for(config, app, default_app)
        return DirectoryDependencies(config.directory, name, tuple(translate_dependencies(name, config, overrides)))

    if not recurse:
        return [translate_one(root)]
    return walk(
        root,
        translate_one,
        load=load,
        expand_glob=services.expand_glob,
        is_directory=services.is_directory,
    )


def _format_option(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _location(directory: Path | None, root: Path) -> str:
    if directory is None:
        return "."
    if directory.is_relative_to(root):
        return directory.relative_to(root).as_posix()
    return directory.as_posix()


def render_human(results: list[DirectoryDependencies], root: Path) -> None:
    """Print one table per visited directory."""
    console = Console(soft_wrap=True)
    for entry in results:
        location = _location(entry.directory, root)
        if not entry.dependencies:
            console.print(f"[bold]{entry.app}[/bold] ({location}): no dependencies")
            continue
        table = Table(title=f"{entry.app} ({location})", title_justify="left")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Requirement", style="magenta")
        table.add_column("Options", overflow="fold")
        for dep in entry.dependencies:
            requirement = dep.requirement.pattern if dep.requirement is not None else "-"
            options = ", ".join(f"{key}={_format_option(value)}" for key, value in dep.options) or "-"
            table.add_row(dep.name.name, requirement, options)
        console.print(table)


def render_json(results: list[DirectoryDependencies]) -> str:
    return orjson.dumps([entry.to_dict() for entry in results], option=orjson.OPT_INDENT_2).decode()


@click.command("deps", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("directory", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--app", type=str, default=None, help="Application name used to match app-scoped overrides")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (tables or JSON)",
)
@click.option("--recurse/--no-recurse", default=True, help="Follow sub_dirs declared in rebar.config")
@click.pass_context
def cli_deps(ctx: click.Context, directory: str, app: str | None, output_format: str, recurse: bool) -> None:
    """Translate the rebar dependencies of DIRECTORY and its sub_dirs.

    Directories are listed in walk order: the project first, then each
    sub directory followed by its own sub directories.
    """
    cli_ctx = get_cli_context(ctx)
    root = absolute_directory(directory)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "deps", "directory": str(root), "format": fmt.value, "recurse": recurse}
    with lib_log_rich.runtime.bind(job_id="cli-deps", extra=extra):
        logger.info("Translating rebar dependencies", extra={"directory": str(root), "app": app})
        with exit_on_config_errors("deps"):
            results = collect_dependencies(cli_ctx, root, app=app, recurse=recurse)
        if fmt is OutputFormat.JSON:
            click.echo(render_json(results))
        else:
            render_human(results, root)


__all__ = ["DirectoryDependencies", "cli_deps", "collect_dependencies", "render_human", "render_json"]
