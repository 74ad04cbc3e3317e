"""CLI core stories: traceback handling, main entry, help, version, info, unknown command."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner, Result

from rebar_bridge import __init__conf__
from rebar_bridge.adapters import cli as cli_mod
from rebar_bridge.composition import build_production


@pytest.mark.os_agnostic
def test_snapshot_traceback_state_returns_disabled_by_default(managed_traceback_state: None) -> None:
    """Both flags start disabled."""
    assert cli_mod.snapshot_traceback_state() == (False, False)


@pytest.mark.os_agnostic
def test_restore_traceback_state_resets_flags_to_previous(managed_traceback_state: None) -> None:
    """Restoring a snapshot undoes apply_traceback_preferences."""
    previous = cli_mod.snapshot_traceback_state()
    cli_mod.apply_traceback_preferences(True)

    cli_mod.restore_traceback_state(previous)

    assert (lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color) == (False, False)


@pytest.mark.os_agnostic
def test_traceback_flag_is_active_during_command_and_restored_after(
    monkeypatch: pytest.MonkeyPatch,
    managed_traceback_state: None,
) -> None:
    """--traceback holds for the run and is undone by main."""
    notes: list[tuple[bool, bool]] = []

    def record() -> None:
        notes.append((lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color))

    monkeypatch.setattr(__init__conf__, "print_info", record)

    exit_code = cli_mod.main(["--traceback", "info"], services_factory=build_production)

    assert exit_code == 0
    assert notes == [(True, True)]
    assert lib_cli_exit_tools.config.traceback is False


@pytest.mark.os_agnostic
def test_main_runs_info_with_production_services(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """main() prints package metadata through the info command."""
    assert cli_mod.main(["info"], services_factory=build_production) == 0

    out = capsys.readouterr().out
    assert f"Info for {__init__conf__.name}:" in out
    assert __init__conf__.version in out


@pytest.mark.os_agnostic
def test_main_requires_services_factory() -> None:
    """Entry points must pass a composition factory."""
    with pytest.raises(ValueError, match="services_factory"):
        cli_mod.main(["info"])


@pytest.mark.os_agnostic
def test_when_cli_runs_without_arguments_help_is_printed(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    """No subcommand prints the group help."""
    result = cli_runner.invoke(cli_mod.cli, [], obj=production_factory)

    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "deps" in result.output


@pytest.mark.os_agnostic
def test_version_option_reports_shell_command_and_version(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    """--version prints ``rebar-bridge version X``."""
    result = cli_runner.invoke(cli_mod.cli, ["--version"], obj=production_factory)

    assert result.exit_code == 0
    assert f"{__init__conf__.shell_command} version {__init__conf__.version}" in result.output


@pytest.mark.os_agnostic
def test_unknown_command_is_a_usage_error(
    managed_traceback_state: None,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """An unknown subcommand exits with click's usage status."""
    exit_code = cli_mod.main(["translate-everything"], services_factory=build_production)

    assert exit_code == 2
    assert "No such command" in capsys.readouterr().err


@pytest.mark.os_agnostic
def test_malformed_set_option_is_a_usage_error(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    """--set without ``=`` is rejected before any command runs."""
    result: Result = cli_runner.invoke(cli_mod.cli, ["--set", "rebar_bridge.home", "info"], obj=production_factory)

    assert result.exit_code == 2
    assert "must contain '='" in result.output


@pytest.mark.os_agnostic
def test_missing_services_factory_is_reported(cli_runner: CliRunner) -> None:
    """Invoking the group without obj is a programming error."""
    result = cli_runner.invoke(cli_mod.cli, ["info"])

    assert isinstance(result.exception, RuntimeError)


@pytest.mark.os_agnostic
def test_subcommand_without_root_context_fails() -> None:
    """get_cli_context refuses a context the root group did not prepare."""
    import rich_click as click

    with pytest.raises(RuntimeError, match="not initialized"):
        cli_mod.get_cli_context(click.Context(cli_mod.cli, obj=None))


@pytest.mark.os_agnostic
def test_cli_registers_every_command() -> None:
    """All subcommands are reachable from the root group."""
    assert set(cli_mod.cli.commands) == {"info", "config", "deps", "show-config", "resolve", "local-path"}
