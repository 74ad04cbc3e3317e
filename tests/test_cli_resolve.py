"""CLI resolve and local-path stories: PATH first, then the local copy, wrapped per platform."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner, Result

from rebar_bridge.adapters import cli as cli_mod
from rebar_bridge.adapters.memory import FakeHost

if TYPE_CHECKING:
    from conftest import BridgeCliContext


@pytest.mark.os_agnostic
def test_resolve_prefers_copy_on_path(
    cli_runner: CliRunner,
    bridge_cli_context: Callable[..., BridgeCliContext],
    tmp_path: Path,
) -> None:
    """A global rebar3 wins over an existing local one."""
    home = tmp_path / "mix"
    home.mkdir()
    (home / "rebar3").write_text("#!/usr/bin/env escript\n", encoding="utf-8")
    ctx = bridge_cli_context(host=FakeHost(executables={"rebar3": "/usr/local/bin/rebar3"}), home=str(home))

    result: Result = cli_runner.invoke(cli_mod.cli, ["resolve"], obj=ctx.factory)

    assert result.exit_code == 0
    assert result.stdout == "/usr/local/bin/rebar3\n"


@pytest.mark.os_agnostic
def test_resolve_falls_back_to_local_copy(
    cli_runner: CliRunner,
    bridge_cli_context: Callable[..., BridgeCliContext],
    tmp_path: Path,
) -> None:
    """Without a global copy the one under home is used."""
    home = tmp_path / "mix"
    home.mkdir()
    (home / "rebar").write_text("#!/usr/bin/env escript\n", encoding="utf-8")

    ctx = bridge_cli_context(home=str(home))

    result: Result = cli_runner.invoke(cli_mod.cli, ["resolve", "rebar"], obj=ctx.factory)

    assert result.exit_code == 0
    assert result.stdout == f"{home / 'rebar'}\n"


@pytest.mark.os_agnostic
def test_resolve_wraps_escript_on_windows(
    cli_runner: CliRunner,
    bridge_cli_context: Callable[..., BridgeCliContext],
) -> None:
    """Windows needs escript.exe in front of a plain escript."""
    host = FakeHost(executables={"rebar3": "C:/tools/rebar3"}, windows=True)

    result: Result = cli_runner.invoke(cli_mod.cli, ["resolve", "rebar3"], obj=bridge_cli_context(host=host).factory)

    assert result.stdout == 'escript.exe "C:/tools/rebar3"\n'


@pytest.mark.os_agnostic
def test_resolve_keeps_cmd_wrapper_on_windows(
    cli_runner: CliRunner,
    bridge_cli_context: Callable[..., BridgeCliContext],
) -> None:
    """A .cmd file is already runnable."""
    host = FakeHost(executables={"rebar3": "C:/tools/rebar3.cmd"}, windows=True)

    result: Result = cli_runner.invoke(cli_mod.cli, ["resolve"], obj=bridge_cli_context(host=host).factory)

    assert result.stdout == "C:/tools/rebar3.cmd\n"


@pytest.mark.os_agnostic
def test_resolve_reports_missing_executable(
    cli_runner: CliRunner,
    bridge_cli_context: Callable[..., BridgeCliContext],
    tmp_path: Path,
) -> None:
    """Neither global nor local copy means exit 2 and the expected location."""
    home = tmp_path / "mix"

    result: Result = cli_runner.invoke(cli_mod.cli, ["resolve"], obj=bridge_cli_context(home=str(home)).factory)

    assert result.exit_code == cli_mod.ExitCode.FILE_NOT_FOUND
    assert f"rebar3 not found on PATH or at {home / 'rebar3'}" in result.stderr
    assert result.stdout == ""


@pytest.mark.os_agnostic
def test_resolve_rejects_unknown_manager(
    cli_runner: CliRunner,
    bridge_cli_context: Callable[..., BridgeCliContext],
) -> None:
    """Only rebar and rebar3 are known."""
    result: Result = cli_runner.invoke(cli_mod.cli, ["resolve", "make"], obj=bridge_cli_context().factory)

    assert result.exit_code == 2


@pytest.mark.os_agnostic
@pytest.mark.parametrize("manager", ["rebar", "rebar3"])
def test_local_path_prints_expected_location(
    cli_runner: CliRunner,
    bridge_cli_context: Callable[..., BridgeCliContext],
    tmp_path: Path,
    manager: str,
) -> None:
    """local-path answers even when nothing is there yet."""
    home = tmp_path / "mix"

    result: Result = cli_runner.invoke(
        cli_mod.cli, ["local-path", manager], obj=bridge_cli_context(home=str(home)).factory
    )

    assert result.exit_code == 0
    assert result.stdout == f"{home / manager}\n"


@pytest.mark.os_agnostic
def test_set_home_overrides_configured_home(
    cli_runner: CliRunner,
    bridge_cli_context: Callable[..., BridgeCliContext],
    tmp_path: Path,
) -> None:
    """--set rebar_bridge.home changes where the local copy is looked for."""
    ctx = bridge_cli_context(home=str(tmp_path / "configured"))

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", f"rebar_bridge.home={(tmp_path / 'override').as_posix()}", "local-path"],
        obj=ctx.factory,
    )

    assert result.stdout == f"{Path((tmp_path / 'override').as_posix()) / 'rebar3'}\n"
