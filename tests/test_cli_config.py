"""CLI config stories: human and JSON display, sections, profiles, --set."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from click.testing import CliRunner, Result
from lib_layered_config import Config

from rebar_bridge.adapters import cli as cli_mod


@pytest.mark.os_agnostic
def test_config_shows_bridge_section(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config: Callable[[Config], Callable[[], Any]],
) -> None:
    """Human output lists the configured section and values."""
    factory = inject_config(config_factory({"rebar_bridge": {"erl_command": "erl26"}}))

    result: Result = cli_runner.invoke(cli_mod.cli, ["config"], obj=factory)

    assert result.exit_code == 0
    assert "[rebar_bridge]" in result.stdout
    assert 'erl_command = "erl26"' in result.stdout


@pytest.mark.os_agnostic
def test_config_json_is_parseable(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config: Callable[[Config], Callable[[], Any]],
) -> None:
    """--format json prints a JSON document containing the settings."""
    factory = inject_config(config_factory({"rebar_bridge": {"default_app": "web"}}))

    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--format", "json"], obj=factory)

    assert result.exit_code == 0
    assert '"default_app": "web"' in result.stdout


@pytest.mark.os_agnostic
def test_config_unknown_section_exits_with_invalid_argument(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config: Callable[[Config], Callable[[], Any]],
) -> None:
    """A missing section is reported on stderr with exit code 22."""
    factory = inject_config(config_factory({"rebar_bridge": {}}))

    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--section", "nope"], obj=factory)

    assert result.exit_code == cli_mod.ExitCode.INVALID_ARGUMENT
    assert "not found" in result.stderr


@pytest.mark.os_agnostic
def test_set_option_is_visible_in_config(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config: Callable[[Config], Callable[[], Any]],
) -> None:
    """--set overrides appear in the displayed settings."""
    factory = inject_config(config_factory({"rebar_bridge": {"erl_command": "erl"}}))

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "rebar_bridge.erl_command=erl27", "config", "--section", "rebar_bridge"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert 'erl_command = "erl27"' in result.stdout


@pytest.mark.os_agnostic
def test_profile_is_passed_to_get_config(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config_with_profile_capture: Callable[[Config, list[str | None]], Callable[[], Any]],
) -> None:
    """--profile on the root group reaches the settings loader."""
    captured: list[str | None] = []
    factory = inject_config_with_profile_capture(config_factory({"rebar_bridge": {}}), captured)

    result: Result = cli_runner.invoke(cli_mod.cli, ["--profile", "ci", "config"], obj=factory)

    assert result.exit_code == 0
    assert captured == ["ci"]
