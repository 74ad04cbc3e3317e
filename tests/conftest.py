"""Shared pytest fixtures for CLI, loader, and walker tests.

All shared fixtures live here and read as plain English in test signatures.
CLI fixtures keep the production logging and configuration display and
replace only the I/O boundaries a test controls.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from rebar_bridge.adapters.memory import FakeHost, InMemoryFilesystem, ScriptEvaluatorSpy

if TYPE_CHECKING:
    from rebar_bridge.composition import AppServices

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` when parsing output; log records and diagnostics
    go to ``result.stderr``.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory."""
    from rebar_bridge.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore them after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test.

    Only clears before, so a test that monkeypatches ``get_config`` does not
    break teardown.
    """
    from rebar_bridge.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from plain dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def memory_fs() -> InMemoryFilesystem:
    """Provide an empty in-memory filesystem."""
    return InMemoryFilesystem()


@pytest.fixture
def script_spy() -> ScriptEvaluatorSpy:
    """Provide a script evaluator spy that returns ``CONFIG`` unchanged by default."""
    return ScriptEvaluatorSpy()


@pytest.fixture
def fake_host() -> FakeHost:
    """Provide a host with nothing on PATH, not Windows."""
    return FakeHost()


@pytest.fixture
def write_rebar_config() -> Callable[[Path, str], Path]:
    """Return a helper writing ``rebar.config`` text into a directory, creating it."""

    def _write(directory: Path, text: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "rebar.config"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@dataclass
class BridgeCliContext:
    """Services factory plus the doubles it was wired with.

    Attributes:
        factory: Callable handed to ``cli_runner.invoke(obj=...)``.
        spy: Evaluator standing in for ``erl``.
        host: Canned PATH lookup and platform answer.
    """

    factory: Callable[[], Any]
    spy: ScriptEvaluatorSpy
    host: FakeHost


@pytest.fixture
def bridge_cli_context(
    clear_config_cache: None,
    config_factory: Callable[[dict[str, Any]], Config],
) -> Callable[..., BridgeCliContext]:
    """Create CLI services reading real directories without running ``erl``.

    The returned function takes the ``[rebar_bridge]`` settings as keyword
    arguments and optional ``spy``/``host`` doubles. Files, globs, logging
    and configuration display stay production.

    Example:
        def test_deps(cli_runner, bridge_cli_context, tmp_path) -> None:
            ctx = bridge_cli_context(home=str(tmp_path / "mix"))
            result = cli_runner.invoke(cli, ["deps", str(tmp_path)], obj=ctx.factory)
    """
    from rebar_bridge.composition import build_production

    def _create(
        *,
        spy: ScriptEvaluatorSpy | None = None,
        host: FakeHost | None = None,
        **settings: Any,
    ) -> BridgeCliContext:
        spy = spy if spy is not None else ScriptEvaluatorSpy()
        host = host if host is not None else FakeHost()
        config = config_factory({"rebar_bridge": settings} if settings else {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = replace(
            build_production(),
            get_config=_fake_get_config,
            make_script_evaluator=spy.bind,
            find_executable=host.find_executable,
            is_windows_family=host.is_windows_family,
        )
        return BridgeCliContext(factory=lambda: services, spy=spy, host=host)

    return _create


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory that provides production services with an injected Config."""
    from rebar_bridge.composition import build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = replace(build_production(), get_config=_fake_get_config)
        return lambda: services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records the profile it was asked for."""
    from rebar_bridge.composition import build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        services = replace(build_production(), get_config=_capturing_get_config)
        return lambda: services

    return _inject
