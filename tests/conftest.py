"""Shared pytest fixtures for engine, persistence, and CLI tests.

- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from domval.application.engine import OverrideEngine
from domval.domain.factories import DefaultDomainSpecificValueFactory
from domval.domain.resolvers import MapBackedDomainResolver

if TYPE_CHECKING:
    from domval.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test."""
    return CliRunner()


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
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
    """Clear the get_config lru_cache before the test."""
    from domval.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts, without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def dsv_factory() -> DefaultDomainSpecificValueFactory:
    """A plain, non-interning value factory."""
    return DefaultDomainSpecificValueFactory()


@pytest.fixture
def resolver_for() -> Callable[..., MapBackedDomainResolver]:
    """Build a resolver from axis keyword arguments and active change sets.

    Example:
        def test_x(resolver_for) -> None:
            resolver = resolver_for(country="DE", change_sets=("promo",))
    """

    def _build(change_sets: tuple[str, ...] = (), **axes: str) -> MapBackedDomainResolver:
        resolver = MapBackedDomainResolver()
        for axis, value in axes.items():
            resolver.set(axis, value)
        return resolver.add_active_change_sets(*change_sets)

    return _build


@pytest.fixture
def greeting_engine() -> Iterator[OverrideEngine]:
    """Engine over ``country`` and ``locale`` with no persistence."""
    with OverrideEngine(["country", "locale"]) as engine:
        yield engine


@pytest.fixture
def inject_config(clear_config_cache: None) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory producing in-memory services that load the given Config."""
    from domval.composition import build_testing

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = build_testing(get_config=_fake_get_config)
        return lambda: services

    return _inject


@pytest.fixture
def shared_engine_services() -> Callable[[OverrideEngine], Callable[[], AppServices]]:
    """Return a factory whose services hand every CLI invocation the same engine.

    Lets a test run several commands in a row and inspect the engine afterwards.
    """
    from domval.composition import build_testing

    def _inject(engine: OverrideEngine) -> Callable[[], AppServices]:
        def _same_engine(_config: Config) -> OverrideEngine:
            return engine

        services = build_testing(build_engine=_same_engine)
        return lambda: services

    return _inject


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for commands that need no injection."""
    from domval.composition import build_production

    return build_production


@pytest.fixture
def config_cli_context(clear_config_cache: None) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Return a factory wiring production display with an injected config dict.

    Engines are still built in memory so no test touches a real store.

    Example:
        def test_x(cli_runner, config_cli_context) -> None:
            factory = config_cli_context({"domval": {"domains": ["country"]}})
            result = cli_runner.invoke(cli, ["config"], obj=factory)
    """
    from domval.composition import AppServices, build_engine_in_memory, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            init_logging=prod.init_logging,
            build_engine=build_engine_in_memory,
        )
        return lambda: services

    return _create
