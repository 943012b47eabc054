"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lib_layered_config import Config

from ..adapters.config.display import display_config

# Configuration services
from ..adapters.config.loader import get_config
from ..adapters.config.settings import EngineSettings, load_engine_settings

# Logging services
from ..adapters.logging.setup import init_logging
from ..adapters.memory.persistence import InMemoryPersistence
from ..adapters.persistence.json_file import JsonFilePersistence
from ..application.engine import OverrideEngine
from ..application.ports import BuildEngine, DisplayConfig, GetConfig, InitLogging, Persistence
from ..application.registry import EngineRegistry, get_default_registry
from ..domain.enums import PersistenceKind
from ..domain.factories import (
    DefaultDomainSpecificValueFactory,
    FactoryProvider,
    InterningDomainSpecificValueFactory,
)


def build_factories(settings: EngineSettings) -> FactoryProvider:
    """Pick the value factory according to ``string_interning``.

    Example:
        >>> factories = build_factories(EngineSettings(string_interning=False))
        >>> isinstance(factories.dsv_factory, InterningDomainSpecificValueFactory)
        False
    """
    if settings.string_interning:
        return FactoryProvider(dsv_factory=InterningDomainSpecificValueFactory())
    return FactoryProvider(dsv_factory=DefaultDomainSpecificValueFactory())


def build_persistence(settings: EngineSettings) -> Persistence | None:
    """Instantiate the backend named by ``persistence``.

    Example:
        >>> build_persistence(EngineSettings()) is None
        True
    """
    if settings.persistence is PersistenceKind.JSON and settings.store_path is not None:
        return JsonFilePersistence(settings.store_path)
    if settings.persistence is PersistenceKind.MEMORY:
        return InMemoryPersistence()
    return None


def build_engine(config: Config, *, registry: EngineRegistry | None = None) -> OverrideEngine:
    """Create an engine from the ``[domval]`` section of *config*.

    The engine joins *registry*, or the process-wide default registry, and
    leaves it again on :meth:`OverrideEngine.close`.

    Raises:
        ConfigurationError: The ``[domval]`` section is invalid.
    """
    settings = load_engine_settings(config.as_dict())
    return OverrideEngine(
        settings.domains,
        persistence=build_persistence(settings),
        factories=build_factories(settings),
        registry=registry if registry is not None else get_default_registry(),
    )


def build_engine_in_memory(config: Config) -> OverrideEngine:
    """Create an engine with the configured axes over in-memory persistence only."""
    settings = load_engine_settings(config.as_dict())
    return OverrideEngine(settings.domains, persistence=InMemoryPersistence(), factories=build_factories(settings))


# Static conformance assertions: pyright verifies each adapter function
# structurally satisfies its Protocol.
if TYPE_CHECKING:
    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_init_logging: InitLogging = init_logging
    _assert_build_engine: BuildEngine = build_engine


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    init_logging: InitLogging
    build_engine: BuildEngine


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        init_logging=init_logging,
        build_engine=build_engine,
    )


def build_testing(*, build_engine: BuildEngine | None = None, get_config: GetConfig | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        build_engine: Replacement engine builder, e.g. one returning a shared
            engine so a test can inspect state across CLI invocations.
        get_config: Replacement config loader; defaults to an in-memory
            Config with no axes.
    """
    from ..adapters.memory import display_config_in_memory, get_config_in_memory, init_logging_in_memory

    return AppServices(
        get_config=get_config if get_config is not None else get_config_in_memory,
        display_config=display_config_in_memory,
        init_logging=init_logging_in_memory,
        build_engine=build_engine if build_engine is not None else build_engine_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    # Logging
    "init_logging",
    # Engine wiring
    "build_engine",
    "build_engine_in_memory",
    "build_factories",
    "build_persistence",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
