"""Engine settings from the ``[domval]`` section and engine wiring."""

from __future__ import annotations

from pathlib import Path

import pytest
from lib_layered_config import Config
from pydantic import ValidationError

from domval.adapters.config import EngineSettings, load_engine_settings
from domval.adapters.memory import InMemoryPersistence
from domval.adapters.persistence import JsonFilePersistence
from domval.application.registry import EngineRegistry
from domval.composition import build_engine, build_factories, build_persistence
from domval.domain.enums import PersistenceKind
from domval.domain.errors import ConfigurationError
from domval.domain.factories import DefaultDomainSpecificValueFactory, InterningDomainSpecificValueFactory

# ======================== EngineSettings ========================


@pytest.mark.os_agnostic
def test_missing_section_gives_defaults() -> None:
    settings = load_engine_settings({})

    assert settings.domains == []
    assert settings.string_interning is True
    assert settings.persistence is PersistenceKind.NONE
    assert settings.store_path is None


@pytest.mark.os_agnostic
def test_comma_separated_domains_from_environment() -> None:
    """Environment variables deliver lists as plain strings."""
    assert load_engine_settings({"domval": {"domains": "country, locale"}}).domains == ["country", "locale"]


@pytest.mark.os_agnostic
def test_empty_store_path_means_none() -> None:
    assert load_engine_settings({"domval": {"store_path": ""}}).store_path is None


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    "section",
    [
        {"domains": ["country", " "]},
        {"domains": ["country", "country"]},
        {"domains": ["country|locale"]},
        {"persistence": "json"},
        {"persistence": "redis"},
        {"string_interning": "sometimes"},
    ],
)
def test_invalid_sections_raise_configuration_error(section: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError, match=r"\[domval\]"):
        load_engine_settings({"domval": section})


@pytest.mark.os_agnostic
def test_non_table_section_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="must be a table"):
        load_engine_settings({"domval": "country"})


@pytest.mark.os_agnostic
def test_settings_are_immutable() -> None:
    settings = EngineSettings()

    with pytest.raises(ValidationError):
        settings.domains = ["x"]  # type: ignore[misc]


# ======================== Wiring ========================


@pytest.mark.os_agnostic
def test_interning_switch_picks_the_value_factory() -> None:
    assert isinstance(build_factories(EngineSettings()).dsv_factory, InterningDomainSpecificValueFactory)
    assert type(build_factories(EngineSettings(string_interning=False)).dsv_factory) is DefaultDomainSpecificValueFactory


@pytest.mark.os_agnostic
def test_persistence_kind_picks_the_backend(tmp_path: Path) -> None:
    assert build_persistence(EngineSettings()) is None
    assert isinstance(build_persistence(EngineSettings(persistence=PersistenceKind.MEMORY)), InMemoryPersistence)
    json_backend = build_persistence(EngineSettings(persistence=PersistenceKind.JSON, store_path=tmp_path / "s.json"))
    assert isinstance(json_backend, JsonFilePersistence)
    assert json_backend.path == tmp_path / "s.json"


@pytest.mark.os_agnostic
def test_build_engine_uses_the_configured_axes() -> None:
    registry = EngineRegistry()
    config = Config({"domval": {"domains": ["country", "locale"], "persistence": "memory"}}, {})

    with build_engine(config, registry=registry) as engine:
        assert engine.domains == ("country", "locale")
        assert isinstance(engine.persistence, InMemoryPersistence)
        assert len(registry) == 1
    assert len(registry) == 0


@pytest.mark.os_agnostic
def test_build_engine_rejects_invalid_configuration() -> None:
    with pytest.raises(ConfigurationError):
        build_engine(Config({"domval": {"persistence": "json"}}, {}), registry=EngineRegistry())
