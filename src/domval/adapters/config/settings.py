"""Engine settings model for the ``[domval]`` configuration section.

Bridges lib_layered_config's dictionary output with a typed, validated
pydantic model, so misconfiguration fails once at the boundary with a
:class:`ConfigurationError` instead of deep inside the engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ...domain.enums import PersistenceKind
from ...domain.errors import ConfigurationError
from ...domain.patterns import SEPARATOR

SECTION = "domval"


class EngineSettings(BaseModel):
    """Validated, immutable engine settings.

    Example:
        >>> settings = EngineSettings(domains=["country", "locale"])
        >>> settings.persistence
        <PersistenceKind.NONE: 'none'>
        >>> settings.string_interning
        True
        >>> EngineSettings(domains="country, locale").domains
        ['country', 'locale']
    """

    model_config = ConfigDict(frozen=True)

    domains: list[str] = Field(default_factory=list)
    string_interning: bool = True
    persistence: PersistenceKind = PersistenceKind.NONE
    store_path: Path | None = None

    @field_validator("domains", mode="before")
    @classmethod
    def _coerce_domains(cls, v: Any) -> Any:
        """Accept comma-separated strings from environment variables and .env files.

        Examples:
            >>> EngineSettings._coerce_domains("country,partner")
            ['country', 'partner']
            >>> EngineSettings._coerce_domains("")
            []
        """
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("store_path", mode="before")
    @classmethod
    def _coerce_empty_path_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _validate_settings(self) -> EngineSettings:
        """Reject malformed axis names and a JSON store without a path.

        Example:
            >>> EngineSettings(persistence="json")  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if any(not name.strip() for name in self.domains):
            raise ValueError("domain names must not be blank")
        if any(SEPARATOR in name for name in self.domains):
            raise ValueError(f"domain names may not contain {SEPARATOR!r}, got {self.domains}")
        if len(set(self.domains)) != len(self.domains):
            raise ValueError(f"domain names must be unique, got {self.domains}")
        if self.persistence is PersistenceKind.JSON and self.store_path is None:
            raise ValueError("store_path is required when persistence is 'json'")
        return self


def load_engine_settings(config_dict: Mapping[str, Any]) -> EngineSettings:
    """Load :class:`EngineSettings` from a configuration dictionary.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a ``domval`` section; missing means defaults.

    Raises:
        ConfigurationError: The section is malformed.

    Example:
        >>> load_engine_settings({"domval": {"domains": ["country"], "persistence": "memory"}}).domains
        ['country']
        >>> load_engine_settings({}).persistence.value
        'none'
    """
    section: Any = config_dict.get(SECTION, {})
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"[{SECTION}] must be a table, got {type(section).__name__}")
    try:
        return EngineSettings.model_validate(dict(cast(Mapping[str, Any], section)))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid [{SECTION}] settings: {exc}") from exc


__all__ = ["EngineSettings", "SECTION", "load_engine_settings"]
