"""Application ports - Protocol definitions for collaborators of the engine.

Callable Protocols define a ``__call__`` whose signature exactly matches the
corresponding adapter function, so module-level functions satisfy them via
structural subtyping (PEP 544). Object-shaped collaborators (persistence,
domain initializers) are plain method Protocols.

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``) are
    imported under ``TYPE_CHECKING`` only so that import-linter layer
    contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Protocol

from ..domain.enums import OutputFormat
from ..domain.factories import DomainSpecificValueFactory, KeyValuesFactory
from ..domain.key_values import KeyValues
from ..domain.resolvers import DomainResolver
from ..domain.values import DomainSpecificValue

if TYPE_CHECKING:
    from lib_layered_config import Config

    from .engine import OverrideEngine


class Persistence(Protocol):
    """Read-through/write-through backing store for overrides.

    Implementations may block and may fail; the engine propagates every
    exception unchanged and never retries.
    """

    def load(
        self, key: str, kv_factory: KeyValuesFactory, dsv_factory: DomainSpecificValueFactory
    ) -> KeyValues | None: ...

    def load_all(
        self, kv_factory: KeyValuesFactory, dsv_factory: DomainSpecificValueFactory
    ) -> dict[str, KeyValues]: ...

    def reload(
        self,
        current: Mapping[str, KeyValues],
        kv_factory: KeyValuesFactory,
        dsv_factory: DomainSpecificValueFactory,
    ) -> dict[str, KeyValues]: ...

    def store(self, key: str, key_values: KeyValues, change_set: str | None) -> None: ...

    def remove_value(self, key: str, dsv: DomainSpecificValue, change_set: str | None) -> None: ...

    def remove_key(self, key: str) -> None: ...


class DomainInitializer(Protocol):
    """Supplies the ordered axis names of an engine at construction time."""

    def get_initial_domains(self) -> Sequence[str]: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


class BuildEngine(Protocol):
    """Create an engine from the ``[domval]`` section of a configuration."""

    def __call__(self, config: Config) -> OverrideEngine: ...


__all__ = [
    "BuildEngine",
    "DisplayConfig",
    "DomainInitializer",
    "DomainResolver",
    "GetConfig",
    "InitLogging",
    "Persistence",
]
