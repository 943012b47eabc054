"""Public package surface: the override engine, its model, and wiring.

Routes imports through the architectural layers:
- Domain exports: override model, resolvers, factories, errors
- Application exports: engine facade, bound engine, registry
- Composition exports: configuration and engine building
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application import BoundEngine, EngineRegistry, OverrideEngine, get_default_registry

# Composition exports (wired adapters)
from .composition import build_engine, get_config

# Domain exports
from .domain import (
    DomainResolver,
    DomainSpecificValue,
    DomvalError,
    FactoryProvider,
    InvalidDomainError,
    InvalidKeyError,
    KeyValues,
    MapBackedDomainResolver,
    MissingResolverError,
    PersistenceError,
)

__all__ = [
    "BoundEngine",
    "DomainResolver",
    "DomainSpecificValue",
    "DomvalError",
    "EngineRegistry",
    "FactoryProvider",
    "InvalidDomainError",
    "InvalidKeyError",
    "KeyValues",
    "MapBackedDomainResolver",
    "MissingResolverError",
    "OverrideEngine",
    "PersistenceError",
    "build_engine",
    "get_config",
    "get_default_registry",
    "print_info",
]
