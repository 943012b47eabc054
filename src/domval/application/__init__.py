"""Application layer - the override engine and its port definitions.

Orchestrates domain logic: lazy key materialization, change-set bookkeeping,
write-through to persistence, and the administrative registry.

Contents:
    * :mod:`.ports` - Protocol definitions for persistence, config and logging
    * :mod:`.values_store` - Key to KeyValues registry
    * :mod:`.change_sets` - Change-set to keys index
    * :mod:`.engine` - OverrideEngine facade
    * :mod:`.bound` - Engine paired with a fixed resolver
    * :mod:`.registry` - Administrative registry of live engines
"""

from __future__ import annotations

from .bound import BoundEngine
from .change_sets import ChangeSetIndex
from .engine import OverrideEngine
from .ports import (
    BuildEngine,
    DisplayConfig,
    DomainInitializer,
    DomainResolver,
    GetConfig,
    InitLogging,
    Persistence,
)
from .registry import EngineRegistry, get_default_registry
from .values_store import ValuesStore

__all__ = [
    # Engine
    "BoundEngine",
    "ChangeSetIndex",
    "EngineRegistry",
    "OverrideEngine",
    "ValuesStore",
    "get_default_registry",
    # Ports
    "BuildEngine",
    "DisplayConfig",
    "DomainInitializer",
    "DomainResolver",
    "GetConfig",
    "InitLogging",
    "Persistence",
]
