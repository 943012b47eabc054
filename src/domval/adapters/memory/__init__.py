"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.logging` - In-memory logging adapter
    * :mod:`.persistence` - In-memory persistence backend
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import display_config_in_memory, get_config_in_memory
from .logging import init_logging_in_memory
from .persistence import InMemoryPersistence

# Static conformance assertions
if TYPE_CHECKING:
    from domval.application.ports import DisplayConfig, GetConfig, InitLogging, Persistence

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_persistence: Persistence = InMemoryPersistence()

__all__ = [
    "InMemoryPersistence",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
]
