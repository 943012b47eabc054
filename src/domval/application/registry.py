"""Administrative registry of live engines for operational tooling.

Engines join through the ``registry`` constructor argument and leave through
:meth:`OverrideEngine.close`; nothing relies on garbage collection. A
process-wide instance exists but is only used where it is passed explicitly.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .engine import OverrideEngine

logger = logging.getLogger(__name__)


class EngineRegistry:
    """Track engines and expose read-only dumps plus a bulk reload.

    Example:
        >>> from domval.application.engine import OverrideEngine
        >>> registry = EngineRegistry()
        >>> with OverrideEngine(["country"], registry=registry) as engine:
        ...     len(registry)
        1
        >>> len(registry)
        0
    """

    def __init__(self) -> None:
        self._engines: list[OverrideEngine] = []
        self._lock = threading.Lock()

    def register(self, engine: OverrideEngine) -> None:
        with self._lock:
            if not any(known is engine for known in self._engines):
                self._engines.append(engine)

    def deregister(self, engine: OverrideEngine) -> None:
        with self._lock:
            self._engines = [known for known in self._engines if known is not engine]

    def reset(self) -> None:
        """Forget every registered engine."""
        with self._lock:
            self._engines = []

    @property
    def engines(self) -> tuple[OverrideEngine, ...]:
        with self._lock:
            return tuple(self._engines)

    def dump(self) -> str:
        """Full dump of every registered engine, separated by blank lines."""
        return "".join(f"{engine.dump()}\n\n" for engine in self.engines)

    def dump_key(self, key: str) -> str:
        """Dump the container for *key* from every engine that knows it."""
        parts: list[str] = []
        for engine in self.engines:
            key_values = engine.get_key_values(key)
            if key_values is not None:
                parts.append(f"{key_values}\n\n")
        return "".join(parts)

    def reload(self) -> None:
        engines = self.engines
        logger.info("Reloading %d registered engines", len(engines))
        for engine in engines:
            engine.reload()

    def __len__(self) -> int:
        with self._lock:
            return len(self._engines)

    def __str__(self) -> str:
        return "EngineRegistry{engines=[" + ", ".join(str(engine) for engine in self.engines) + "]}"


@lru_cache(maxsize=1)
def get_default_registry() -> EngineRegistry:
    """Return the process-wide registry instance.

    Example:
        >>> get_default_registry() is get_default_registry()
        True
    """
    return EngineRegistry()


__all__ = ["EngineRegistry", "get_default_registry"]
