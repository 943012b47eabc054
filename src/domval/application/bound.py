"""An engine paired with a fixed resolver."""

from __future__ import annotations

from typing import Any

from ..domain.resolvers import DomainResolver
from .engine import OverrideEngine


class BoundEngine:
    """Convenience view resolving every lookup with the same context.

    Example:
        >>> from domval.domain.resolvers import MapBackedDomainResolver
        >>> bound = BoundEngine(OverrideEngine(["country"]), MapBackedDomainResolver().set("country", "DE"))
        >>> bound.set("greeting", "Hallo", "DE")
        >>> bound.get("greeting")
        'Hallo'
        >>> bound.get_or_define("farewell", "Tschuess")
        'Tschuess'
    """

    def __init__(self, engine: OverrideEngine, resolver: DomainResolver) -> None:
        if engine is None or resolver is None:
            raise ValueError("engine and resolver are required")
        self._engine = engine
        self._resolver = resolver

    @property
    def engine(self) -> OverrideEngine:
        return self._engine

    @property
    def resolver(self) -> DomainResolver:
        return self._resolver

    def get(self, key: str, default: Any = None) -> Any:
        return self._engine.get(key, self._resolver, default)

    def get_or_define(self, key: str, default: Any, description: str | None = None) -> Any:
        return self._engine.get_or_define(key, default, self._resolver, description)

    def set(self, key: str, value: Any, *domains: str, description: str | None = None) -> None:
        self._engine.set(key, value, *domains, description=description)

    def __repr__(self) -> str:
        return f"BoundEngine{{engine={self._engine}, resolver={self._resolver!r}}}"


__all__ = ["BoundEngine"]
