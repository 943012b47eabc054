"""Context resolvers: the caller's current value for each axis."""

from __future__ import annotations

from collections.abc import Collection
from typing import Protocol, runtime_checkable


@runtime_checkable
class DomainResolver(Protocol):
    """Answers axis values and active change sets for one resolution.

    Implementations must be side-effect free and fast; the engine asks for
    each configured axis at most once per resolution.
    """

    def get_domain_value(self, domain: str) -> str | None:
        """Return the current value for *domain*, or None when absent."""
        ...

    def get_active_change_sets(self) -> Collection[str]:
        """Return the names of change sets active for this caller."""
        ...


class MapBackedDomainResolver:
    """Resolver backed by a plain dictionary, handy for tests and tooling.

    Example:
        >>> resolver = MapBackedDomainResolver().set("country", "DE").add_active_change_sets("promo")
        >>> resolver.get_domain_value("country")
        'DE'
        >>> resolver.get_domain_value("locale") is None
        True
        >>> sorted(resolver.get_active_change_sets())
        ['promo']
    """

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._active_change_sets: set[str] = set()

    def set(self, domain: str, value: str) -> MapBackedDomainResolver:
        self._values[domain] = value
        return self

    def add_active_change_sets(self, *change_sets: str) -> MapBackedDomainResolver:
        self._active_change_sets.update(change_sets)
        return self

    def get_domain_value(self, domain: str) -> str | None:
        return self._values.get(domain)

    def get_active_change_sets(self) -> frozenset[str]:
        return frozenset(self._active_change_sets)

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={value}" for name, value in self._values.items())
        return f"MapBackedDomainResolver{{{values}}}"


__all__ = ["DomainResolver", "MapBackedDomainResolver"]
