"""All overrides stored for one configuration key, and their resolution.

Contents:
    * :class:`KeyValues` - precedence-ordered override container.

System Role:
    Owns its :class:`DomainSpecificValue` entries exclusively. Readers walk
    an immutable, already-sorted tuple without locking; writers build a new
    tuple under a per-key lock and publish it with a single assignment, so a
    read that starts after a write completes always observes that write in
    precedence order.
"""

from __future__ import annotations

import bisect
import threading
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from .errors import MissingResolverError
from .patterns import WILDCARD, build_domain_string, build_ordered_pattern
from .values import DomainSpecificValue

if TYPE_CHECKING:
    from .factories import DomainSpecificValueFactory
    from .resolvers import DomainResolver

T = TypeVar("T")


class KeyValues:
    """Precedence-ordered set of overrides for a single key.

    Example:
        >>> from domval.domain.factories import DefaultDomainSpecificValueFactory
        >>> from domval.domain.resolvers import MapBackedDomainResolver
        >>> kv = KeyValues("greeting", DefaultDomainSpecificValueFactory())
        >>> _ = kv.put("Hi")
        >>> _ = kv.put("Hallo", "DE")
        >>> kv.resolve(["country"], None, MapBackedDomainResolver().set("country", "DE"))
        'Hallo'
        >>> kv.resolve(["country"], None, MapBackedDomainResolver().set("country", "FR"))
        'Hi'
        >>> kv.get_default_value()
        'Hi'
    """

    def __init__(
        self,
        key: str,
        dsv_factory: DomainSpecificValueFactory,
        description: str | None = None,
    ) -> None:
        self._key = key
        self._dsv_factory = dsv_factory
        self._description = description or ""
        self._values: tuple[DomainSpecificValue, ...] = ()
        self._by_identity: dict[tuple[str, int, str | None], DomainSpecificValue] = {}
        self._write_lock = threading.Lock()

    @property
    def key(self) -> str:
        return self._key

    @property
    def description(self) -> str:
        """Free-text description; never None."""
        return self._description

    @description.setter
    def description(self, description: str | None) -> None:
        self._description = description or ""

    @property
    def dsv_factory(self) -> DomainSpecificValueFactory:
        return self._dsv_factory

    @property
    def domain_specific_values(self) -> tuple[DomainSpecificValue, ...]:
        """Snapshot of all overrides, strongest first."""
        return self._values

    def put(self, value: Any, *domain_values: str) -> DomainSpecificValue:
        """Store an unconditional override for the given domain tokens."""
        return self.put_with_change_set(None, value, *domain_values)

    def put_with_change_set(self, change_set: str | None, value: Any, *domain_values: str) -> DomainSpecificValue:
        """Store an override, updating the value of an identical one in place.

        Returns:
            The stored entry: the pre-existing one when its pattern, ordering
            and change set matched, otherwise the newly inserted one.
        """
        candidate = self._dsv_factory.create(value, change_set, domain_values)
        with self._write_lock:
            existing = self._by_identity.get(candidate.identity())
            if existing is not None:
                existing.value = candidate.value
                return existing
            updated = list(self._values)
            bisect.insort(updated, candidate)
            self._by_identity[candidate.identity()] = candidate
            self._values = tuple(updated)
        return candidate

    def resolve(
        self,
        domain_names: Iterable[str],
        default: T,
        resolver: DomainResolver | None,
        active_change_sets: Iterable[str] | None = None,
    ) -> Any | T:
        """Return the value of the strongest override matching the context.

        Args:
            domain_names: Configured axis names, in order.
            default: Returned when nothing matches.
            resolver: Supplies axis values; may be None only without axes.
            active_change_sets: Overrides the resolver's active change sets
                when given.

        Raises:
            MissingResolverError: Axes were given without a resolver.
            InvalidDomainError: The resolver answered with a value containing
                the separator.
        """
        names = tuple(domain_names)
        if names and resolver is None:
            raise MissingResolverError("If domains are specified, the domain resolver must not be None")
        if resolver is None:
            domain_str = ""
            active = frozenset(active_change_sets or ())
        else:
            domain_str = build_domain_string(resolver.get_domain_value(name) for name in names)
            active = frozenset(
                active_change_sets if active_change_sets is not None else resolver.get_active_change_sets()
            )
        for dsv in self._values:
            if dsv.is_in_change_sets(active) and dsv.matches(domain_str):
                return dsv.value
        return default

    def get_default_value(self) -> Any:
        """Value of the unconditional entry, or None."""
        return self.resolve((), None, None)

    def remove(self, change_set: str | None, *domain_values: str) -> DomainSpecificValue | None:
        """Remove the override with exactly this pattern and change set."""
        pattern = build_ordered_pattern(domain_values).pattern
        with self._write_lock:
            for dsv in self._values:
                if dsv.change_set_is(change_set) and dsv.pattern == pattern:
                    self._discard([dsv])
                    return dsv
        return None

    def remove_change_set(self, change_set: str) -> list[DomainSpecificValue]:
        """Remove every override tagged with *change_set* and return them."""
        with self._write_lock:
            removed = [dsv for dsv in self._values if dsv.change_set_is(change_set)]
            if removed:
                self._discard(removed)
        return removed

    def _discard(self, removed: Sequence[DomainSpecificValue]) -> None:
        # caller holds the write lock
        for dsv in removed:
            self._by_identity.pop(dsv.identity(), None)
        self._values = tuple(dsv for dsv in self._values if dsv not in removed)

    def copy(self, domain_names: Iterable[str], resolver: DomainResolver) -> KeyValues:
        """Return the overrides that can still apply for a partial context.

        An entry survives when its change set is unconditional or active and
        every token is the wildcard, equals the resolver's value for that
        axis, or faces an axis the resolver leaves absent. Per pattern only
        the strongest survivor is kept.
        """
        axis_values = [resolver.get_domain_value(name) for name in domain_names]
        active = frozenset(resolver.get_active_change_sets())
        result = KeyValues(self._key, self._dsv_factory, self._description)
        kept_patterns: set[str] = set()
        for dsv in self._values:
            if dsv.pattern in kept_patterns or not dsv.is_in_change_sets(active):
                continue
            if _tokens_cover(dsv.domain_values, axis_values):
                kept_patterns.add(dsv.pattern)
                result.put_with_change_set(dsv.change_set, dsv.value, *dsv.domain_values)
        return result

    def __str__(self) -> str:
        lines = [f'KeyValues{{\n\tdescription="{self._description}"\n']
        lines.extend(f"\t{dsv}\n" for dsv in self._values)
        lines.append("}")
        return "".join(lines)

    def __repr__(self) -> str:
        return f"KeyValues(key={self._key!r}, values={len(self._values)})"


def _tokens_cover(tokens: Sequence[str], axis_values: Sequence[str | None]) -> bool:
    for position, token in enumerate(tokens):
        if token == WILDCARD:
            continue
        value = axis_values[position] if position < len(axis_values) else None
        if value and token != value:
            return False
    return True


__all__ = ["KeyValues"]
