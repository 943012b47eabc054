"""The override engine facade: keys, axes and change sets in one place.

Contents:
    * :class:`OverrideEngine` - resolve, define and remove domain-specific
      overrides, with write-through to an optional persistence backend.

System Role:
    Orchestrates the immutable axis list, the :class:`ValuesStore` and the
    :class:`ChangeSetIndex`. Persistence exceptions are never caught here;
    they reach the caller unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from types import TracebackType
from typing import TYPE_CHECKING, Any

from ..domain.errors import ConfigurationError, InvalidKeyError
from ..domain.factories import FactoryProvider
from ..domain.key_values import KeyValues
from ..domain.patterns import validate_domain_token
from ..domain.resolvers import DomainResolver
from ..domain.values import DomainSpecificValue
from .change_sets import ChangeSetIndex
from .ports import DomainInitializer, Persistence
from .values_store import ValuesStore

if TYPE_CHECKING:
    from .registry import EngineRegistry

logger = logging.getLogger(__name__)


def _trim_key(key: str) -> str:
    if not isinstance(key, str) or not key.strip():
        raise InvalidKeyError("key must not be empty")
    return key.strip()


class OverrideEngine:
    """Resolve configuration keys against a caller's context.

    Args:
        domains: Ordered axis names. Position defines precedence weight:
            later axes outrank all earlier ones combined.
        persistence: Optional backing store. When given, every stored key is
            loaded up front and all writes go through to it.
        factories: Construction hooks for values and containers.
        domain_initializer: Alternative source for the axis names.
        registry: Administrative registry to join; :meth:`close` leaves it.

    Raises:
        InvalidDomainError: An axis name is empty or contains the separator.
        ConfigurationError: Both ``domains`` and ``domain_initializer`` given.

    Example:
        >>> from domval.domain.resolvers import MapBackedDomainResolver
        >>> engine = OverrideEngine(["country", "locale"])
        >>> engine.set("greeting", "Hi")
        >>> engine.set("greeting", "Hallo", "DE")
        >>> engine.get("greeting", MapBackedDomainResolver().set("country", "DE"))
        'Hallo'
        >>> engine.get("greeting", MapBackedDomainResolver().set("country", "FR"))
        'Hi'
        >>> str(engine)
        'OverrideEngine{domains=[country, locale]}'
    """

    def __init__(
        self,
        domains: Iterable[str] = (),
        *,
        persistence: Persistence | None = None,
        factories: FactoryProvider | None = None,
        domain_initializer: DomainInitializer | None = None,
        registry: EngineRegistry | None = None,
    ) -> None:
        names = tuple(domains)
        if domain_initializer is not None:
            if names:
                raise ConfigurationError("pass either domains or a domain initializer, not both")
            names = tuple(domain_initializer.get_initial_domains())
        self._domains: tuple[str, ...] = tuple(validate_domain_token(name) for name in names)
        self._factories = factories if factories is not None else FactoryProvider()
        self._persistence = persistence
        self._change_sets = ChangeSetIndex()
        self._store = ValuesStore(self._factories, persistence, on_install=self._change_sets.record)
        if persistence is not None:
            self._store.set_all(persistence.load_all(self._factories.key_values_factory, self._factories.dsv_factory))
            self._change_sets.rebuild(self._store.items())
            logger.info("Preloaded %d keys from persistence", len(self._store))
        self._registry = registry
        if registry is not None:
            registry.register(self)

    @property
    def domains(self) -> tuple[str, ...]:
        return self._domains

    @property
    def persistence(self) -> Persistence | None:
        return self._persistence

    @property
    def factories(self) -> FactoryProvider:
        return self._factories

    def get(self, key: str, resolver: DomainResolver | None = None, default: Any = None) -> Any:
        """Return the most specific value for *key*, or *default*.

        Unknown keys and contexts without a matching override are not errors.

        Raises:
            InvalidKeyError: *key* is empty or blank.
            MissingResolverError: Axes are configured but *resolver* is None.
        """
        trimmed = _trim_key(key)
        key_values = self._store.get_or_load(trimmed)
        result = default if key_values is None else key_values.resolve(self._domains, default, resolver)
        logger.debug("Getting value for key %r with default %r, returning %r", trimmed, default, result)
        return result

    def get_or_define(
        self,
        key: str,
        default: Any,
        resolver: DomainResolver | None = None,
        description: str | None = None,
    ) -> Any:
        """Resolve *key*; when nothing resolves, store *default* unconditionally."""
        value = self.get(key, resolver)
        if value is not None:
            return value
        self.set(key, default, description=description)
        return default

    def set(self, key: str, value: Any, *domains: str, description: str | None = None) -> None:
        """Store an unconditional override for the given domain tokens."""
        trimmed = _trim_key(key)
        logger.debug("Storing value %r for key %r with domains %r", value, trimmed, domains)
        key_values = self._store.get_or_create(trimmed, description)
        key_values.put(value, *domains)
        if self._persistence is not None:
            self._persistence.store(trimmed, key_values, None)

    def set_with_change_set(
        self,
        key: str,
        value: Any,
        change_set: str,
        *domains: str,
        description: str | None = None,
    ) -> None:
        """Store an override that only applies while *change_set* is active."""
        trimmed = _trim_key(key)
        logger.debug(
            "Storing value %r for key %r in change set %r with domains %r", value, trimmed, change_set, domains
        )
        key_values = self._store.get_or_create(trimmed, description)
        key_values.put_with_change_set(change_set, value, *domains)
        self._change_sets.add(change_set, trimmed)
        if self._persistence is not None:
            self._persistence.store(trimmed, key_values, change_set)

    def remove(self, key: str, *domains: str) -> DomainSpecificValue | None:
        """Remove the unconditional override with exactly these domain tokens."""
        return self.remove_with_change_set(key, None, *domains)

    def remove_with_change_set(self, key: str, change_set: str | None, *domains: str) -> DomainSpecificValue | None:
        """Remove one override; persistence only hears about actual removals."""
        trimmed = _trim_key(key)
        key_values = self._store.get_or_load(trimmed)
        if key_values is None:
            return None
        removed = key_values.remove(change_set, *domains)
        if removed is None:
            return None
        if change_set is not None:
            self._change_sets.prune(change_set, trimmed, key_values)
        logger.debug("Removed %s from key %r", removed, trimmed)
        if self._persistence is not None:
            self._persistence.remove_value(trimmed, removed, change_set)
        return removed

    def remove_key(self, key: str) -> KeyValues | None:
        """Drop *key* with all its overrides, in memory and in persistence."""
        trimmed = _trim_key(key)
        removed = self._store.remove(trimmed)
        self._change_sets.discard_key(trimmed)
        logger.debug("Removed key %r", trimmed)
        if self._persistence is not None:
            self._persistence.remove_key(trimmed)
        return removed

    def remove_change_set(self, change_set: str) -> int:
        """Remove every override tagged with *change_set*.

        Returns:
            Number of overrides removed. Unknown change sets remove nothing.
        """
        removed_count = 0
        for key in self._change_sets.keys_for(change_set):
            key_values = self._store.get_or_load(key)
            if key_values is None:
                self._change_sets.discard(change_set, key)
                continue
            for dsv in key_values.remove_change_set(change_set):
                removed_count += 1
                if self._persistence is not None:
                    self._persistence.remove_value(key, dsv, change_set)
            self._change_sets.prune(change_set, key, key_values)
        logger.info("Removed change set %r (%d overrides)", change_set, removed_count)
        return removed_count

    def get_key_values(self, key: str) -> KeyValues | None:
        """In-memory lookup of the container for *key*; no persistence access."""
        return self._store.get(_trim_key(key))

    def get_all_key_values(self, resolver: DomainResolver | None = None) -> list[KeyValues]:
        """All containers, or with a resolver the copies that can still apply."""
        if resolver is None:
            return self._store.all_values()
        return self._store.get_all_values(self._domains, resolver)

    def get_all_mappings(self, resolver: DomainResolver | None = None) -> dict[str, Any]:
        """Resolve every known key; keys resolving to None are left out."""
        mappings: dict[str, Any] = {}
        for key, key_values in sorted(self._store.items()):
            value = key_values.resolve(self._domains, None, resolver)
            if value is not None:
                mappings[key] = value
        return mappings

    def change_sets(self) -> list[str]:
        """Names of change sets currently known to hold overrides."""
        return self._change_sets.change_sets()

    def reload(self) -> None:
        """Replace all in-memory state with what persistence reports."""
        if self._store.reload():
            self._change_sets.rebuild(self._store.items())
            logger.info("Reloaded %d keys from persistence", len(self._store))

    def dump(self) -> str:
        return f"OverrideEngine{{domains={_format_domains(self._domains)}{self._store.dump()}\n}}"

    def close(self) -> None:
        """Leave the registry this engine joined; safe to call twice."""
        registry, self._registry = self._registry, None
        if registry is not None:
            registry.deregister(self)

    def __enter__(self) -> OverrideEngine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __str__(self) -> str:
        return f"OverrideEngine{{domains={_format_domains(self._domains)}}}"

    def __repr__(self) -> str:
        return f"OverrideEngine(domains={self._domains!r}, keys={len(self._store)})"


def _format_domains(domains: Sequence[str]) -> str:
    return "[" + ", ".join(domains) + "]"


__all__ = ["OverrideEngine"]
