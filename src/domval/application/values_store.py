"""Key to :class:`KeyValues` registry with lazy, race-free materialization.

Contents:
    * :class:`ValuesStore` - the single in-memory source of truth.

System Role:
    Persistence is consulted on a cache miss and never owns the map. Reads of
    already present keys take no lock; only the insert-if-absent slow path
    and wholesale replacement run under the store's lock, so work on
    distinct keys never serializes on a global lock held across I/O.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping

from ..domain.factories import FactoryProvider
from ..domain.key_values import KeyValues
from ..domain.resolvers import DomainResolver
from .ports import Persistence

logger = logging.getLogger(__name__)

#: Called once for every KeyValues that gets installed from persistence.
InstallHook = Callable[[str, KeyValues], None]


class ValuesStore:
    """Own the key map; load from persistence on miss, first writer wins.

    Example:
        >>> store = ValuesStore(FactoryProvider())
        >>> store.get_or_load("greeting") is None
        True
        >>> created = store.get_or_create("greeting", "How to greet")
        >>> store.get_or_create("greeting") is created
        True
        >>> created.description
        'How to greet'
    """

    def __init__(
        self,
        factories: FactoryProvider,
        persistence: Persistence | None = None,
        *,
        on_install: InstallHook | None = None,
    ) -> None:
        self._factories = factories
        self._persistence = persistence
        self._on_install = on_install
        self._key_values: dict[str, KeyValues] = {}
        self._lock = threading.Lock()

    @property
    def persistence(self) -> Persistence | None:
        return self._persistence

    def get(self, key: str) -> KeyValues | None:
        """In-memory lookup only; never touches persistence."""
        return self._key_values.get(key)

    def get_or_load(self, key: str) -> KeyValues | None:
        """Return the in-memory entry, loading and installing it on a miss.

        When two threads load the same key concurrently, the first one to
        install wins and the other result is discarded.
        """
        key_values = self._key_values.get(key)
        if key_values is not None or self._persistence is None:
            return key_values
        loaded = self._persistence.load(key, self._factories.key_values_factory, self._factories.dsv_factory)
        if loaded is None:
            return None
        with self._lock:
            installed = self._key_values.setdefault(key, loaded)
        if installed is loaded:
            logger.debug("Loaded key %r from persistence", key)
            if self._on_install is not None:
                self._on_install(key, loaded)
        return installed

    def get_or_create(self, key: str, description: str | None = None) -> KeyValues:
        """Like :meth:`get_or_load`, creating an empty container as last resort.

        The description only applies when the container is newly created and
        the description is not blank.
        """
        key_values = self.get_or_load(key)
        if key_values is not None:
            return key_values
        with self._lock:
            key_values = self._key_values.get(key)
            if key_values is None:
                key_values = self._factories.key_values_factory.create(
                    key,
                    self._factories.dsv_factory,
                    description if description and description.strip() else None,
                )
                self._key_values[key] = key_values
        return key_values

    def remove(self, key: str) -> KeyValues | None:
        """Forget *key* in memory; persistence must be told separately."""
        with self._lock:
            return self._key_values.pop(key, None)

    def set_all(self, values: Mapping[str, KeyValues] | Iterable[KeyValues]) -> None:
        """Replace the whole map in one assignment."""
        if isinstance(values, Mapping):
            replacement = dict(values)
        else:
            replacement = {key_values.key: key_values for key_values in values}
        with self._lock:
            self._key_values = replacement

    def reload(self) -> bool:
        """Replace the map with what persistence currently reports.

        Keys known only in memory are discarded. Returns False without a
        persistence backend.
        """
        if self._persistence is None:
            return False
        current = dict(self._key_values)
        reloaded = self._persistence.reload(current, self._factories.key_values_factory, self._factories.dsv_factory)
        self.set_all(reloaded)
        return True

    def items(self) -> list[tuple[str, KeyValues]]:
        return list(self._key_values.items())

    def all_values(self) -> list[KeyValues]:
        return list(self._key_values.values())

    def get_all_values(self, domain_names: Iterable[str], resolver: DomainResolver) -> list[KeyValues]:
        """Filtered copies of every entry that still has applicable overrides."""
        names = tuple(domain_names)
        copies = (key_values.copy(names, resolver) for key_values in self.all_values())
        return [copy for copy in copies if copy.domain_specific_values]

    def dump(self) -> str:
        return "".join(f'\nKeyValues for "{key}": {key_values}' for key, key_values in self.items())

    def __len__(self) -> int:
        return len(self._key_values)

    def __contains__(self, key: object) -> bool:
        return key in self._key_values


__all__ = ["InstallHook", "ValuesStore"]
