"""Change-set name to affected keys, for removal without a full key scan."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from ..domain.key_values import KeyValues


class ChangeSetIndex:
    """Remember which keys hold overrides tagged with a change set.

    The index may reference keys that no longer carry the change set; callers
    always re-read the :class:`KeyValues` before acting on an entry.

    Example:
        >>> index = ChangeSetIndex()
        >>> index.add("promo", "price")
        >>> sorted(index.keys_for("promo"))
        ['price']
        >>> index.keys_for("unknown")
        frozenset()
    """

    def __init__(self) -> None:
        self._keys: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    def add(self, change_set: str, key: str) -> None:
        with self._lock:
            self._keys.setdefault(change_set, set()).add(key)

    def record(self, key: str, key_values: KeyValues) -> None:
        """Index every change set present in *key_values* under *key*."""
        with self._lock:
            for dsv in key_values.domain_specific_values:
                if dsv.change_set is not None:
                    self._keys.setdefault(dsv.change_set, set()).add(key)

    def keys_for(self, change_set: str) -> frozenset[str]:
        with self._lock:
            return frozenset(self._keys.get(change_set, ()))

    def prune(self, change_set: str, key: str, key_values: KeyValues) -> None:
        """Drop *key* from *change_set* unless it is still tagged with it."""
        with self._lock:
            if any(dsv.change_set_is(change_set) for dsv in key_values.domain_specific_values):
                return
            self._discard(change_set, key)

    def discard(self, change_set: str, key: str) -> None:
        """Drop *key* from *change_set* unconditionally."""
        with self._lock:
            self._discard(change_set, key)

    def discard_key(self, key: str) -> None:
        """Drop *key* from every change set.

        Example:
            >>> index = ChangeSetIndex()
            >>> index.add("promo", "price")
            >>> index.add("winter", "price")
            >>> index.discard_key("price")
            >>> index.change_sets()
            []
        """
        with self._lock:
            for change_set in list(self._keys):
                self._discard(change_set, key)

    def _discard(self, change_set: str, key: str) -> None:
        keys = self._keys.get(change_set)
        if keys is None:
            return
        keys.discard(key)
        if not keys:
            del self._keys[change_set]

    def rebuild(self, items: Iterable[tuple[str, KeyValues]]) -> None:
        """Recompute the whole index from the given key map entries."""
        rebuilt: dict[str, set[str]] = {}
        for key, key_values in items:
            for dsv in key_values.domain_specific_values:
                if dsv.change_set is not None:
                    rebuilt.setdefault(dsv.change_set, set()).add(key)
        with self._lock:
            self._keys = rebuilt

    def change_sets(self) -> list[str]:
        with self._lock:
            return sorted(self._keys)


__all__ = ["ChangeSetIndex"]
