"""In-memory persistence adapter for testing.

Keeps the same record shape as the file-backed store so tests exercise the
real codec, and records every write-through call for assertions.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping

from ...domain.factories import DomainSpecificValueFactory, KeyValuesFactory
from ...domain.key_values import KeyValues
from ...domain.values import DomainSpecificValue
from ..persistence.records import StoredKey, decode_key_values, encode_key_values, without_value


class InMemoryPersistence:
    """Dictionary of :class:`StoredKey` records guarded by a lock.

    Example:
        >>> from domval.domain.factories import FactoryProvider
        >>> persistence = InMemoryPersistence()
        >>> persistence.put_record(StoredKey(key="greeting", values=[{"value": "Hi"}]))
        >>> provider = FactoryProvider()
        >>> kv = persistence.load("greeting", provider.key_values_factory, provider.dsv_factory)
        >>> kv.get_default_value()
        'Hi'
    """

    def __init__(self) -> None:
        self._records: dict[str, StoredKey] = {}
        self._lock = threading.Lock()
        self.calls: list[tuple[str, str]] = []

    @property
    def records(self) -> dict[str, StoredKey]:
        with self._lock:
            return dict(self._records)

    def put_record(self, record: StoredKey) -> None:
        """Seed a record directly, bypassing any engine."""
        with self._lock:
            self._records[record.key] = record

    def load(
        self, key: str, kv_factory: KeyValuesFactory, dsv_factory: DomainSpecificValueFactory
    ) -> KeyValues | None:
        with self._lock:
            self.calls.append(("load", key))
            record = self._records.get(key)
        if record is None:
            return None
        return decode_key_values(record, kv_factory, dsv_factory)

    def load_all(
        self, kv_factory: KeyValuesFactory, dsv_factory: DomainSpecificValueFactory
    ) -> dict[str, KeyValues]:
        with self._lock:
            records = dict(self._records)
        return {key: decode_key_values(record, kv_factory, dsv_factory) for key, record in records.items()}

    def reload(
        self,
        current: Mapping[str, KeyValues],
        kv_factory: KeyValuesFactory,
        dsv_factory: DomainSpecificValueFactory,
    ) -> dict[str, KeyValues]:
        with self._lock:
            self.calls.append(("reload", ""))
        return self.load_all(kv_factory, dsv_factory)

    def store(self, key: str, key_values: KeyValues, change_set: str | None) -> None:
        with self._lock:
            self.calls.append(("store", key))
            self._records[key] = encode_key_values(key, key_values)

    def remove_value(self, key: str, dsv: DomainSpecificValue, change_set: str | None) -> None:
        with self._lock:
            self.calls.append(("remove_value", key))
            record = self._records.get(key)
            if record is not None:
                self._records[key] = without_value(record, dsv)

    def remove_key(self, key: str) -> None:
        with self._lock:
            self.calls.append(("remove_key", key))
            self._records.pop(key, None)


__all__ = ["InMemoryPersistence"]
