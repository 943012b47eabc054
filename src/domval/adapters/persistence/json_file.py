"""Whole-document JSON file persistence using orjson.

Every write re-serializes the full store into a sibling temporary file and
atomically replaces the target, so readers never observe a partial
document. A missing file is an empty store.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping
from pathlib import Path

import orjson
from pydantic import ValidationError

from ...domain.errors import InvalidDomainError, PersistenceError
from ...domain.factories import DomainSpecificValueFactory, KeyValuesFactory
from ...domain.key_values import KeyValues
from ...domain.values import DomainSpecificValue
from .records import StoreDocument, StoredKey, decode_key_values, encode_key_values, without_value

logger = logging.getLogger(__name__)


class JsonFilePersistence:
    """Persist every key of an engine in one JSON document.

    Args:
        path: Target file. Parent directories are created on first write.

    Raises:
        PersistenceError: Reading, parsing, validating or writing failed.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(
        self, key: str, kv_factory: KeyValuesFactory, dsv_factory: DomainSpecificValueFactory
    ) -> KeyValues | None:
        with self._lock:
            record = self._read().get(key)
        if record is None:
            return None
        return self._decode(record, kv_factory, dsv_factory)

    def load_all(
        self, kv_factory: KeyValuesFactory, dsv_factory: DomainSpecificValueFactory
    ) -> dict[str, KeyValues]:
        with self._lock:
            records = self._read()
        return {key: self._decode(record, kv_factory, dsv_factory) for key, record in records.items()}

    def reload(
        self,
        current: Mapping[str, KeyValues],
        kv_factory: KeyValuesFactory,
        dsv_factory: DomainSpecificValueFactory,
    ) -> dict[str, KeyValues]:
        """Return the file's current content; *current* is not merged in."""
        return self.load_all(kv_factory, dsv_factory)

    def store(self, key: str, key_values: KeyValues, change_set: str | None) -> None:
        """Write the current state of *key_values*, snapshotted under the file lock."""
        with self._lock:
            records = self._read()
            records[key] = encode_key_values(key, key_values)
            self._write(records)

    def remove_value(self, key: str, dsv: DomainSpecificValue, change_set: str | None) -> None:
        with self._lock:
            records = self._read()
            record = records.get(key)
            if record is None:
                return
            records[key] = without_value(record, dsv)
            self._write(records)

    def remove_key(self, key: str) -> None:
        with self._lock:
            records = self._read()
            if records.pop(key, None) is not None:
                self._write(records)

    def _decode(
        self, record: StoredKey, kv_factory: KeyValuesFactory, dsv_factory: DomainSpecificValueFactory
    ) -> KeyValues:
        try:
            return decode_key_values(record, kv_factory, dsv_factory)
        except InvalidDomainError as exc:
            raise PersistenceError(f"Invalid record for key {record.key!r} in {self._path}: {exc}") from exc

    def _read(self) -> dict[str, StoredKey]:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self._path}: {exc}") from exc
        if not raw.strip():
            return {}
        try:
            document = StoreDocument.model_validate(orjson.loads(raw))
        except (orjson.JSONDecodeError, ValidationError) as exc:
            raise PersistenceError(f"Invalid store document {self._path}: {exc}") from exc
        return {record.key: record for record in document.keys}

    def _write(self, records: Mapping[str, StoredKey]) -> None:
        document = StoreDocument(keys=[records[key] for key in sorted(records)])
        try:
            payload = orjson.dumps(document.model_dump(mode="json"), option=orjson.OPT_INDENT_2)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(f"Value is not JSON serializable: {exc}") from exc
        temporary = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temporary.write_bytes(payload)
            os.replace(temporary, self._path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._path}: {exc}") from exc
        logger.debug("Wrote %d keys to %s", len(records), self._path)

    def __repr__(self) -> str:
        return f"JsonFilePersistence({str(self._path)!r})"


__all__ = ["JsonFilePersistence"]
