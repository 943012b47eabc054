"""Pydantic record models and the codec between records and KeyValues.

Persistence adapters store plain records and rebuild :class:`KeyValues`
through the factories the engine hands them, so interning and custom
containers survive a round trip through storage.

Contents:
    * :class:`StoredValue` - one override as stored.
    * :class:`StoredKey` - all overrides of one key.
    * :class:`StoreDocument` - whole-store document for file backends.
    * :func:`encode_key_values` / :func:`decode_key_values` - the codec.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ...domain.factories import DomainSpecificValueFactory, KeyValuesFactory
from ...domain.key_values import KeyValues
from ...domain.values import DomainSpecificValue


class StoredValue(BaseModel):
    """One override: domain tokens, payload and optional change set.

    Example:
        >>> StoredValue(domains=["DE"], value="Hallo").change_set is None
        True
    """

    model_config = ConfigDict(frozen=True)

    domains: list[str] = Field(default_factory=list)
    value: Any = None
    change_set: str | None = None

    def describes(self, dsv: DomainSpecificValue) -> bool:
        """True when this record stores the same override identity as *dsv*."""
        return tuple(self.domains) == dsv.domain_values and self.change_set == dsv.change_set


class StoredKey(BaseModel):
    """All overrides stored for one key."""

    model_config = ConfigDict(frozen=True)

    key: str
    description: str = ""
    values: list[StoredValue] = Field(default_factory=list)


class StoreDocument(BaseModel):
    """Top-level document written by file-based backends."""

    model_config = ConfigDict(frozen=True)

    keys: list[StoredKey] = Field(default_factory=list)


def encode_key_values(key: str, key_values: KeyValues) -> StoredKey:
    """Snapshot *key_values* into a record, strongest override first.

    Example:
        >>> from domval.domain.factories import DefaultDomainSpecificValueFactory
        >>> kv = KeyValues("greeting", DefaultDomainSpecificValueFactory(), "How to greet")
        >>> _ = kv.put("Hallo", "DE")
        >>> encode_key_values("greeting", kv).values[0].domains
        ['DE']
    """
    return StoredKey(
        key=key,
        description=key_values.description,
        values=[
            StoredValue(domains=list(dsv.domain_values), value=dsv.value, change_set=dsv.change_set)
            for dsv in key_values.domain_specific_values
        ],
    )


def decode_key_values(
    record: StoredKey,
    kv_factory: KeyValuesFactory,
    dsv_factory: DomainSpecificValueFactory,
) -> KeyValues:
    """Rebuild a :class:`KeyValues` from a record through the given factories."""
    key_values = kv_factory.create(record.key, dsv_factory, record.description or None)
    for stored in record.values:
        key_values.put_with_change_set(stored.change_set, stored.value, *stored.domains)
    return key_values


def without_value(record: StoredKey, dsv: DomainSpecificValue) -> StoredKey:
    """Return *record* minus the stored override matching *dsv*."""
    return record.model_copy(update={"values": [stored for stored in record.values if not stored.describes(dsv)]})


__all__ = [
    "StoreDocument",
    "StoredKey",
    "StoredValue",
    "decode_key_values",
    "encode_key_values",
    "without_value",
]
