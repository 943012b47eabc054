"""Persistence adapters - backing stores behind the Persistence port.

Contents:
    * :mod:`.records` - Pydantic record models and KeyValues codec
    * :mod:`.json_file` - Whole-document JSON file store (orjson)
"""

from __future__ import annotations

from .json_file import JsonFilePersistence
from .records import StoreDocument, StoredKey, StoredValue, decode_key_values, encode_key_values

__all__ = [
    "JsonFilePersistence",
    "StoreDocument",
    "StoredKey",
    "StoredValue",
    "decode_key_values",
    "encode_key_values",
]
