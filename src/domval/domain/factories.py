"""Pluggable construction of overrides and per-key containers.

Factories let callers swap how :class:`DomainSpecificValue` and
:class:`KeyValues` instances are built (for example string interning)
without touching resolution logic.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from .key_values import KeyValues
from .patterns import build_ordered_pattern, validate_domain_token
from .values import DomainSpecificValue


class DomainSpecificValueFactory(Protocol):
    """Create one override from a value, a change set and domain tokens."""

    def create(self, value: Any, change_set: str | None, domain_values: Sequence[str]) -> DomainSpecificValue: ...


class KeyValuesFactory(Protocol):
    """Create an empty container for one key."""

    def create(
        self,
        key: str,
        dsv_factory: DomainSpecificValueFactory,
        description: str | None = None,
    ) -> KeyValues: ...


class DefaultDomainSpecificValueFactory:
    """Build overrides from validated domain tokens.

    Example:
        >>> dsv = DefaultDomainSpecificValueFactory().create("v", None, ["DE", "*"])
        >>> (dsv.pattern, dsv.ordering)
        ('DE|*|', 3)
    """

    def create(self, value: Any, change_set: str | None, domain_values: Sequence[str]) -> DomainSpecificValue:
        tokens = [validate_domain_token(token) for token in domain_values]
        return DomainSpecificValue(build_ordered_pattern(tokens), value, change_set)


class InterningDomainSpecificValueFactory(DefaultDomainSpecificValueFactory):
    """Intern string values, change-set names and tokens before building.

    Many keys share the same domain tokens and string values, so interning
    keeps a single copy of each in memory.

    Example:
        >>> factory = InterningDomainSpecificValueFactory()
        >>> a = factory.create("".join(["va", "lue"]), None, ["DE"])
        >>> b = factory.create("".join(["val", "ue"]), None, ["FR"])
        >>> a.value is b.value
        True
    """

    def create(self, value: Any, change_set: str | None, domain_values: Sequence[str]) -> DomainSpecificValue:
        interned_tokens = [sys.intern(token) if isinstance(token, str) else token for token in domain_values]
        return super().create(
            _intern_if_str(value),
            sys.intern(change_set) if change_set is not None else None,
            interned_tokens,
        )


def _intern_if_str(value: Any) -> Any:
    # sys.intern rejects str subclasses
    if type(value) is str:
        return sys.intern(value)
    return value


class DefaultKeyValuesFactory:
    """Create plain :class:`KeyValues` containers."""

    def create(
        self,
        key: str,
        dsv_factory: DomainSpecificValueFactory,
        description: str | None = None,
    ) -> KeyValues:
        return KeyValues(key, dsv_factory, description)


@dataclass(frozen=True, slots=True)
class FactoryProvider:
    """Bundle of the two factories an engine needs.

    Example:
        >>> provider = FactoryProvider()
        >>> isinstance(provider.dsv_factory, InterningDomainSpecificValueFactory)
        True
    """

    key_values_factory: KeyValuesFactory = field(default_factory=DefaultKeyValuesFactory)
    dsv_factory: DomainSpecificValueFactory = field(default_factory=InterningDomainSpecificValueFactory)


__all__ = [
    "DefaultDomainSpecificValueFactory",
    "DefaultKeyValuesFactory",
    "DomainSpecificValueFactory",
    "FactoryProvider",
    "InterningDomainSpecificValueFactory",
    "KeyValuesFactory",
]
