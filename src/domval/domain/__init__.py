"""Domain layer - pure resolution logic with no I/O or framework dependencies.

Contains the override model and the precedence algorithm that decides which
domain-specific value wins for a caller's context.

Contents:
    * :mod:`.patterns` - Pattern strings, specificity bitmasks, matchers
    * :mod:`.values` - DomainSpecificValue and its precedence order
    * :mod:`.key_values` - Per-key override container and resolution
    * :mod:`.factories` - Pluggable construction of values and containers
    * :mod:`.resolvers` - Context resolver protocol and map-backed resolver
    * :mod:`.enums` - Domain enumerations (OutputFormat, PersistenceKind)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import OutputFormat, PersistenceKind
from .errors import (
    ConfigurationError,
    DomvalError,
    InvalidDomainError,
    InvalidKeyError,
    MissingResolverError,
    PersistenceError,
)
from .factories import (
    DefaultDomainSpecificValueFactory,
    DefaultKeyValuesFactory,
    DomainSpecificValueFactory,
    FactoryProvider,
    InterningDomainSpecificValueFactory,
    KeyValuesFactory,
)
from .key_values import KeyValues
from .patterns import (
    DEFAULT_ORDERING,
    SEPARATOR,
    WILDCARD,
    OrderedDomainPattern,
    build_domain_string,
    build_ordered_pattern,
    compile_matcher,
)
from .resolvers import DomainResolver, MapBackedDomainResolver
from .values import DomainSpecificValue

__all__ = [
    # Patterns
    "DEFAULT_ORDERING",
    "SEPARATOR",
    "WILDCARD",
    "OrderedDomainPattern",
    "build_domain_string",
    "build_ordered_pattern",
    "compile_matcher",
    # Model
    "DomainSpecificValue",
    "KeyValues",
    # Factories
    "DefaultDomainSpecificValueFactory",
    "DefaultKeyValuesFactory",
    "DomainSpecificValueFactory",
    "FactoryProvider",
    "InterningDomainSpecificValueFactory",
    "KeyValuesFactory",
    # Resolvers
    "DomainResolver",
    "MapBackedDomainResolver",
    # Enums
    "OutputFormat",
    "PersistenceKind",
    # Errors
    "ConfigurationError",
    "DomvalError",
    "InvalidDomainError",
    "InvalidKeyError",
    "MissingResolverError",
    "PersistenceError",
]
