"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class DomvalError(Exception):
    """Base class for every error raised by domval itself.

    Example:
        >>> issubclass(InvalidKeyError, DomvalError)
        True
    """


class InvalidKeyError(DomvalError, ValueError):
    """A configuration key was ``None``, empty, or whitespace only.

    Inherits from ValueError so callers treating malformed arguments
    generically keep catching it.

    Example:
        >>> err = InvalidKeyError("key must not be empty")
        >>> str(err)
        'key must not be empty'
        >>> isinstance(err, ValueError)
        True
    """


class InvalidDomainError(DomvalError, ValueError):
    """A domain token or axis name is empty or contains the separator.

    Raised both when storing an override with a malformed token and when a
    resolver answers with a value containing the separator character.

    Example:
        >>> str(InvalidDomainError("domain values may not contain '|'"))
        "domain values may not contain '|'"
    """


class MissingResolverError(DomvalError, ValueError):
    """Axes are configured but no resolver was supplied for resolution.

    Example:
        >>> isinstance(MissingResolverError("resolver required"), ValueError)
        True
    """


class ConfigurationError(DomvalError):
    """Missing, invalid, or incomplete configuration.

    Raised when the ``[domval]`` configuration section cannot be turned into
    engine settings. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> str(ConfigurationError("store_path is required for json persistence"))
        'store_path is required for json persistence'
    """


class PersistenceError(DomvalError):
    """A persistence backend failed to read or write its store.

    The engine never retries or suppresses these; they surface unchanged to
    the caller of the operation that triggered the I/O.

    Example:
        >>> str(PersistenceError("store is not valid JSON"))
        'store is not valid JSON'
    """


__all__ = [
    "ConfigurationError",
    "DomvalError",
    "InvalidDomainError",
    "InvalidKeyError",
    "MissingResolverError",
    "PersistenceError",
]
