"""Domain patterns, specificity orderings, and pattern matchers.

A pattern is the stored domain string of one override: its axis tokens
joined by :data:`SEPARATOR`, each followed by the separator. The ordering
is the specificity bitmask that drives precedence.

Contents:
    * :class:`OrderedDomainPattern` - pattern string plus ordering.
    * :func:`build_ordered_pattern` - tokens to pattern and bitmask.
    * :func:`build_domain_string` - query string from resolved axis values.
    * :class:`PrefixMatcher` / :class:`RegexMatcher` - precompiled matchers.
    * :func:`compile_matcher` - pick the matcher for a pattern.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final, Protocol

from .errors import InvalidDomainError

#: Separates axis tokens inside patterns and domain strings.
SEPARATOR: Final[str] = "|"

#: Reserved token meaning "any value for this axis".
WILDCARD: Final[str] = "*"

#: Ordering of the unconditional entry (no axis specified).
DEFAULT_ORDERING: Final[int] = 1


@dataclass(frozen=True, slots=True)
class OrderedDomainPattern:
    """A pattern string paired with its specificity bitmask.

    Example:
        >>> OrderedDomainPattern("", DEFAULT_ORDERING).tokens
        ()
        >>> OrderedDomainPattern("a|*|", 3).tokens
        ('a', '*')
    """

    pattern: str
    ordering: int

    @property
    def tokens(self) -> tuple[str, ...]:
        """Axis tokens recovered from the pattern string."""
        if not self.pattern:
            return ()
        return tuple(self.pattern.split(SEPARATOR)[:-1])


def validate_domain_token(token: str) -> str:
    """Reject empty tokens and tokens containing the separator.

    Example:
        >>> validate_domain_token("DE")
        'DE'
        >>> validate_domain_token("")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidDomainError: domain must not be empty
    """
    if not isinstance(token, str) or not token:
        raise InvalidDomainError("domain must not be empty")
    if SEPARATOR in token:
        raise InvalidDomainError(f"domain {token!r} may not contain {SEPARATOR!r}")
    return token


def build_ordered_pattern(tokens: Sequence[str]) -> OrderedDomainPattern:
    """Turn ordered axis tokens into a pattern and its specificity bitmask.

    Bit ``i + 1`` is set for every concrete token at position ``i``; bit 0
    is always set, so the empty token list yields the default ordering 1.

    Example:
        >>> build_ordered_pattern(["DE", "de_DE"])
        OrderedDomainPattern(pattern='DE|de_DE|', ordering=7)
        >>> build_ordered_pattern(["*", "b"])
        OrderedDomainPattern(pattern='*|b|', ordering=5)
        >>> build_ordered_pattern([])
        OrderedDomainPattern(pattern='', ordering=1)
    """
    ordering = DEFAULT_ORDERING
    for position, token in enumerate(tokens, start=1):
        if token != WILDCARD:
            ordering |= 1 << position
    pattern = "".join(f"{token}{SEPARATOR}" for token in tokens)
    return OrderedDomainPattern(pattern, ordering)


def build_domain_string(values: Iterable[str | None]) -> str:
    """Join resolved axis values into the query domain string.

    ``None`` becomes an empty token. A value containing the separator is a
    contract violation of the resolver.

    Example:
        >>> build_domain_string(["DE", None, "x"])
        'DE||x|'
    """
    parts: list[str] = []
    for value in values:
        token = "" if value is None else value
        if SEPARATOR in token:
            raise InvalidDomainError(f"domain values may not contain {SEPARATOR!r}: {token!r}")
        parts.append(token)
        parts.append(SEPARATOR)
    return "".join(parts)


class Matcher(Protocol):
    """Decides whether a stored pattern applies to a query domain string."""

    def matches(self, domain_str: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class PrefixMatcher:
    """Matches when the literal pattern is a prefix of the domain string.

    A pattern naming fewer axes than the query still matches on the axes it
    names.

    Example:
        >>> PrefixMatcher("DE|").matches("DE|de_DE|")
        True
        >>> PrefixMatcher("DE|de_DE|").matches("DE|")
        False
    """

    pattern: str

    def matches(self, domain_str: str) -> bool:
        return domain_str.startswith(self.pattern)


class RegexMatcher:
    """Matches wildcard patterns through a regex compiled once per pattern.

    Wildcard tokens match any single token (including the empty one an absent
    axis value produces); literal tokens match exactly; anything beyond the
    pattern's own length is accepted.

    Example:
        >>> RegexMatcher("*|b|").matches("anything|b|")
        True
        >>> RegexMatcher("a|*|").matches("x|b|")
        False
        >>> RegexMatcher("*|b|").matches("|b|c|")
        True
    """

    __slots__ = ("_pattern", "_regex")

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._regex = re.compile(_to_regex(pattern))

    def matches(self, domain_str: str) -> bool:
        if domain_str.startswith(self._pattern):
            return True
        return self._regex.fullmatch(domain_str) is not None

    def __repr__(self) -> str:
        return f"RegexMatcher({self._pattern!r})"


def _to_regex(pattern: str) -> str:
    """Translate a wildcard pattern into an anchored regular expression."""
    any_token = f"[^{re.escape(SEPARATOR)}]*"
    return any_token.join(re.escape(part) for part in pattern.split(WILDCARD)) + ".*"


def compile_matcher(pattern: str) -> Matcher:
    """Return the cheapest matcher able to evaluate *pattern*.

    Example:
        >>> compile_matcher("a|b|")
        PrefixMatcher(pattern='a|b|')
        >>> compile_matcher("*|b|")
        RegexMatcher('*|b|')
    """
    if WILDCARD in pattern:
        return RegexMatcher(pattern)
    return PrefixMatcher(pattern)


__all__ = [
    "DEFAULT_ORDERING",
    "Matcher",
    "OrderedDomainPattern",
    "PrefixMatcher",
    "RegexMatcher",
    "SEPARATOR",
    "WILDCARD",
    "build_domain_string",
    "build_ordered_pattern",
    "compile_matcher",
    "validate_domain_token",
]
