"""A single domain-specific override and its precedence order."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from .patterns import Matcher, OrderedDomainPattern, compile_matcher


class DomainSpecificValue:
    """One override entry: pattern, ordering, value and optional change set.

    Identity is ``(pattern, ordering, change_set)``; the value is not part of
    it, so setting the same override twice updates the value in place.

    Instances sort in precedence order, highest first:

    1. larger ordering bitmask (full integer comparison),
    2. an entry with a change set before one without,
    3. change-set names ascending (alphabetically earlier wins),
    4. pattern strings ascending.

    Example:
        >>> from domval.domain.patterns import build_ordered_pattern
        >>> country = DomainSpecificValue(build_ordered_pattern(["DE"]), "Hallo")
        >>> default = DomainSpecificValue(build_ordered_pattern([]), "Hi")
        >>> sorted([default, country])[0].value
        'Hallo'
        >>> str(country)
        'DomainSpecificValue{pattern="DE|", ordering=3, value="Hallo"}'
    """

    __slots__ = ("_ordered_pattern", "_change_set", "_matcher", "value")

    def __init__(self, ordered_pattern: OrderedDomainPattern, value: Any, change_set: str | None = None) -> None:
        self._ordered_pattern = ordered_pattern
        self._change_set = change_set
        self._matcher: Matcher = compile_matcher(ordered_pattern.pattern)
        self.value = value

    @property
    def pattern(self) -> str:
        return self._ordered_pattern.pattern

    @property
    def ordering(self) -> int:
        return self._ordered_pattern.ordering

    @property
    def change_set(self) -> str | None:
        return self._change_set

    @property
    def domain_values(self) -> tuple[str, ...]:
        """The domain tokens this override was stored with."""
        return self._ordered_pattern.tokens

    def matches(self, domain_str: str) -> bool:
        return self._matcher.matches(domain_str)

    def change_set_is(self, change_set: str | None) -> bool:
        """Return True when tagged with exactly *change_set* (None matches None)."""
        return self._change_set == change_set

    def is_in_change_sets(self, active_change_sets: Collection[str]) -> bool:
        """Unconditional entries always pass; tagged ones only while active."""
        return self._change_set is None or self._change_set in active_change_sets

    def precedence_key(self) -> tuple[int, int, str, str]:
        """Sort key realising the precedence order (ascending = stronger)."""
        if self._change_set is None:
            return (-self.ordering, 1, "", self.pattern)
        return (-self.ordering, 0, self._change_set, self.pattern)

    def identity(self) -> tuple[str, int, str | None]:
        return (self.pattern, self.ordering, self._change_set)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainSpecificValue):
            return NotImplemented
        return self.identity() == other.identity()

    def __hash__(self) -> int:
        return hash(self.identity())

    def __lt__(self, other: DomainSpecificValue) -> bool:
        return self.precedence_key() < other.precedence_key()

    def __repr__(self) -> str:
        return (
            f"DomainSpecificValue(pattern={self.pattern!r}, ordering={self.ordering}, "
            f"value={self.value!r}, change_set={self._change_set!r})"
        )

    def __str__(self) -> str:
        text = f'DomainSpecificValue{{pattern="{self.pattern}", ordering={self.ordering}, value="{self.value}"'
        if self._change_set is not None:
            text += f', changeSet="{self._change_set}"'
        return text + "}"


__all__ = ["DomainSpecificValue"]
