"""Pattern construction, specificity bitmasks, and matcher behaviour."""

from __future__ import annotations

import pytest

from domval.domain.errors import InvalidDomainError
from domval.domain.patterns import (
    DEFAULT_ORDERING,
    OrderedDomainPattern,
    PrefixMatcher,
    RegexMatcher,
    build_domain_string,
    build_ordered_pattern,
    compile_matcher,
    validate_domain_token,
)

# ======================== Ordering ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("tokens", "pattern", "ordering"),
    [
        ([], "", 1),
        (["a"], "a|", 3),
        (["a", "b"], "a|b|", 7),
        (["*", "b"], "*|b|", 5),
        (["a", "*"], "a|*|", 3),
        (["*", "*", "c"], "*|*|c|", 9),
        (["a", "b", "c"], "a|b|c|", 15),
    ],
)
def test_ordering_sets_one_bit_per_concrete_position(tokens: list[str], pattern: str, ordering: int) -> None:
    """Bit 0 is always set; bit i marks a concrete token at 1-based position i."""
    assert build_ordered_pattern(tokens) == OrderedDomainPattern(pattern, ordering)


@pytest.mark.os_agnostic
def test_empty_token_list_gives_the_default_ordering() -> None:
    assert build_ordered_pattern([]).ordering == DEFAULT_ORDERING


@pytest.mark.os_agnostic
def test_a_later_axis_outweighs_all_earlier_axes_combined() -> None:
    """Position 3 alone (8) beats positions 1 and 2 together (6 | 1)."""
    later = build_ordered_pattern(["*", "*", "c"])
    earlier = build_ordered_pattern(["a", "b"])
    assert later.ordering > earlier.ordering


@pytest.mark.os_agnostic
def test_pattern_tokens_round_trip_through_the_pattern_string() -> None:
    assert build_ordered_pattern(["DE", "*", "x"]).tokens == ("DE", "*", "x")


# ======================== Validation ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize("token", ["", "a|b", "|"])
def test_malformed_tokens_are_rejected(token: str) -> None:
    with pytest.raises(InvalidDomainError):
        validate_domain_token(token)


@pytest.mark.os_agnostic
def test_wildcard_is_a_valid_token() -> None:
    assert validate_domain_token("*") == "*"


# ======================== Domain strings ========================


@pytest.mark.os_agnostic
def test_domain_string_joins_values_with_trailing_separator() -> None:
    assert build_domain_string(["DE", "de_DE"]) == "DE|de_DE|"


@pytest.mark.os_agnostic
def test_absent_axis_value_becomes_an_empty_token() -> None:
    assert build_domain_string(["DE", None, "x"]) == "DE||x|"


@pytest.mark.os_agnostic
def test_resolver_value_containing_separator_is_rejected() -> None:
    """A resolver answering 'abc|def' violates its contract."""
    with pytest.raises(InvalidDomainError, match="may not contain"):
        build_domain_string(["abc|def"])


# ======================== Matchers ========================


@pytest.mark.os_agnostic
def test_literal_patterns_get_a_prefix_matcher() -> None:
    assert isinstance(compile_matcher("DE|"), PrefixMatcher)


@pytest.mark.os_agnostic
def test_wildcard_patterns_get_a_regex_matcher() -> None:
    assert isinstance(compile_matcher("*|b|"), RegexMatcher)


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("pattern", "domain_str", "expected"),
    [
        ("", "anything|", True),
        ("DE|", "DE|de_DE|", True),
        ("DE|", "DEX|", False),
        ("DE|de_DE|", "DE|", False),
        ("DE|de_DE|", "DE||", False),
        ("*|b|", "a|b|", True),
        ("*|b|", "|b|", True),
        ("*|b|", "a|c|", False),
        ("a|*|c|", "a|zzz|c|extra|", True),
        ("a|*|c|", "a|zzz|", False),
        ("*|", "x|", True),
    ],
)
def test_matcher_decisions(pattern: str, domain_str: str, expected: bool) -> None:
    """A pattern applies when its named axes agree with the query's values."""
    assert compile_matcher(pattern).matches(domain_str) is expected


@pytest.mark.os_agnostic
def test_regex_matcher_escapes_regex_metacharacters_in_literals() -> None:
    """Literal '.' and '+' match only themselves."""
    matcher = RegexMatcher("a.b|*|")
    assert matcher.matches("a.b|x|")
    assert not matcher.matches("axb|x|")
