"""Domain enum tests: member values, string equality, and exhaustive member counts."""

from __future__ import annotations

import pytest

from domval.domain.enums import OutputFormat, PersistenceKind

# ======================== OutputFormat ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_value"),
    [
        (OutputFormat.HUMAN, "human"),
        (OutputFormat.JSON, "json"),
    ],
)
def test_output_format_member_values(member: OutputFormat, expected_value: str) -> None:
    """Each OutputFormat member must have the expected string value."""
    assert member.value == expected_value


@pytest.mark.os_agnostic
def test_output_format_compares_equal_to_plain_strings() -> None:
    """OutputFormat members compare equal to their plain string equivalents."""
    assert OutputFormat.JSON == "json"


@pytest.mark.os_agnostic
def test_output_format_member_count() -> None:
    assert len(OutputFormat) == 2


# ======================== PersistenceKind ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_value"),
    [
        (PersistenceKind.NONE, "none"),
        (PersistenceKind.MEMORY, "memory"),
        (PersistenceKind.JSON, "json"),
    ],
)
def test_persistence_kind_member_values(member: PersistenceKind, expected_value: str) -> None:
    """Each PersistenceKind member must have the expected string value."""
    assert member.value == expected_value


@pytest.mark.os_agnostic
def test_persistence_kind_parses_from_config_string() -> None:
    """Configuration strings map back onto members."""
    assert PersistenceKind("memory") is PersistenceKind.MEMORY


@pytest.mark.os_agnostic
def test_persistence_kind_member_count() -> None:
    assert len(PersistenceKind) == 3
