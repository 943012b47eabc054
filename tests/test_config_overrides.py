"""``--set`` override parsing, value coercion and merging into Config."""

from __future__ import annotations

import pytest
from lib_layered_config import Config

from domval.adapters.config.overrides import apply_overrides, coerce_value, parse_override

# ======================== parse_override ========================


@pytest.mark.os_agnostic
def test_simple_override_splits_section_and_key() -> None:
    override = parse_override("domval.persistence=json")

    assert override.section == "domval"
    assert override.key_path == ("persistence",)
    assert override.value == "json"


@pytest.mark.os_agnostic
def test_nested_override_keeps_the_whole_key_path() -> None:
    override = parse_override("lib_log_rich.payload_limits.max_chars=8192")

    assert override.key_path == ("payload_limits", "max_chars")
    assert override.value == 8192


@pytest.mark.os_agnostic
def test_value_may_contain_equals() -> None:
    assert parse_override("domval.store_path=/tmp/a=b.json").value == "/tmp/a=b.json"


@pytest.mark.os_agnostic
def test_empty_value_is_an_empty_string() -> None:
    assert parse_override("domval.store_path=").value == ""


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("domval.persistence", "must contain '='"),
        ("persistence=json", "at least one dot"),
        ("=json", "at least one dot"),
        (".persistence=json", "section name is empty"),
        ("domval..persistence=json", "empty component"),
        ("domval.=json", "empty component"),
    ],
)
def test_malformed_overrides_are_rejected(raw: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_override(raw)


# ======================== coerce_value ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        ("false", False),
        ("42", 42),
        ("-7", -7),
        ("2.5", 2.5),
        ("1e3", 1000.0),
        ("null", None),
        ('["country", "locale"]', ["country", "locale"]),
        ('{"max": 5}', {"max": 5}),
        ("Hallo", "Hallo"),
        ("Grüß Gott", "Grüß Gott"),
        ("", ""),
    ],
)
def test_values_are_read_as_json_with_string_fallback(raw: str, expected: object) -> None:
    assert coerce_value(raw) == expected


# ======================== apply_overrides ========================


@pytest.fixture
def base_config() -> Config:
    return Config({"domval": {"domains": [], "persistence": "none"}, "lib_log_rich": {"service": "domval"}}, {})


@pytest.mark.os_agnostic
def test_no_overrides_return_the_same_instance(base_config: Config) -> None:
    assert apply_overrides(base_config, ()) is base_config


@pytest.mark.os_agnostic
def test_overrides_replace_values(base_config: Config) -> None:
    result = apply_overrides(base_config, ('domval.domains=["country"]', "domval.persistence=memory"))

    assert result["domval"]["domains"] == ["country"]
    assert result["domval"]["persistence"] == "memory"


@pytest.mark.os_agnostic
def test_untouched_sections_survive(base_config: Config) -> None:
    result = apply_overrides(base_config, ("domval.persistence=memory",))

    assert result["lib_log_rich"]["service"] == "domval"


@pytest.mark.os_agnostic
def test_missing_sections_are_created(base_config: Config) -> None:
    result = apply_overrides(base_config, ("extra.nested.flag=true",))

    assert result["extra"]["nested"]["flag"] is True


@pytest.mark.os_agnostic
def test_original_config_is_not_mutated(base_config: Config) -> None:
    apply_overrides(base_config, ("domval.persistence=memory",))

    assert base_config["domval"]["persistence"] == "none"


@pytest.mark.os_agnostic
def test_malformed_entry_raises(base_config: Config) -> None:
    with pytest.raises(ValueError, match="must contain '='"):
        apply_overrides(base_config, ("domval.persistence",))
