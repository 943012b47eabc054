"""``--set SECTION.KEY=VALUE`` overrides for the loaded configuration.

Values are read as JSON when they parse, so ``--set domval.domains='["country"]'``
yields a list while ``--set domval.persistence=json`` stays a string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Everything :func:`coerce_value` may return."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` entry."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Only the first ``=`` splits path from value, so values may contain ``=``.

    Raises:
        ValueError: No ``=``, no dot in the path, or an empty path component.

    Examples:
        >>> override = parse_override("domval.persistence=json")
        >>> (override.section, override.key_path, override.value)
        ('domval', ('persistence',), 'json')

        >>> parse_override("lib_log_rich.payload_limits.max_chars=8192").key_path
        ('payload_limits', 'max_chars')
    """
    path, separator, value = raw.partition("=")
    if not separator:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    section, dot, key = path.partition(".")
    if not dot:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    key_path = tuple(key.split("."))
    if not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")
    return ConfigOverride(section=section, key_path=key_path, value=coerce_value(value))


def coerce_value(raw: str) -> CoercedValue:
    """Parse *raw* as JSON, falling back to the string itself.

    Examples:
        >>> coerce_value("true"), coerce_value("42"), coerce_value("3.5")
        (True, 42, 3.5)
        >>> coerce_value('["country", "locale"]')
        ['country', 'locale']
        >>> coerce_value("Hallo")
        'Hallo'
        >>> coerce_value("null") is None
        True
        >>> coerce_value("")
        ''
    """
    if not raw:
        return ""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Write *override* into the nested mapping handed to ``Config.with_overrides``.

    Raises:
        TypeError: An earlier override put a scalar where a table is needed.

    Example:
        >>> nested: dict[str, dict[str, object]] = {}
        >>> _nest_override(nested, ConfigOverride("domval", ("a", "b"), 1))
        >>> nested
        {'domval': {'a': {'b': 1}}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    *parents, leaf = override.key_path
    for part in parents:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise TypeError(f"Expected dict at key {part!r}, got {type(child).__name__}")
        node = cast("dict[str, object]", child)
    node[leaf] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return *config* with every ``--set`` entry deep-merged in.

    Raises:
        ValueError: An entry is malformed.

    Example:
        >>> cfg = Config({"domval": {"persistence": "none"}}, {})
        >>> apply_overrides(cfg, ("domval.persistence=memory",))["domval"]["persistence"]
        'memory'
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config
    nested: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(nested, parse_override(raw))
    return config.with_overrides(nested)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
