"""BoundEngine: an engine paired with one fixed context."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from domval.application.bound import BoundEngine
from domval.application.engine import OverrideEngine
from domval.domain.resolvers import MapBackedDomainResolver


@pytest.mark.os_agnostic
def test_lookups_use_the_bound_context(
    greeting_engine: OverrideEngine, resolver_for: Callable[..., MapBackedDomainResolver]
) -> None:
    greeting_engine.set("greeting", "Hi")
    bound = BoundEngine(greeting_engine, resolver_for(country="DE"))

    bound.set("greeting", "Hallo", "DE")

    assert bound.get("greeting") == "Hallo"
    assert greeting_engine.get("greeting", resolver_for(country="FR")) == "Hi"


@pytest.mark.os_agnostic
def test_get_falls_back_to_the_default(
    greeting_engine: OverrideEngine, resolver_for: Callable[..., MapBackedDomainResolver]
) -> None:
    bound = BoundEngine(greeting_engine, resolver_for())

    assert bound.get("missing", "fallback") == "fallback"


@pytest.mark.os_agnostic
def test_get_or_define_stores_through_the_engine(
    greeting_engine: OverrideEngine, resolver_for: Callable[..., MapBackedDomainResolver]
) -> None:
    bound = BoundEngine(greeting_engine, resolver_for(country="DE"))

    assert bound.get_or_define("timeout", 30, "Request timeout") == 30
    key_values = greeting_engine.get_key_values("timeout")
    assert key_values is not None
    assert key_values.description == "Request timeout"


@pytest.mark.os_agnostic
def test_both_collaborators_are_required(greeting_engine: OverrideEngine) -> None:
    with pytest.raises(ValueError, match="required"):
        BoundEngine(greeting_engine, None)  # type: ignore[arg-type]


@pytest.mark.os_agnostic
def test_repr_shows_engine_and_context(
    greeting_engine: OverrideEngine, resolver_for: Callable[..., MapBackedDomainResolver]
) -> None:
    bound = BoundEngine(greeting_engine, resolver_for(country="DE"))

    assert repr(bound) == (
        "BoundEngine{engine=OverrideEngine{domains=[country, locale]}, resolver=MapBackedDomainResolver{country=DE}}"
    )
