"""Override inspection and maintenance CLI commands.

Every command builds an engine from the ``[domval]`` section of the loaded
configuration, so state only outlives a single invocation with a persistent
backend such as ``persistence = "json"``.

Contents:
    * :func:`cli_get` - Resolve a key for a context.
    * :func:`cli_set` - Store an override.
    * :func:`cli_remove` - Remove one override.
    * :func:`cli_remove_key` - Remove a key with all overrides.
    * :func:`cli_remove_change_set` - Remove all overrides of a change set.
    * :func:`cli_dump` - Dump every key and override.
    * :func:`cli_mappings` - Resolve every key for a context.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import lib_log_rich.runtime
import orjson
import rich_click as click

from domval.adapters.config.overrides import coerce_value
from domval.application.engine import OverrideEngine
from domval.domain.enums import OutputFormat
from domval.domain.errors import ConfigurationError, DomvalError, PersistenceError
from domval.domain.resolvers import MapBackedDomainResolver

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

_CONTEXT_OPTION = click.option(
    "--ctx",
    "contexts",
    multiple=True,
    metavar="AXIS=VALUE",
    help="Context value for one axis (repeatable).",
)
_ACTIVE_CHANGE_SETS_OPTION = click.option(
    "--change-set",
    "change_sets",
    multiple=True,
    metavar="NAME",
    help="Activate a change set for this resolution (repeatable).",
)
_FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)


def build_resolver(contexts: Sequence[str], change_sets: Sequence[str] = ()) -> MapBackedDomainResolver:
    """Turn ``AXIS=VALUE`` strings and change-set names into a resolver.

    Raises:
        click.BadParameter: A context entry lacks ``=`` or an axis name.

    Example:
        >>> resolver = build_resolver(["country=DE"], ["promo"])
        >>> resolver.get_domain_value("country")
        'DE'
        >>> sorted(resolver.get_active_change_sets())
        ['promo']
    """
    resolver = MapBackedDomainResolver()
    for raw in contexts:
        axis, separator, value = raw.partition("=")
        if not separator or not axis.strip():
            raise click.BadParameter(f"expected AXIS=VALUE, got {raw!r}", param_hint="--ctx")
        resolver.set(axis.strip(), value)
    return resolver.add_active_change_sets(*change_sets)


def render_value(value: Any) -> str:
    """Strings print as-is; everything else prints as JSON.

    Example:
        >>> render_value("Hallo")
        'Hallo'
        >>> render_value([1, 2])
        '[1,2]'
    """
    if isinstance(value, str):
        return value
    return orjson.dumps(value).decode()


@contextmanager
def _engine_session(ctx: click.Context, command: str, **extra: object) -> Iterator[OverrideEngine]:
    """Build the engine, bind log context, and map domain errors to exit codes."""
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id=f"cli-{command}", extra={"command": command, **extra}):
        try:
            with cli_ctx.services.build_engine(cli_ctx.config) as engine:
                yield engine
        except ConfigurationError as exc:
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(ExitCode.CONFIG_ERROR) from exc
        except PersistenceError as exc:
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(ExitCode.PERSISTENCE_FAILURE) from exc
        except (DomvalError, ValueError) as exc:
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


@click.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@_CONTEXT_OPTION
@_ACTIVE_CHANGE_SETS_OPTION
@click.option("--default", "default", default=None, help="Value printed when nothing matches.")
@click.pass_context
def cli_get(
    ctx: click.Context, key: str, contexts: tuple[str, ...], change_sets: tuple[str, ...], default: str | None
) -> None:
    """Resolve KEY for the given context and print the winning value."""
    resolver = build_resolver(contexts, change_sets)
    with _engine_session(ctx, "get", key=key) as engine:
        value = engine.get(key, resolver, coerce_value(default) if default is not None else None)
    if value is None:
        click.echo(f"No value for {key!r}", err=True)
        raise SystemExit(ExitCode.NOT_FOUND)
    click.echo(render_value(value))


@click.command("set", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.argument("value")
@click.argument("domains", nargs=-1)
@click.option("--change-set", "change_set", default=None, help="Tag the override with a change set.")
@click.option("--description", default=None, help="Description used when the key is new.")
@click.pass_context
def cli_set(
    ctx: click.Context,
    key: str,
    value: str,
    domains: tuple[str, ...],
    change_set: str | None,
    description: str | None,
) -> None:
    """Store VALUE for KEY, optionally scoped to DOMAIN tokens in axis order.

    Use ``*`` as a token to match any value on that axis. VALUE is parsed as
    JSON when possible, otherwise stored as a string.
    """
    with _engine_session(ctx, "set", key=key, change_set=change_set) as engine:
        parsed = coerce_value(value)
        if change_set is None:
            engine.set(key, parsed, *domains, description=description)
        else:
            engine.set_with_change_set(key, parsed, change_set, *domains, description=description)
        logger.info("Stored override", extra={"key": key, "domains": list(domains)})
    click.echo(f"Stored {key}")


@click.command("remove", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.argument("domains", nargs=-1)
@click.option("--change-set", "change_set", default=None, help="Change set of the override to remove.")
@click.pass_context
def cli_remove(ctx: click.Context, key: str, domains: tuple[str, ...], change_set: str | None) -> None:
    """Remove the override of KEY stored with exactly these DOMAIN tokens."""
    with _engine_session(ctx, "remove", key=key, change_set=change_set) as engine:
        removed = engine.remove_with_change_set(key, change_set, *domains)
    if removed is None:
        click.echo(f"No matching override for {key!r}", err=True)
        raise SystemExit(ExitCode.NOT_FOUND)
    click.echo(f"Removed {removed}")


@click.command("remove-key", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.pass_context
def cli_remove_key(ctx: click.Context, key: str) -> None:
    """Remove KEY together with all its overrides."""
    with _engine_session(ctx, "remove-key", key=key) as engine:
        engine.remove_key(key)
    click.echo(f"Removed key {key}")


@click.command("remove-change-set", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name")
@click.pass_context
def cli_remove_change_set(ctx: click.Context, name: str) -> None:
    """Remove every override tagged with change set NAME."""
    with _engine_session(ctx, "remove-change-set", change_set=name) as engine:
        removed = engine.remove_change_set(name)
    click.echo(f"Removed {removed} override(s) of change set {name}")


@click.command("dump", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--key", default=None, help="Dump only this key.")
@click.pass_context
def cli_dump(ctx: click.Context, key: str | None) -> None:
    """Print every key with its overrides in precedence order."""
    with _engine_session(ctx, "dump") as engine:
        if key is None:
            click.echo(engine.dump())
            return
        key_values = engine.get_key_values(key)
    if key_values is None:
        click.echo(f"No value for {key!r}", err=True)
        raise SystemExit(ExitCode.NOT_FOUND)
    click.echo(str(key_values))


@click.command("mappings", context_settings=CLICK_CONTEXT_SETTINGS)
@_CONTEXT_OPTION
@_ACTIVE_CHANGE_SETS_OPTION
@_FORMAT_OPTION
@click.pass_context
def cli_mappings(
    ctx: click.Context, contexts: tuple[str, ...], change_sets: tuple[str, ...], output_format: str
) -> None:
    """Resolve every known key for the given context."""
    resolver = build_resolver(contexts, change_sets)
    fmt = OutputFormat(output_format.lower())
    with _engine_session(ctx, "mappings", format=fmt.value) as engine:
        mappings = engine.get_all_mappings(resolver)
    if fmt is OutputFormat.JSON:
        click.echo(orjson.dumps(mappings, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS).decode())
        return
    for key, value in mappings.items():
        click.echo(f"{key} = {render_value(value)}")


__all__ = [
    "build_resolver",
    "cli_dump",
    "cli_get",
    "cli_mappings",
    "cli_remove",
    "cli_remove_change_set",
    "cli_remove_key",
    "cli_set",
    "render_value",
]
