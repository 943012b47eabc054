"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Override commands from :mod:`.values`
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .values import (
    cli_dump,
    cli_get,
    cli_mappings,
    cli_remove,
    cli_remove_change_set,
    cli_remove_key,
    cli_set,
)

__all__ = [
    "cli_config",
    "cli_dump",
    "cli_get",
    "cli_info",
    "cli_mappings",
    "cli_remove",
    "cli_remove_change_set",
    "cli_remove_key",
    "cli_set",
]
