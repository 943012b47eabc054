"""Configuration stand-ins for tests and embedded use.

The loader hands out a fixed ``[domval]`` section backed by in-memory
persistence; the display accepts every call and prints nothing.
"""

from __future__ import annotations

from lib_layered_config import Config

from ...domain.enums import OutputFormat


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return a config with no axes and ``persistence = "memory"``.

    Example:
        >>> get_config_in_memory()["domval"]["persistence"]
        'memory'
    """
    return Config({"domval": {"domains": [], "persistence": "memory"}}, {})


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """Accept the call and render nothing."""


__all__ = [
    "display_config_in_memory",
    "get_config_in_memory",
]
