"""Type-safe domain enums for output formats and persistence backends."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration and value display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable output.
        JSON: Machine-readable JSON output.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class PersistenceKind(str, Enum):
    """Persistence backends selectable through the ``[domval]`` section.

    Attributes:
        NONE: Pure in-memory engine, nothing survives the process.
        MEMORY: In-memory persistence adapter (shared within one process).
        JSON: Whole-document JSON file on disk.

    Example:
        >>> PersistenceKind("json") is PersistenceKind.JSON
        True
    """

    NONE = "none"
    MEMORY = "memory"
    JSON = "json"


__all__ = [
    "OutputFormat",
    "PersistenceKind",
]
