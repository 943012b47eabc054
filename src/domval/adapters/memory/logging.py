"""Logging stand-in that checks the ``[lib_log_rich]`` section and stops there."""

from __future__ import annotations

from typing import cast

from lib_layered_config import Config

from ..logging.setup import LoggingConfigModel


def init_logging_in_memory(config: Config) -> None:
    """Validate the logging section exactly as production would, but start nothing.

    Raises:
        pydantic.ValidationError: A known field has the wrong type.

    Example:
        >>> init_logging_in_memory(Config({"lib_log_rich": {"environment": "test"}}, {}))
    """
    raw: object = config.get("lib_log_rich", default={})
    LoggingConfigModel.model_validate(cast("dict[str, object]", raw) if raw else {})


__all__ = ["init_logging_in_memory"]
