"""lib_log_rich runtime setup shared by every entry point.

Library modules only ever call ``logging.getLogger(__name__)``; this module
is where the CLI turns those records into lib_log_rich output, once per
process.

Contents:
    * :class:`LoggingConfigModel` - validated ``[lib_log_rich]`` section.
    * :func:`init_logging` - idempotent runtime initialization.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from domval import __init__conf__


class LoggingConfigModel(BaseModel):
    """Boundary model for the ``[lib_log_rich]`` section.

    Unknown keys pass through untouched to ``RuntimeConfig``.

    Example:
        >>> LoggingConfigModel(environment="staging").environment
        'staging'
        >>> LoggingConfigModel().service is None
        True
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    The service name falls back to the distribution name.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich and bridge stdlib logging into it.

    Loads ``.env`` first so ``LOG_*`` variables take effect. Later calls are
    no-ops once the runtime is up.

    Example:
        >>> from lib_layered_config import Config
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
