"""Adapters connecting the engine to files, configuration, logging and the CLI.

Contents:
    * :mod:`.config` - Layered configuration, display, ``--set`` overrides
      and the ``[domval]`` settings model
    * :mod:`.persistence` - JSON file store and its record codec
    * :mod:`.memory` - In-memory stand-ins for every port
    * :mod:`.logging` - lib_log_rich runtime setup
    * :mod:`.cli` - rich-click command line
"""

from __future__ import annotations

__all__: list[str] = []
