"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values
instead of a bare ``1``. Signal codes are informational only;
``lib_cli_exit_tools`` translates signals itself.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """POSIX-conventional exit codes for CLI error paths.

    * 0-1: generic success / failure
    * 2: nothing stored for the requested key or override (ENOENT)
    * 22: EINVAL, malformed key, domain or context
    * 74: EX_IOERR, the persistence backend failed
    * 78: EX_CONFIG, invalid ``[domval]`` settings
    * 128+N: signal N (informational only)

    Example:
        >>> ExitCode.SUCCESS
        <ExitCode.SUCCESS: 0>
        >>> int(ExitCode.PERSISTENCE_FAILURE)
        74
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    PERSISTENCE_FAILURE = 74
    CONFIG_ERROR = 78
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
