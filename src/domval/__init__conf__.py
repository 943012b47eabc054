"""Static package metadata surfaced to CLI commands and documentation.

The ``version`` line is kept in sync with ``pyproject.toml`` on release.
"""

from __future__ import annotations

#: Distribution name as published on the package index.
name = "domval"
#: One-line description shown as the CLI help header.
title = "Domain-specific configuration values resolved by context"
version = "1.0.0"
homepage = "https://github.com/domval/domval"
author = "domval contributors"
author_email = "domval@users.noreply.github.com"
#: Console script installed by the package.
shell_command = "domval"

#: Identifiers lib_layered_config uses to derive per-platform config paths.
LAYEREDCONF_VENDOR = "domval"
LAYEREDCONF_APP = "domval"
LAYEREDCONF_SLUG = "domval"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for domval:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
