"""CLI commands for pkgsets.

This package contains all subcommand implementations.
"""

from pkgsets.cli.commands import (
    add,
    apply,
    init,
    install,
    listing,
    remove,
    replace_all,
    unadded,
    uninstall,
)

__all__ = [
    "add",
    "apply",
    "init",
    "install",
    "listing",
    "remove",
    "replace_all",
    "unadded",
    "uninstall",
]
