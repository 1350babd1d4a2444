"""Uninstall command implementation.

Marks sets as not installed and demotes their packages.
"""

from typing import Annotated

import typer

from pkgsets.cli.context import get_manager, get_registry, handle_errors, locked
from pkgsets.cli.display import print_packages
from pkgsets.core import reconcile
from pkgsets.utils.formatting import print_success, print_warning


def uninstall_sets(
    ctx: typer.Context,
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Names of the sets to uninstall.", show_default=False),
    ] = None,
) -> None:
    """Uninstall sets.

    Marks the packages of the given sets as dependencies, except those
    still listed by another installed set, then clears the sets'
    installed status. Set files are not changed.

    Examples:
        pkgsets uninstall gaming
    """
    with handle_errors():
        registry = get_registry(ctx)
        manager = get_manager(ctx)
        with locked(ctx):
            result = reconcile.uninstall(registry, manager, names or [])

    for name in result.skipped:
        print_warning(f"Set '{name}' is not installed, skipping.")
    print_packages("Marked as dependency", "removed", result.packages)
    if result.sets:
        print_success(f"Marked as uninstalled: {', '.join(result.sets)}")
