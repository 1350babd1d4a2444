"""Install command implementation.

Installs the packages of one or more sets and marks the sets installed.
"""

from typing import Annotated

import typer

from pkgsets.cli.context import get_manager, get_registry, handle_errors, locked
from pkgsets.cli.display import print_packages
from pkgsets.core import reconcile
from pkgsets.utils.formatting import print_success


def install_sets(
    ctx: typer.Context,
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Names of the sets to install.", show_default=False),
    ] = None,
) -> None:
    """Install sets.

    Installs every package of the given sets (already installed packages
    are not upgraded), marks them explicitly installed, and then marks
    the sets as installed.

    Examples:
        pkgsets install base
        pkgsets install base desktop
    """
    with handle_errors():
        registry = get_registry(ctx)
        manager = get_manager(ctx)
        with locked(ctx):
            result = reconcile.install(registry, manager, names or [])

    print_packages("Installed", "added", result.packages)
    print_success(f"Marked as installed: {', '.join(result.sets)}")
