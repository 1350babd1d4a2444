"""Remove command implementation.

Removes packages from a set.
"""

from typing import Annotated

import typer

from pkgsets.cli.context import get_manager, get_registry, handle_errors, locked
from pkgsets.cli.display import print_packages
from pkgsets.core import reconcile
from pkgsets.utils.formatting import print_info, print_success


def remove_packages(
    ctx: typer.Context,
    set_name: Annotated[str, typer.Argument(metavar="SET", help="Set to remove packages from.")],
    packages: Annotated[list[str], typer.Argument(help="Packages to remove.")],
) -> None:
    """Remove packages from a set.

    If the set is installed, packages that no other installed set lists
    are marked as dependencies first. Nothing is uninstalled from disk;
    the package manager's orphan cleanup takes care of that.

    Examples:
        pkgsets remove desktop firefox
    """
    with handle_errors():
        registry = get_registry(ctx)
        manager = get_manager(ctx)
        with locked(ctx):
            result = reconcile.remove(registry, manager, set_name, packages)

    print_packages("Marked as dependency", "removed", result.uninstalled)
    if result.removed:
        print_success(f"Removed from set '{result.set_name}'.")
    else:
        print_info(f"Set '{result.set_name}' did not list any of the packages.")
