"""Add command implementation.

Adds packages to a set, creating or moving them as requested.
"""

from typing import Annotated

import typer

from pkgsets.cli.context import get_manager, get_registry, handle_errors, locked
from pkgsets.cli.display import print_packages
from pkgsets.core import reconcile
from pkgsets.utils.formatting import print_info, print_success


def add_packages(
    ctx: typer.Context,
    set_name: Annotated[str, typer.Argument(metavar="SET", help="Set to add packages to.")],
    packages: Annotated[
        list[str] | None,
        typer.Argument(help="Packages to add.", show_default=False),
    ] = None,
    new: Annotated[
        bool,
        typer.Option("--new", "-n", help="Create the set. Fails if it already exists."),
    ] = False,
    installed: Annotated[
        bool,
        typer.Option(
            "--installed",
            "-i",
            help="Mark the new set as installed and install its packages. Requires --new.",
        ),
    ] = False,
    move: Annotated[
        bool,
        typer.Option("--move", "-m", help="Remove the packages from every other set."),
    ] = False,
) -> None:
    """Add packages to a set.

    If the set is installed (or created with --installed), the packages
    are installed before the set file is changed. Packages that are
    already listed, even in a commented-out line, are not added twice.

    Examples:
        pkgsets add -n -i base linux linux-firmware
        pkgsets add desktop firefox
        pkgsets add -m desktop htop     # move htop here from other sets
    """
    with handle_errors():
        registry = get_registry(ctx)
        manager = get_manager(ctx)
        with locked(ctx):
            result = reconcile.add(
                registry,
                manager,
                set_name,
                packages or [],
                new=new,
                installed=installed,
                move=move,
            )

    if result.added:
        print_packages(f"Added to {result.set_name}", "added", result.added)
    else:
        print_info(f"No new packages for set '{result.set_name}'.")
    print_packages("Moved from other sets", "info", result.moved)
    print_packages("Marked as dependency", "removed", result.uninstalled)
    if result.marked_installed:
        print_success(f"Set '{result.set_name}' marked as installed.")
