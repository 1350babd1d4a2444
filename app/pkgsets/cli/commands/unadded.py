"""Unadded command implementation.

Lists explicitly installed packages that are not in any set.
"""

import typer

from pkgsets.cli.context import get_manager, get_registry, handle_errors
from pkgsets.core import reconcile
from pkgsets.utils.formatting import console


def list_unadded(ctx: typer.Context) -> None:
    """List explicitly installed packages that belong to no set.

    Prints one package per line, so the output can seed a new set:

    Examples:
        pkgsets unadded
        pkgsets add -n -i base $(pkgsets unadded)
    """
    with handle_errors():
        packages = reconcile.unadded(get_registry(ctx), get_manager(ctx))

    for package in sorted(packages):
        console.print(package, markup=False, highlight=False, soft_wrap=True)
