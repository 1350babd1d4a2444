"""List command implementation.

Shows every set and whether it is installed.
"""

from typing import Annotated

import typer

from pkgsets.cli.context import get_registry, handle_errors
from pkgsets.cli.display import create_sets_table, create_sets_tree
from pkgsets.core import reconcile
from pkgsets.utils.formatting import console, print_info


def list_sets(
    ctx: typer.Context,
    tree: Annotated[
        bool,
        typer.Option("--tree", "-t", help="Show the packages of every set."),
    ] = False,
) -> None:
    """List sets.

    Examples:
        pkgsets list
        pkgsets list --tree
    """
    with handle_errors():
        summaries = reconcile.list_sets(get_registry(ctx))

    if not summaries:
        print_info("No sets defined. Create one with 'pkgsets add --new NAME PACKAGE...'.")
        return

    if tree:
        console.print(create_sets_tree(summaries))
    else:
        console.print(create_sets_table(summaries))
