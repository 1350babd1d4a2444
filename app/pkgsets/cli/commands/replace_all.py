"""Replace-all command implementation.

Renames a package in every set file.
"""

from typing import Annotated

import typer

from pkgsets.cli.context import get_registry, handle_errors, locked
from pkgsets.core import reconcile
from pkgsets.utils.formatting import print_info, print_success


def replace_all(
    ctx: typer.Context,
    old: Annotated[str, typer.Argument(help="Package name to replace.")],
    new: Annotated[str, typer.Argument(help="Replacement package name.")],
) -> None:
    """Rename a package in all sets.

    Only lines that exactly name OLD are changed; comments are left alone.
    The system itself is not touched, run 'pkgsets apply' afterwards.

    Examples:
        pkgsets replace-all neovim neovim-git
    """
    with handle_errors():
        with locked(ctx):
            changed = reconcile.replace_all(get_registry(ctx), old, new)

    if changed:
        print_success(f"Replaced '{old}' with '{new}' in: {', '.join(changed)}")
    else:
        print_info(f"No set lists '{old}'.")
