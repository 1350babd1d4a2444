"""Apply command implementation.

Makes the explicitly installed packages match the installed sets.
"""

import json
from typing import Annotated

import typer

from pkgsets.cli.context import get_manager, get_registry, handle_errors, locked
from pkgsets.cli.display import print_apply_plan
from pkgsets.core import reconcile
from pkgsets.utils.formatting import console, print_info, print_success


def apply_sets(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-d", help="Show the changes without applying them."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Print the planned changes as JSON (implies --dry-run)."),
    ] = False,
) -> None:
    """Apply installed sets to the system.

    Packages explicitly installed but not listed by any installed set are
    marked as dependencies first; then packages listed by an installed
    set but not explicitly installed are installed.

    Examples:
        pkgsets apply --dry-run
        pkgsets apply
    """
    with handle_errors():
        registry = get_registry(ctx)
        manager = get_manager(ctx)

        if dry_run or json_output:
            plan = reconcile.plan_apply(registry, manager)
            if json_output:
                console.print_json(json.dumps(plan.to_dict()))
                return
            if plan.is_in_sync:
                print_success("System is in sync with installed sets.")
                return
            print_info("Dry run, nothing was changed.")
            print_apply_plan(plan)
            return

        with locked(ctx):
            plan = reconcile.apply(registry, manager)

    if plan.is_in_sync:
        print_success("System is in sync with installed sets.")
        return
    print_apply_plan(plan)
    print_success("Applied installed sets.")
