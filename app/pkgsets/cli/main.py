"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from pkgsets import __version__
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
from pkgsets.core.paths import ROOT_ENV_VAR
from pkgsets.utils.formatting import configure_logging

# Create main Typer app
app = typer.Typer(
    name="pkgsets",
    help="Declarative package sets for Linux systems.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pkgsets version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            envvar=ROOT_ENV_VAR,
            help="Configuration root holding sets/ and installed-sets/.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """pkgsets - Declarative package sets for Linux systems.

    Group the packages you want into named sets, mark sets as installed,
    and keep the package manager's explicitly installed packages in line
    with them.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["root"] = root


# Register commands
app.command(name="install")(install.install_sets)
app.command(name="add")(add.add_packages)
app.command(name="remove")(remove.remove_packages)
app.command(name="uninstall")(uninstall.uninstall_sets)
app.command(name="unadded")(unadded.list_unadded)
app.command(name="apply")(apply.apply_sets)
app.command(name="replace-all")(replace_all.replace_all)
app.command(name="list")(listing.list_sets)
app.command(name="init")(init.init_root)


if __name__ == "__main__":
    app()
