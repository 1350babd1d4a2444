"""Init command implementation.

Creates the configuration root with its sets and installed-sets
directories and a default config.toml.
"""

import typer

from pkgsets.cli.context import get_root, handle_errors
from pkgsets.core.paths import ensure_root_dirs, get_settings_path
from pkgsets.core.settings import Settings, save_settings
from pkgsets.utils.formatting import print_error, print_info, print_success


def init_root(ctx: typer.Context) -> None:
    """Initialize the configuration root.

    Existing sets and an existing config.toml are left untouched.

    Examples:
        pkgsets init
        PKGSETS_ROOT=/etc/pkgsets pkgsets init
    """
    with handle_errors():
        try:
            root = ensure_root_dirs(get_root(ctx))
        except RuntimeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        settings_path = get_settings_path(root)
        if settings_path.exists():
            print_info(f"Keeping existing settings: {settings_path}")
        else:
            save_settings(Settings(), settings_path)
            print_info(f"Wrote default settings: {settings_path}")

    print_success(f"Initialized {root}")
