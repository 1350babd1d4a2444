"""Shared wiring for CLI commands.

Resolves the configuration root, settings, registry and package manager
from the Typer context, and turns pkgsets errors into user-facing
messages with exit code 1.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer

from pkgsets.core.errors import PkgsetsError
from pkgsets.core.lock import root_lock
from pkgsets.core.paths import get_root_dir, get_settings_path
from pkgsets.core.sets import SetRegistry
from pkgsets.core.settings import Settings, load_settings
from pkgsets.managers import PackageManager, detect_manager
from pkgsets.utils.formatting import print_error


def get_root(ctx: typer.Context) -> Path:
    """Configuration root chosen by --root, PKGSETS_ROOT or the default."""
    obj = ctx.find_root().obj or {}
    root = obj.get("root")
    return Path(root) if root is not None else get_root_dir()


def get_registry(ctx: typer.Context) -> SetRegistry:
    """Set registry for the selected root."""
    return SetRegistry(get_root(ctx))


def get_settings(ctx: typer.Context) -> Settings:
    """Settings from <root>/config.toml and the environment.

    Raises:
        SettingsError: If the settings file is invalid.
    """
    return load_settings(get_settings_path(get_root(ctx)))


def get_manager(ctx: typer.Context) -> PackageManager:
    """Detect the package manager backend.

    Raises:
        ManagerNotFoundError: If no supported package manager is available.
    """
    return detect_manager(get_settings(ctx))


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report pkgsets errors and exit with code 1 instead of a traceback."""
    try:
        yield
    except PkgsetsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except OSError as e:
        # e.g. a root under /etc written without privileges
        print_error(f"Cannot access {e.filename or 'configuration'}: {e.strerror or e}")
        raise typer.Exit(code=1) from e


@contextmanager
def locked(ctx: typer.Context) -> Iterator[None]:
    """Hold the root lock for a mutating workflow, if enabled in settings."""
    settings = get_settings(ctx)
    with root_lock(
        get_root(ctx),
        timeout=settings.lock_timeout_seconds,
        enabled=settings.lock,
    ):
        yield
