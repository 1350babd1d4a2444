"""Path management for pkgsets.

The configuration root holds the set files, the installed markers and
the optional settings file:

- <root>/sets/<name>
- <root>/installed-sets/<name>
- <root>/config.toml

The root defaults to the XDG config directory (~/.config/pkgsets/) and
can be moved with the PKGSETS_ROOT environment variable.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pkgsets"

ROOT_ENV_VAR = "PKGSETS_ROOT"

SETS_DIRNAME = "sets"
INSTALLED_DIRNAME = "installed-sets"
SETTINGS_FILENAME = "config.toml"
LOCK_FILENAME = ".lock"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the XDG configuration directory path.

    Returns:
        Path to ~/.config/pkgsets/ (or XDG_CONFIG_HOME/pkgsets/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_root_dir() -> Path:
    """Get the configuration root holding sets and markers.

    Returns:
        PKGSETS_ROOT if set, otherwise the XDG configuration directory.
    """
    root = os.environ.get(ROOT_ENV_VAR)
    if root:
        return Path(root).expanduser()
    return get_config_dir()


def get_sets_dir(root: Path | None = None) -> Path:
    """Get the directory holding one file per set."""
    return (root or get_root_dir()) / SETS_DIRNAME


def get_installed_dir(root: Path | None = None) -> Path:
    """Get the directory holding one marker file per installed set."""
    return (root or get_root_dir()) / INSTALLED_DIRNAME


def get_settings_path(root: Path | None = None) -> Path:
    """Get the settings file path.

    Returns:
        Path to <root>/config.toml.
    """
    return (root or get_root_dir()) / SETTINGS_FILENAME


def get_lock_path(root: Path | None = None) -> Path:
    """Get the advisory lock file path.

    The lock file starts with a dot so it is never mistaken for a set.
    """
    return (root or get_root_dir()) / LOCK_FILENAME


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/pkgsets/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_root_dirs(root: Path | None = None) -> Path:
    """Create the root, sets and installed-sets directories.

    Args:
        root: Configuration root. If None, uses the default root.

    Returns:
        The configuration root path.

    Raises:
        RuntimeError: If a directory cannot be created.
    """
    base = root or get_root_dir()
    _ensure_dir(base, "root")
    _ensure_dir(get_sets_dir(base), "sets")
    _ensure_dir(get_installed_dir(base), "installed-sets")
    return base
