"""Exception hierarchy for pkgsets.

Every error that the CLI reports to the user derives from PkgsetsError.
"""

from pathlib import Path


class PkgsetsError(Exception):
    """Base exception for all pkgsets errors."""


class ConfigurationError(PkgsetsError):
    """Raised when the requested operation does not match the stored configuration."""


class InvalidSetNameError(ConfigurationError):
    """Raised when a set name cannot be used as a file name."""


class SetNotFoundError(ConfigurationError):
    """Raised when a named set does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Set '{name}' does not exist")
        self.name = name


class SetExistsError(ConfigurationError):
    """Raised when creating a set that already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Set '{name}' already exists")
        self.name = name


class CorruptStateError(ConfigurationError):
    """Raised when a set is marked installed but its set file is missing."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Set '{name}' is marked as installed but its set file is missing"
        )
        self.name = name


class InvalidPackageNameError(ConfigurationError):
    """Raised when a package name would not survive a round trip through a set file."""


class UnreadableSetFileError(ConfigurationError):
    """Raised when a set file is not valid UTF-8 text."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path


class NoSetsError(ConfigurationError):
    """Raised when an operation requires at least one set name."""


class SettingsError(ConfigurationError):
    """Raised when config.toml cannot be read or validated."""


class PortFailureError(PkgsetsError):
    """Raised when a package manager call fails.

    Attributes:
        operation: Port operation that failed ("install" or "uninstall").
        packages: Packages passed to the failed call.
    """

    def __init__(self, operation: str, packages: set[str], detail: str | None = None) -> None:
        message = f"Package manager failed to {operation}"
        if packages:
            message += ": " + ", ".join(sorted(packages))
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.operation = operation
        self.packages = frozenset(packages)


class ManagerNotFoundError(PkgsetsError):
    """Raised when no supported package manager is available."""


class LockError(PkgsetsError):
    """Raised when the configuration root lock cannot be acquired."""
