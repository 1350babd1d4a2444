"""Package manager backends.

This module exports the backend classes and detects which one to use.
"""

from pkgsets.core.errors import ManagerNotFoundError
from pkgsets.core.settings import Settings
from pkgsets.managers.apt import AptManager
from pkgsets.managers.base import PackageManager
from pkgsets.managers.pacman import PacmanManager

# Detection order when the manager setting is "auto"
MANAGERS: dict[str, type[PackageManager]] = {
    PacmanManager.name: PacmanManager,
    AptManager.name: AptManager,
}


def detect_manager(settings: Settings | None = None) -> PackageManager:
    """Select the package manager backend for this system.

    Args:
        settings: Settings naming a forced backend and program override.
            Defaults apply if None.

    Returns:
        An available PackageManager instance.

    Raises:
        ManagerNotFoundError: If the forced backend is unavailable or no
            supported package manager is found.
    """
    settings = settings or Settings()
    timeout = settings.effective_timeout

    if settings.manager != "auto":
        manager = MANAGERS[settings.manager](program=settings.program, timeout=timeout)
        if not manager.is_available():
            msg = f"Package manager '{settings.manager}' ({manager.program}) is not available"
            raise ManagerNotFoundError(msg)
        return manager

    # Detect with the stock programs, then apply the override to the winner
    for manager_cls in MANAGERS.values():
        if manager_cls().is_available():
            return manager_cls(program=settings.program, timeout=timeout)

    msg = "No supported package manager found (tried: " + ", ".join(MANAGERS) + ")"
    raise ManagerNotFoundError(msg)


__all__ = ["MANAGERS", "AptManager", "PackageManager", "PacmanManager", "detect_manager"]
