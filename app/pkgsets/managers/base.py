"""Abstract base class for package manager backends.

This module defines the PackageManager interface every backend implements.
Workflows receive a PackageManager instance explicitly; there is no global
active backend.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Iterable

from pkgsets.utils.shell import is_root, run_interactive

logger = logging.getLogger(__name__)


class PackageManager(ABC):
    """Abstract base class for all package manager backends.

    A backend answers which packages are explicitly installed, installs
    packages and marks them explicit, and demotes packages to
    dependencies. It never removes anything from the system.

    Attributes:
        program: Program invoked for package operations.
        timeout: Seconds to wait for a single call, None for no limit.

    Example:
        >>> manager = PacmanManager(program="paru")
        >>> if manager.is_available():
        ...     manager.install({"htop", "neovim"})
    """

    #: Backend identifier, also accepted by the "manager" setting
    name: str = ""

    #: Program used when no override is configured
    default_program: str = ""

    def __init__(self, program: str | None = None, timeout: float | None = None) -> None:
        """Initialize the backend.

        Args:
            program: Program name overriding default_program.
            timeout: Seconds to wait for a single call, None for no limit.
        """
        self._program = program or self.default_program
        self._timeout = timeout

    @property
    def program(self) -> str:
        """Program invoked for package operations."""
        return self._program

    @property
    def timeout(self) -> float | None:
        """Timeout for a single call."""
        return self._timeout

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system."""

    @abstractmethod
    def explicitly_installed(self) -> set[str]:
        """Return packages the package manager considers user-requested.

        Raises:
            RuntimeError: If the package manager query fails.
        """

    @abstractmethod
    def _install(self, packages: list[str]) -> bool:
        """Install missing packages and mark all of them explicit."""

    @abstractmethod
    def _uninstall(self, packages: list[str]) -> bool:
        """Mark packages as installed as dependencies."""

    def install(self, packages: Iterable[str]) -> bool:
        """Install packages without upgrading present ones, marking them explicit.

        Args:
            packages: Package names to install.

        Returns:
            True on success. An empty collection succeeds without running
            anything.
        """
        names = sorted(set(packages))
        if not names:
            return True
        logger.info("Installing via %s: %s", self.name, ", ".join(names))
        return self._install(names)

    def uninstall(self, packages: Iterable[str]) -> bool:
        """Mark packages as dependencies so the package manager may clean them up.

        Args:
            packages: Package names to demote.

        Returns:
            True on success. An empty collection succeeds without running
            anything.
        """
        names = sorted(set(packages))
        if not names:
            return True
        logger.info("Marking as dependencies via %s: %s", self.name, ", ".join(names))
        return self._uninstall(names)

    def _privileged(self, args: list[str]) -> list[str]:
        """Prefix a command with sudo unless already running as root."""
        if is_root():
            return args
        return ["sudo", *args]

    def _run(self, args: list[str]) -> bool:
        """Run a mutating command on the user's terminal.

        A missing executable, a timeout or a non-zero exit are all
        reported as failure.
        """
        logger.info("Executing: %s", " ".join(args))
        try:
            returncode = run_interactive(args, timeout=self._timeout)
        except subprocess.TimeoutExpired:
            logger.error("%s timed out after %ss", args[0], self._timeout)
            return False
        except OSError as e:
            logger.error("Failed to execute %s: %s", args[0], e)
            return False

        if returncode != 0:
            logger.error("%s exited with code %d", " ".join(args[:2]), returncode)
            return False
        return True
