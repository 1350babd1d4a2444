"""Pacman package manager backend.

Works with pacman itself and with pacman-compatible AUR helpers such as
paru or yay, selected through the "program" setting.
"""

import logging

from pkgsets.managers.base import PackageManager
from pkgsets.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class PacmanManager(PackageManager):
    """Backend for pacman and pacman-compatible wrappers.

    - explicitly installed: ``pacman -Qqe``
    - install: ``pacman -S --needed`` then ``pacman -D --asexplicit``
    - uninstall: ``pacman -D --asdeps``

    AUR helpers escalate privileges on their own, so sudo is only added
    when the program is pacman itself.
    """

    name = "pacman"
    default_program = "pacman"

    # Query timeout, listing packages never needs user interaction
    _QUERY_TIMEOUT: float = 60.0

    def is_available(self) -> bool:
        """Check if the configured program is available."""
        return command_exists(self.program)

    def explicitly_installed(self) -> set[str]:
        """List explicitly installed packages with ``-Qqe``.

        Raises:
            RuntimeError: If the query fails.
        """
        result = run_command([self.program, "-Qqe"], timeout=self._QUERY_TIMEOUT)
        # pacman -Q exits 1 without output when nothing matches
        if not result.success and (result.stdout.strip() or result.stderr.strip()):
            msg = f"{self.program} -Qqe failed: {result.stderr.strip() or 'unknown error'}"
            raise RuntimeError(msg)

        return {line.strip() for line in result.stdout.splitlines() if line.strip()}

    def _privileged(self, args: list[str]) -> list[str]:
        if self.program != "pacman":
            return args
        return super()._privileged(args)

    def _install(self, packages: list[str]) -> bool:
        if not self._run(self._privileged([self.program, "-S", "--needed", *packages])):
            return False
        return self._run(self._privileged([self.program, "-D", "--asexplicit", *packages]))

    def _uninstall(self, packages: list[str]) -> bool:
        return self._run(self._privileged([self.program, "-D", "--asdeps", *packages]))
