"""APT package manager backend.

Lists manual packages with apt-mark and installs with apt-get.
"""

import logging

from pkgsets.managers.base import PackageManager
from pkgsets.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class AptManager(PackageManager):
    """Backend for APT/dpkg.

    - explicitly installed: ``apt-mark showmanual``
    - install: ``apt-get install --no-upgrade -y`` then ``apt-mark manual``
    - uninstall: ``apt-mark auto``

    The "program" setting replaces apt-get (e.g. with apt or nala);
    marking always goes through apt-mark.
    """

    name = "apt"
    default_program = "apt-get"

    _APT_MARK = "apt-mark"

    # Query timeout, listing packages never needs user interaction
    _QUERY_TIMEOUT: float = 60.0

    def is_available(self) -> bool:
        """Check if the install program and apt-mark are available."""
        return command_exists(self.program) and command_exists(self._APT_MARK)

    def explicitly_installed(self) -> set[str]:
        """List manually installed packages with ``apt-mark showmanual``.

        Raises:
            RuntimeError: If apt-mark fails.
        """
        result = run_command([self._APT_MARK, "showmanual"], timeout=self._QUERY_TIMEOUT)
        if not result.success:
            # Do not silently continue - the data would be unreliable
            msg = f"apt-mark showmanual failed: {result.stderr.strip() or 'unknown error'}"
            raise RuntimeError(msg)

        return {line.strip() for line in result.stdout.splitlines() if line.strip()}

    def _install(self, packages: list[str]) -> bool:
        args = [self.program, "install", "--no-upgrade", "-y", *packages]
        if not self._run(self._privileged(args)):
            return False
        return self._run(self._privileged([self._APT_MARK, "manual", *packages]))

    def _uninstall(self, packages: list[str]) -> bool:
        return self._run(self._privileged([self._APT_MARK, "auto", *packages]))
