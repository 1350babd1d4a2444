"""Subprocess helpers for package manager backends.

Queries capture their output; mutating commands run in the user's terminal
so confirmation prompts and sudo password requests stay visible.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass

# Package managers translate their output; parsing expects the C locale.
QUERY_ENV = {"LC_ALL": "C"}


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a query command.

    Attributes:
        stdout: Captured standard output.
        stderr: Captured standard error.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True for exit status 0."""
        return self.returncode == 0


def _environment(extra: dict[str, str] | None) -> dict[str, str]:
    return {**os.environ, **(extra or {})}


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a query command and capture what it prints.

    The command runs with LC_ALL=C. A non-zero exit is reported through
    the result, not raised.

    Raises:
        subprocess.TimeoutExpired: If the command outlives ``timeout``.
        FileNotFoundError: If the executable does not exist.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        env=_environment(QUERY_ENV),
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def run_interactive(
    args: list[str],
    *,
    timeout: float | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Run a command attached to the terminal and return its exit status.

    Args:
        args: Command line.
        timeout: Seconds to wait; None waits until the command exits.
        env: Variables added to the current environment.

    Raises:
        subprocess.TimeoutExpired: If the command outlives ``timeout``.
        OSError: If the command cannot be started.
    """
    return subprocess.run(args, check=False, timeout=timeout, env=_environment(env)).returncode


def command_exists(name: str) -> bool:
    """Check whether ``name`` resolves to an executable on PATH."""
    return shutil.which(name) is not None


def is_root() -> bool:
    return os.geteuid() == 0
