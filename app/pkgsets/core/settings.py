"""Settings for pkgsets.

Settings are read from <root>/config.toml. Every field is optional and
environment variables take precedence over the file:

- PKGSETS_MANAGER: force a package manager backend ("pacman" or "apt")
- PKGSETS_PROGRAM: program to invoke instead of the backend default
  (e.g. "paru" or "yay" for the pacman backend)
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pkgsets.core.errors import SettingsError
from pkgsets.core.paths import get_settings_path

logger = logging.getLogger(__name__)

ManagerChoice = Literal["auto", "pacman", "apt"]

MANAGER_ENV_VAR = "PKGSETS_MANAGER"
PROGRAM_ENV_VAR = "PKGSETS_PROGRAM"


class Settings(BaseModel):
    """Runtime configuration for pkgsets.

    Attributes:
        manager: Package manager backend, or "auto" to detect one.
        program: Program name overriding the backend default.
        timeout_seconds: Upper bound for a single package manager call.
            0 disables the timeout.
        lock: Hold an advisory lock on the root while mutating it.
        lock_timeout_seconds: How long to wait for the root lock.
    """

    model_config = ConfigDict(extra="forbid")

    manager: Annotated[
        ManagerChoice,
        Field(description="Package manager backend (auto = detect)"),
    ] = "auto"
    program: Annotated[
        str | None,
        Field(min_length=1, description="Program name overriding the backend default"),
    ] = None
    timeout_seconds: Annotated[
        int,
        Field(ge=0, description="Timeout for package manager calls (0 = none)"),
    ] = 1800
    lock: Annotated[
        bool,
        Field(description="Lock the configuration root during mutations"),
    ] = True
    lock_timeout_seconds: Annotated[
        float,
        Field(gt=0, description="Seconds to wait for the root lock"),
    ] = 10.0

    @property
    def effective_timeout(self) -> float | None:
        """Timeout to pass to subprocess calls, None when disabled."""
        if self.timeout_seconds == 0:
            return None
        return float(self.timeout_seconds)


def _apply_env_overrides(data: dict[str, object]) -> dict[str, object]:
    manager = os.environ.get(MANAGER_ENV_VAR)
    if manager:
        data["manager"] = manager.strip().lower()
    program = os.environ.get(PROGRAM_ENV_VAR)
    if program:
        data["program"] = program.strip()
    return data


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from config.toml and the environment.

    A missing file is not an error; defaults are used.

    Args:
        path: Path to the settings file. If None, uses <root>/config.toml.

    Returns:
        Validated Settings object.

    Raises:
        SettingsError: If the file cannot be parsed or validated.
    """
    settings_path = path or get_settings_path()
    data: dict[str, object] = {}

    if settings_path.exists():
        try:
            with open(settings_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
        except OSError as e:
            raise SettingsError(f"Failed to read {settings_path}: {e}") from e
        logger.debug("Loaded settings from %s", settings_path)

    try:
        return Settings.model_validate(_apply_env_overrides(data))
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses <root>/config.toml.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null, unset fields are left out
    data = settings.model_dump(exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
