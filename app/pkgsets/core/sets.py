"""Package sets and the registry that enumerates them.

A package set is a named text file under <root>/sets/ listing one package
per line. Lines that are empty or start with '#' are not members. A set is
installed when a marker with the same name exists under
<root>/installed-sets/.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pkgsets.core.errors import (
    CorruptStateError,
    InvalidPackageNameError,
    InvalidSetNameError,
    SetExistsError,
    SetNotFoundError,
    UnreadableSetFileError,
)
from pkgsets.core.lines import read_lines, rewrite_lines
from pkgsets.core.paths import get_installed_dir, get_root_dir, get_sets_dir

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


def validate_set_name(name: str) -> str:
    """Check that a set name is usable as a single file name.

    Args:
        name: Set name to check.

    Returns:
        The unchanged name.

    Raises:
        InvalidSetNameError: If the name is empty, contains a path
            separator, or starts with a dot.
    """
    if not name or name.strip() != name:
        msg = f"Invalid set name: {name!r}"
        raise InvalidSetNameError(msg)
    if "/" in name or "\0" in name:
        msg = f"Set name must not contain path separators: {name!r}"
        raise InvalidSetNameError(msg)
    if name.startswith("."):
        msg = f"Set name must not start with '.': {name!r}"
        raise InvalidSetNameError(msg)
    return name


def normalize_package_names(packages: Iterable[str]) -> set[str]:
    """Strip package names and reject ones a set file cannot hold.

    Raises:
        InvalidPackageNameError: If a name is empty, starts with "#" or
            spans several lines.
    """
    names: set[str] = set()
    for package in packages:
        name = package.strip()
        if not name:
            raise InvalidPackageNameError("Package names must not be empty")
        if name.startswith(COMMENT_PREFIX) or len(name.splitlines()) != 1:
            msg = f"Invalid package name: {package!r}"
            raise InvalidPackageNameError(msg)
        names.add(name)
    return names


def is_member_line(stripped: str) -> bool:
    """Check whether a stripped line names a package."""
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIX)


def _declared_names(line: str) -> set[str]:
    """Names a line counts as already declaring, for merge purposes.

    A commented-out package ("# htop") still declares "htop", so merging
    never re-adds a package the user disabled by hand.
    """
    stripped = line.strip()
    names = {stripped}
    if stripped.startswith(COMMENT_PREFIX):
        uncommented = stripped.lstrip(COMMENT_PREFIX).strip()
        if uncommented:
            names.add(uncommented)
    return names


@dataclass(frozen=True)
class PackageSet:
    """A named, file-backed collection of package names.

    Equality and hashing use only the name. Members are never cached:
    every call to get() reads the file again.

    Attributes:
        name: Set name, also the file name of the set and its marker.
        sets_dir: Directory holding set files.
        installed_dir: Directory holding installed markers.
    """

    name: str
    sets_dir: Path = field(compare=False, repr=False)
    installed_dir: Path = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        validate_set_name(self.name)

    @property
    def path(self) -> Path:
        """Path to the set file."""
        return self.sets_dir / self.name

    @property
    def marker_path(self) -> Path:
        """Path to the installed marker."""
        return self.installed_dir / self.name

    def exists(self) -> bool:
        """Check whether the set file is present."""
        return self.path.is_file()

    def get(self) -> set[str]:
        """Read the set's members.

        Returns:
            Package names from all non-empty, non-comment lines.

        Raises:
            FileNotFoundError: If the set file does not exist.
        """
        members: set[str] = set()
        for line in read_lines(self.path):
            stripped = line.strip()
            if is_member_line(stripped):
                members.add(stripped)
        return members

    def create(self, packages: Iterable[str]) -> set[str]:
        """Create the set file and add packages to it.

        Args:
            packages: Initial members.

        Returns:
            Packages written to the new file.

        Raises:
            SetExistsError: If the set file already exists.
        """
        if self.exists():
            raise SetExistsError(self.name)
        return self.merge(packages)

    def merge(self, packages: Iterable[str]) -> set[str]:
        """Append packages that the file does not already declare.

        The file is created if missing. Reading the current lines and
        appending the new ones happen on the same file handle.

        Args:
            packages: Packages to add.

        Returns:
            Packages that were appended.

        Raises:
            InvalidPackageNameError: If a package name is empty or a comment.
            UnreadableSetFileError: If the set file is not valid UTF-8.
        """
        wanted = normalize_package_names(packages)
        self.sets_dir.mkdir(parents=True, exist_ok=True)

        with self.path.open("a+", encoding="utf-8") as f:
            f.seek(0)
            try:
                content = f.read()
            except UnicodeDecodeError as e:
                raise UnreadableSetFileError(self.path, "not valid UTF-8 text") from e

            existing: set[str] = set()
            for line in content.splitlines():
                existing |= _declared_names(line)

            extra = wanted - existing
            if not extra:
                return extra

            if content and not content.endswith("\n"):
                f.write("\n")
            for package in sorted(extra):
                f.write(f"{package}\n")

        logger.debug("Merged into set '%s': %s", self.name, ", ".join(sorted(extra)))
        return extra

    def remove(self, packages: Iterable[str]) -> bool:
        """Drop member lines naming any of the given packages.

        Comment lines are never removed, even if their text matches.

        Args:
            packages: Packages to remove.

        Returns:
            True if the set file changed.
        """
        targets = set(packages)

        def _drop(line: str) -> str | None:
            stripped = line.strip()
            if is_member_line(stripped) and stripped in targets:
                return None
            return line

        changed = rewrite_lines(self.path, _drop)
        if changed:
            logger.debug("Removed from set '%s': %s", self.name, ", ".join(sorted(targets)))
        return changed

    def replace(self, old: str, new: str) -> bool:
        """Rename a package in the set file.

        Only lines whose stripped content equals ``old`` are rewritten;
        substrings and comments pass through unchanged.

        Args:
            old: Package name to replace.
            new: Replacement package name.

        Returns:
            True if the set file changed.
        """

        def _rename(line: str) -> str:
            return new if line.strip() == old else line

        return rewrite_lines(self.path, _rename)

    def installed(self) -> bool:
        """Check whether the installed marker exists."""
        return self.marker_path.exists() or self.marker_path.is_symlink()

    def mark_installed(self) -> None:
        """Create the installed marker. No-op if already installed."""
        if self.installed():
            return
        self.installed_dir.mkdir(parents=True, exist_ok=True)
        self.marker_path.touch()
        logger.debug("Marked set '%s' as installed", self.name)

    def mark_uninstalled(self) -> None:
        """Remove the installed marker. No-op if not installed."""
        if not self.installed():
            return
        self.marker_path.unlink()
        logger.debug("Marked set '%s' as uninstalled", self.name)


class SetRegistry:
    """Resolves set names and enumerates sets under a configuration root.

    Attributes:
        root: Configuration root directory.

    Example:
        >>> registry = SetRegistry(Path("/etc/pkgsets"))
        >>> wanted = registry.accumulate(registry.all_installed())
    """

    def __init__(self, root: Path | None = None) -> None:
        """Initialize the registry.

        Args:
            root: Optional override for the configuration root.
                  Default: PKGSETS_ROOT or ~/.config/pkgsets
        """
        self._root = root if root is not None else get_root_dir()

    @property
    def root(self) -> Path:
        """Configuration root directory."""
        return self._root

    @property
    def sets_dir(self) -> Path:
        """Directory holding set files."""
        return get_sets_dir(self._root)

    @property
    def installed_dir(self) -> Path:
        """Directory holding installed markers."""
        return get_installed_dir(self._root)

    def handle(self, name: str) -> PackageSet:
        """Build a PackageSet handle without checking that it exists."""
        return PackageSet(name=name, sets_dir=self.sets_dir, installed_dir=self.installed_dir)

    def get(self, name: str) -> PackageSet:
        """Resolve a name to an existing set.

        Raises:
            InvalidSetNameError: If the name is not a valid set name.
            CorruptStateError: If only the installed marker exists.
            SetNotFoundError: If the set does not exist.
        """
        package_set = self.handle(name)
        if package_set.exists():
            return package_set
        if package_set.installed():
            raise CorruptStateError(name)
        raise SetNotFoundError(name)

    def get_many(self, names: Iterable[str]) -> list[PackageSet]:
        """Resolve several names, preserving order and dropping duplicates."""
        resolved: list[PackageSet] = []
        for name in names:
            package_set = self.get(name)
            if package_set not in resolved:
                resolved.append(package_set)
        return resolved

    def _names_in(self, directory: Path) -> list[str]:
        if not directory.is_dir():
            return []
        return sorted(
            entry.name for entry in directory.iterdir() if not entry.name.startswith(".")
        )

    def all(self) -> set[PackageSet]:
        """Return every set under the sets directory."""
        return {self.get(name) for name in self._names_in(self.sets_dir)}

    def all_installed(self) -> set[PackageSet]:
        """Return every set with an installed marker.

        Raises:
            CorruptStateError: If a marker has no backing set file.
        """
        return {self.get(name) for name in self._names_in(self.installed_dir)}

    @staticmethod
    def accumulate(sets: Iterable[PackageSet]) -> set[str]:
        """Union of the members of all given sets."""
        packages: set[str] = set()
        for package_set in set(sets):
            packages |= package_set.get()
        return packages
