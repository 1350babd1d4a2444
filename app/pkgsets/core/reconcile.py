"""Reconciliation workflows between package sets and the package manager.

Each workflow reads sets through a SetRegistry, computes the package
delta, asks the PackageManager to apply it, and only commits set files
or installed markers after the package manager call succeeded. A failed
call raises PortFailureError; steps committed before it are kept and a
later apply() reconciles the drift.

The package manager is always passed in explicitly.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pkgsets.core.errors import (
    ConfigurationError,
    CorruptStateError,
    NoSetsError,
    PortFailureError,
    SetExistsError,
)
from pkgsets.core.sets import PackageSet, SetRegistry, normalize_package_names

if TYPE_CHECKING:
    from pkgsets.managers.base import PackageManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Outcome of install().

    Attributes:
        sets: Names of the sets marked installed.
        packages: Packages handed to the package manager.
    """

    sets: tuple[str, ...]
    packages: frozenset[str]


@dataclass(frozen=True, slots=True)
class AddResult:
    """Outcome of add().

    Attributes:
        set_name: Target set.
        added: Packages appended to the set file.
        installed: Packages handed to the package manager for install.
        marked_installed: Whether the set was newly marked installed.
        moved: Packages removed from other sets.
        uninstalled: Moved packages demoted to dependencies.
    """

    set_name: str
    added: frozenset[str]
    installed: frozenset[str] = field(default_factory=frozenset)
    marked_installed: bool = False
    moved: frozenset[str] = field(default_factory=frozenset)
    uninstalled: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class RemoveResult:
    """Outcome of remove().

    Attributes:
        set_name: Target set.
        removed: Whether the set file changed.
        uninstalled: Packages demoted to dependencies.
    """

    set_name: str
    removed: bool
    uninstalled: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class UninstallResult:
    """Outcome of uninstall().

    Attributes:
        sets: Sets whose installed marker was removed.
        skipped: Requested sets that were not installed.
        packages: Packages demoted to dependencies.
    """

    sets: tuple[str, ...]
    skipped: tuple[str, ...]
    packages: frozenset[str]


@dataclass(frozen=True, slots=True)
class ApplyPlan:
    """Difference between installed sets and the live system.

    Attributes:
        to_uninstall: Explicitly installed but not declared by any installed set.
        to_install: Declared by an installed set but not explicitly installed.
    """

    to_uninstall: frozenset[str]
    to_install: frozenset[str]

    @property
    def is_in_sync(self) -> bool:
        """Check whether the system already matches the installed sets."""
        return not (self.to_uninstall or self.to_install)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "in_sync": self.is_in_sync,
            "uninstall": sorted(self.to_uninstall),
            "install": sorted(self.to_install),
        }


@dataclass(frozen=True, slots=True)
class SetSummary:
    """One row of list().

    Attributes:
        name: Set name.
        installed: Whether the installed marker exists.
        members: Set members, sorted.
    """

    name: str
    installed: bool
    members: tuple[str, ...]


def _explicitly_installed(manager: PackageManager) -> set[str]:
    try:
        return manager.explicitly_installed()
    except (RuntimeError, OSError, subprocess.SubprocessError) as e:
        raise PortFailureError("list explicitly installed packages", set(), str(e)) from e


def _port_install(manager: PackageManager, packages: set[str]) -> None:
    if not manager.install(packages):
        raise PortFailureError("install", packages)


def _port_uninstall(manager: PackageManager, packages: set[str]) -> None:
    if not manager.uninstall(packages):
        raise PortFailureError("uninstall", packages)


def install(registry: SetRegistry, manager: PackageManager, names: Iterable[str]) -> InstallResult:
    """Install the packages of the named sets and mark the sets installed.

    Args:
        registry: Set registry.
        manager: Package manager backend.
        names: Names of existing sets.

    Returns:
        InstallResult describing what was installed.

    Raises:
        NoSetsError: If no names were given.
        SetNotFoundError: If a set does not exist.
        PortFailureError: If the package manager fails. No marker is written.
    """
    sets = registry.get_many(names)
    if not sets:
        raise NoSetsError("No sets specified")

    packages = registry.accumulate(sets)
    _port_install(manager, packages)

    for package_set in sets:
        package_set.mark_installed()
    logger.info("Installed sets: %s", ", ".join(s.name for s in sets))

    return InstallResult(sets=tuple(s.name for s in sets), packages=frozenset(packages))


def add(
    registry: SetRegistry,
    manager: PackageManager,
    name: str,
    packages: Iterable[str],
    *,
    new: bool = False,
    installed: bool = False,
    move: bool = False,
) -> AddResult:
    """Add packages to a set.

    If the set is (or becomes) installed, the packages are installed on the
    system before the set file is touched. With ``move``, the packages are
    also taken out of every other set afterwards.

    Args:
        registry: Set registry.
        manager: Package manager backend.
        name: Target set name.
        packages: Packages to add.
        new: Create the set; it must not exist yet.
        installed: Mark the newly created set installed. Requires ``new``.
        move: Remove the packages from all other sets.

    Returns:
        AddResult describing what changed.

    Raises:
        ConfigurationError: If ``installed`` is given without ``new``.
        InvalidPackageNameError: If a package name is empty or a comment.
        SetExistsError: If ``new`` is given and the set exists.
        CorruptStateError: If ``new`` is given and only the installed
            marker of the set exists.
        SetNotFoundError: If the set does not exist and ``new`` is not given.
        PortFailureError: If the package manager fails.
    """
    if installed and not new:
        raise ConfigurationError("--installed can only be used together with --new")

    packages = normalize_package_names(packages)

    if new:
        target = registry.handle(name)
        if target.exists():
            raise SetExistsError(name)
        if target.installed():
            raise CorruptStateError(name)
        was_installed = False
    else:
        target = registry.get(name)
        was_installed = target.installed()

    ends_installed = was_installed or installed

    to_install: set[str] = set()
    if ends_installed:
        to_install = packages
        _port_install(manager, to_install)

    added = target.create(packages) if new else target.merge(packages)
    if installed:
        target.mark_installed()

    moved: set[str] = set()
    uninstalled: set[str] = set()
    if move:
        others = registry.all() - {target}
        moved = packages & registry.accumulate(others)

        # An installed target already made them explicit. Otherwise the
        # moved packages lose their installed owners and are demoted.
        if not ends_installed:
            uninstalled = moved & registry.accumulate(registry.all_installed() - {target})
            _port_uninstall(manager, uninstalled)

        for other in sorted(others, key=lambda s: s.name):
            other.remove(moved)
        if moved:
            logger.info("Moved into '%s': %s", target.name, ", ".join(sorted(moved)))

    return AddResult(
        set_name=target.name,
        added=frozenset(added),
        installed=frozenset(to_install),
        marked_installed=installed,
        moved=frozenset(moved),
        uninstalled=frozenset(uninstalled),
    )


def remove(
    registry: SetRegistry,
    manager: PackageManager,
    name: str,
    packages: Iterable[str],
) -> RemoveResult:
    """Remove packages from a set.

    If the set is installed, packages no other installed set wants are
    demoted to dependencies first.

    Raises:
        SetNotFoundError: If the set does not exist.
        InvalidPackageNameError: If a package name is empty or a comment.
        PortFailureError: If the package manager fails. The set file is
            left untouched.
    """
    target = registry.get(name)
    packages = normalize_package_names(packages)

    excess: set[str] = set()
    if target.installed():
        others = registry.all_installed() - {target}
        excess = packages - registry.accumulate(others)
        _port_uninstall(manager, excess)

    changed = target.remove(packages)
    return RemoveResult(set_name=target.name, removed=changed, uninstalled=frozenset(excess))


def uninstall(registry: SetRegistry, manager: PackageManager, names: Iterable[str]) -> UninstallResult:
    """Demote the packages of the named sets and clear their installed markers.

    Packages still wanted by another installed set are kept. Sets that are
    not installed are skipped. Set files are never changed.

    Raises:
        NoSetsError: If no names were given.
        SetNotFoundError: If a set does not exist.
        PortFailureError: If the package manager fails. Markers are kept.
    """
    sets = registry.get_many(names)
    if not sets:
        raise NoSetsError("No sets specified")

    targets: list[PackageSet] = []
    skipped: list[str] = []
    for package_set in sets:
        if package_set.installed():
            targets.append(package_set)
        else:
            logger.info("Set '%s' is not installed, skipping", package_set.name)
            skipped.append(package_set.name)

    remaining = registry.all_installed() - set(targets)
    packages = registry.accumulate(targets) - registry.accumulate(remaining)
    _port_uninstall(manager, packages)

    for package_set in targets:
        package_set.mark_uninstalled()

    return UninstallResult(
        sets=tuple(s.name for s in targets),
        skipped=tuple(skipped),
        packages=frozenset(packages),
    )


def plan_apply(registry: SetRegistry, manager: PackageManager) -> ApplyPlan:
    """Compare installed sets with the explicitly installed packages.

    Raises:
        PortFailureError: If the package manager cannot be queried.
    """
    declared = registry.accumulate(registry.all_installed())
    live = _explicitly_installed(manager)
    return ApplyPlan(
        to_uninstall=frozenset(live - declared),
        to_install=frozenset(declared - live),
    )


def apply(registry: SetRegistry, manager: PackageManager) -> ApplyPlan:
    """Make the explicitly installed packages match the installed sets.

    Undeclared packages are demoted first, then missing ones installed.

    Returns:
        The plan that was carried out.

    Raises:
        PortFailureError: If either phase fails. Install is not attempted
            after a failed uninstall.
    """
    plan = plan_apply(registry, manager)
    _port_uninstall(manager, set(plan.to_uninstall))
    _port_install(manager, set(plan.to_install))
    return plan


def replace_all(registry: SetRegistry, old: str, new: str) -> list[str]:
    """Rename a package in every set, installed or not.

    Returns:
        Names of the sets whose file changed, sorted.
    """
    changed = [s.name for s in registry.all() if s.replace(old, new)]
    return sorted(changed)


def unadded(registry: SetRegistry, manager: PackageManager) -> set[str]:
    """Explicitly installed packages that belong to no set.

    Raises:
        PortFailureError: If the package manager cannot be queried.
    """
    return _explicitly_installed(manager) - registry.accumulate(registry.all())


def list_sets(registry: SetRegistry) -> list[SetSummary]:
    """Summarize every set, sorted by name."""
    return [
        SetSummary(name=s.name, installed=s.installed(), members=tuple(sorted(s.get())))
        for s in sorted(registry.all(), key=lambda s: s.name)
    ]
