"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from pkgsets.core.sets import PackageSet, SetRegistry
from pkgsets.managers.base import PackageManager


class FakeManager(PackageManager):
    """In-memory package manager recording every call that reaches it.

    Empty install/uninstall calls are short-circuited by PackageManager
    and never recorded, like a real backend never runs a command for them.

    Attributes:
        explicit: Packages currently considered explicitly installed.
        calls: (operation, packages) in call order.
        fail_on: Operations that should report failure.
    """

    name = "fake"
    default_program = "fake"

    def __init__(self, explicit: set[str] | None = None) -> None:
        super().__init__()
        self.explicit: set[str] = set(explicit or set())
        self.calls: list[tuple[str, frozenset[str]]] = []
        self.fail_on: set[str] = set()

    def is_available(self) -> bool:
        return True

    def explicitly_installed(self) -> set[str]:
        if "query" in self.fail_on:
            raise RuntimeError("query failed")
        return set(self.explicit)

    def _install(self, packages: list[str]) -> bool:
        self.calls.append(("install", frozenset(packages)))
        if "install" in self.fail_on:
            return False
        self.explicit |= set(packages)
        return True

    def _uninstall(self, packages: list[str]) -> bool:
        self.calls.append(("uninstall", frozenset(packages)))
        if "uninstall" in self.fail_on:
            return False
        self.explicit -= set(packages)
        return True


@pytest.fixture
def fake_manager() -> FakeManager:
    """Package manager with nothing explicitly installed."""
    return FakeManager()


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Configuration root with empty sets/ and installed-sets/ directories."""
    config_root = tmp_path / "pkgsets"
    (config_root / "sets").mkdir(parents=True)
    (config_root / "installed-sets").mkdir()
    return config_root


@pytest.fixture
def registry(root: Path) -> SetRegistry:
    """Set registry over the temporary root."""
    return SetRegistry(root)


@pytest.fixture
def make_set(registry: SetRegistry):
    """Factory writing a set file (and optionally its marker) verbatim."""

    def _make(name: str, content: str = "", installed: bool = False) -> PackageSet:
        package_set = registry.handle(name)
        package_set.path.write_text(content, encoding="utf-8")
        if installed:
            package_set.mark_installed()
        return package_set

    return _make
