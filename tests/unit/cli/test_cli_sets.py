"""Unit tests for the set editing commands.

Tests for install, add, remove and uninstall with an in-memory
package manager.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from pkgsets.cli.main import app
from pkgsets.core.errors import ManagerNotFoundError
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def invoke(root: Path, fake_manager):
    """Invoke the CLI against the temporary root with the fake manager."""

    def _invoke(*args: str):
        with patch("pkgsets.cli.context.detect_manager", return_value=fake_manager):
            return runner.invoke(app, ["--root", str(root), *args])

    return _invoke


class TestInstallCommand:
    """Tests for pkgsets install command."""

    def test_install_marks_sets(self, invoke, root: Path, make_set, fake_manager) -> None:
        """Installing a set installs its packages and writes the marker."""
        make_set("base", "linux\nbash\n")

        result = invoke("install", "base")

        assert result.exit_code == 0
        assert "Marked as installed: base" in result.output
        assert (root / "installed-sets" / "base").exists()
        assert fake_manager.explicit == {"linux", "bash"}

    def test_install_unknown_set(self, invoke, root: Path) -> None:
        """Unknown sets exit with code 1 and a message."""
        result = invoke("install", "nope")

        assert result.exit_code == 1
        assert "Set 'nope' does not exist" in result.output

    def test_install_without_names(self, invoke) -> None:
        """Installing nothing is an error."""
        result = invoke("install")

        assert result.exit_code == 1
        assert "No sets specified" in result.output

    def test_install_port_failure(self, invoke, root: Path, make_set, fake_manager) -> None:
        """A failing package manager exits 1 and leaves no marker."""
        make_set("base", "linux\n")
        fake_manager.fail_on.add("install")

        result = invoke("install", "base")

        assert result.exit_code == 1
        assert "Package manager failed to install" in result.output
        assert not (root / "installed-sets" / "base").exists()

    def test_missing_manager(self, root: Path, make_set) -> None:
        """No supported package manager exits 1."""
        make_set("base", "linux\n")
        with patch(
            "pkgsets.cli.context.detect_manager",
            side_effect=ManagerNotFoundError("No supported package manager found"),
        ):
            result = runner.invoke(app, ["--root", str(root), "install", "base"])

        assert result.exit_code == 1
        assert "No supported package manager" in result.output


class TestAddCommand:
    """Tests for pkgsets add command."""

    def test_add_new_installed(self, invoke, root: Path, fake_manager) -> None:
        """add -n -i creates, installs and marks the set."""
        result = invoke("add", "-n", "-i", "base", "linux", "bash")

        assert result.exit_code == 0
        assert (root / "sets" / "base").read_text() == "bash\nlinux\n"
        assert (root / "installed-sets" / "base").exists()
        assert fake_manager.explicit == {"linux", "bash"}

    def test_add_to_uninstalled_set(self, invoke, root: Path, make_set, fake_manager) -> None:
        """Adding to an uninstalled set only edits the file."""
        make_set("desktop", "firefox\n")

        result = invoke("add", "desktop", "htop")

        assert result.exit_code == 0
        assert (root / "sets" / "desktop").read_text() == "firefox\nhtop\n"
        assert fake_manager.calls == []

    def test_add_existing_package(self, invoke, make_set) -> None:
        """Adding a listed package reports nothing new."""
        make_set("desktop", "firefox\n")

        result = invoke("add", "desktop", "firefox")

        assert result.exit_code == 0
        assert "No new packages" in result.output

    def test_add_new_existing_set(self, invoke, make_set) -> None:
        """--new on an existing set fails."""
        make_set("desktop", "firefox\n")

        result = invoke("add", "-n", "desktop", "htop")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_add_installed_requires_new(self, invoke, make_set) -> None:
        """--installed without --new fails."""
        make_set("desktop", "firefox\n")

        result = invoke("add", "-i", "desktop", "htop")

        assert result.exit_code == 1
        assert "--new" in result.output

    def test_add_move(self, invoke, root: Path, make_set) -> None:
        """--move takes the packages out of other sets."""
        make_set("a", "htop\nvim\n")
        make_set("b", "")

        result = invoke("add", "-m", "b", "htop")

        assert result.exit_code == 0
        assert (root / "sets" / "a").read_text() == "vim\n"
        assert (root / "sets" / "b").read_text() == "htop\n"

    def test_add_invalid_name(self, invoke) -> None:
        """Set names with a slash are rejected."""
        result = invoke("add", "-n", "a/b", "htop")

        assert result.exit_code == 1


class TestRemoveCommand:
    """Tests for pkgsets remove command."""

    def test_remove_from_installed_set(
        self, invoke, root: Path, make_set, fake_manager
    ) -> None:
        """Removed packages no installed set wants are demoted."""
        make_set("desktop", "firefox\nhtop\n", installed=True)
        fake_manager.explicit = {"firefox", "htop"}

        result = invoke("remove", "desktop", "htop")

        assert result.exit_code == 0
        assert (root / "sets" / "desktop").read_text() == "firefox\n"
        assert fake_manager.explicit == {"firefox"}

    def test_remove_unlisted(self, invoke, make_set) -> None:
        """Removing an unlisted package reports so."""
        make_set("desktop", "firefox\n")

        result = invoke("remove", "desktop", "htop")

        assert result.exit_code == 0
        assert "did not list" in result.output


class TestUninstallCommand:
    """Tests for pkgsets uninstall command."""

    def test_uninstall(self, invoke, root: Path, make_set, fake_manager) -> None:
        """Uninstalling demotes packages and clears the marker."""
        make_set("games", "steam\n", installed=True)
        fake_manager.explicit = {"steam"}

        result = invoke("uninstall", "games")

        assert result.exit_code == 0
        assert not (root / "installed-sets" / "games").exists()
        assert (root / "sets" / "games").read_text() == "steam\n"
        assert fake_manager.explicit == set()

    def test_uninstall_not_installed(self, invoke, make_set) -> None:
        """Sets that are not installed are skipped with a warning."""
        make_set("games", "steam\n")

        result = invoke("uninstall", "games")

        assert result.exit_code == 0
        assert "Set 'games' is not installed, skipping." in result.output
