"""Unit tests for AptManager.

Tests for the APT backend implementation.
"""

from unittest.mock import patch

import pytest
from pkgsets.managers.apt import AptManager
from pkgsets.utils.shell import CommandResult


class TestAptManager:
    """Tests for AptManager class."""

    @pytest.fixture
    def manager(self) -> AptManager:
        """Create AptManager instance."""
        return AptManager()

    def test_is_available_needs_apt_mark(self, manager: AptManager) -> None:
        """is_available requires both apt-get and apt-mark."""
        with patch(
            "pkgsets.managers.apt.command_exists", side_effect=lambda name: name == "apt-get"
        ):
            assert manager.is_available() is False

        with patch("pkgsets.managers.apt.command_exists", return_value=True):
            assert manager.is_available() is True

    def test_explicitly_installed(self, manager: AptManager) -> None:
        """apt-mark showmanual output is parsed into a set."""
        with patch("pkgsets.managers.apt.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="curl\nfirefox\n", stderr="", returncode=0)
            assert manager.explicitly_installed() == {"curl", "firefox"}

        assert mock_run.call_args[0][0] == ["apt-mark", "showmanual"]

    def test_explicitly_installed_failure(self, manager: AptManager) -> None:
        """A failing apt-mark raises RuntimeError."""
        with patch("pkgsets.managers.apt.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="boom", returncode=100)
            with pytest.raises(RuntimeError, match="boom"):
                manager.explicitly_installed()

    def test_install_without_upgrade_then_manual(self, manager: AptManager) -> None:
        """install never upgrades and marks packages manual."""
        with (
            patch("pkgsets.managers.base.is_root", return_value=False),
            patch("pkgsets.managers.base.run_interactive", return_value=0) as mock_run,
        ):
            assert manager.install(["htop"]) is True

        commands = [call.args[0] for call in mock_run.call_args_list]
        assert commands == [
            ["sudo", "apt-get", "install", "--no-upgrade", "-y", "htop"],
            ["sudo", "apt-mark", "manual", "htop"],
        ]

    def test_uninstall_marks_auto(self, manager: AptManager) -> None:
        """uninstall marks packages as automatically installed."""
        with (
            patch("pkgsets.managers.base.is_root", return_value=True),
            patch("pkgsets.managers.base.run_interactive", return_value=0) as mock_run,
        ):
            assert manager.uninstall(["htop", "curl"]) is True

        assert mock_run.call_args.args[0] == ["apt-mark", "auto", "curl", "htop"]

    def test_uninstall_failure(self, manager: AptManager) -> None:
        """A non-zero exit code is reported as failure."""
        with (
            patch("pkgsets.managers.base.is_root", return_value=True),
            patch("pkgsets.managers.base.run_interactive", return_value=100),
        ):
            assert manager.uninstall(["htop"]) is False

    def test_program_override(self) -> None:
        """The program setting replaces apt-get for installs."""
        manager = AptManager(program="nala")
        with (
            patch("pkgsets.managers.base.is_root", return_value=True),
            patch("pkgsets.managers.base.run_interactive", return_value=0) as mock_run,
        ):
            manager.install(["htop"])

        assert mock_run.call_args_list[0].args[0][0] == "nala"
