"""Unit tests for the reconciling commands.

Tests for apply, unadded and replace-all.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pkgsets.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def invoke(root: Path, fake_manager):
    """Invoke the CLI against the temporary root with the fake manager."""

    def _invoke(*args: str):
        with patch("pkgsets.cli.context.detect_manager", return_value=fake_manager):
            return runner.invoke(app, ["--root", str(root), *args])

    return _invoke


class TestApplyCommand:
    """Tests for pkgsets apply command."""

    def test_apply_in_sync(self, invoke, make_set, fake_manager) -> None:
        """Nothing to do prints the in-sync message."""
        make_set("base", "linux\n", installed=True)
        fake_manager.explicit = {"linux"}

        result = invoke("apply")

        assert result.exit_code == 0
        assert "System is in sync with installed sets." in result.output
        assert fake_manager.calls == []

    def test_apply_changes_system(self, invoke, make_set, fake_manager) -> None:
        """apply demotes stray packages and installs missing ones."""
        make_set("base", "linux\nbash\n", installed=True)
        make_set("games", "steam\n")
        fake_manager.explicit = {"linux", "steam"}

        result = invoke("apply")

        assert result.exit_code == 0
        assert fake_manager.calls == [
            ("uninstall", frozenset({"steam"})),
            ("install", frozenset({"bash"})),
        ]
        assert fake_manager.explicit == {"linux", "bash"}

    def test_apply_dry_run(self, invoke, make_set, fake_manager) -> None:
        """--dry-run shows the plan and changes nothing."""
        make_set("base", "bash\n", installed=True)
        fake_manager.explicit = {"steam"}

        result = invoke("apply", "--dry-run")

        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert "steam" in result.output
        assert "bash" in result.output
        assert fake_manager.calls == []

    def test_apply_json(self, invoke, make_set, fake_manager) -> None:
        """--json prints the plan as JSON."""
        make_set("base", "bash\n", installed=True)
        fake_manager.explicit = {"steam"}

        result = invoke("apply", "--json")

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "in_sync": False,
            "uninstall": ["steam"],
            "install": ["bash"],
        }
        assert fake_manager.calls == []

    def test_apply_query_failure(self, invoke, make_set, fake_manager) -> None:
        """A failing package query exits 1."""
        make_set("base", "bash\n", installed=True)
        fake_manager.fail_on.add("query")

        result = invoke("apply")

        assert result.exit_code == 1
        assert "Package manager failed" in result.output

    def test_apply_corrupt_marker(self, invoke, root: Path) -> None:
        """A marker without a set file exits 1."""
        (root / "installed-sets" / "ghost").touch()

        result = invoke("apply")

        assert result.exit_code == 1
        assert "ghost" in result.output


class TestUnaddedCommand:
    """Tests for pkgsets unadded command."""

    def test_unadded_lists_plain_lines(self, invoke, make_set, fake_manager) -> None:
        """Packages in no set are printed one per line, sorted."""
        make_set("base", "linux\n")
        make_set("games", "steam\n")
        fake_manager.explicit = {"linux", "zsh", "htop", "steam"}

        result = invoke("unadded")

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["htop", "zsh"]

    def test_unadded_nothing(self, invoke, make_set, fake_manager) -> None:
        """No output when every package belongs to a set."""
        make_set("base", "linux\n")
        fake_manager.explicit = {"linux"}

        result = invoke("unadded")

        assert result.exit_code == 0
        assert result.stdout == ""

    def test_unadded_long_names_are_not_wrapped(self, invoke, fake_manager) -> None:
        """Names wider than the terminal stay on a single line."""
        long_name = "python-" + "x" * 150
        fake_manager.explicit = {long_name}

        result = invoke("unadded")

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [long_name]


class TestReplaceAllCommand:
    """Tests for pkgsets replace-all command."""

    def test_replace_all(self, invoke, root: Path, make_set, fake_manager) -> None:
        """Matching lines are renamed in every set."""
        make_set("a", "neovim\nvim\n")
        make_set("b", "neovim\n", installed=True)
        make_set("c", "htop\n")

        result = invoke("replace-all", "neovim", "neovim-git")

        assert result.exit_code == 0
        assert "a, b" in result.output
        assert (root / "sets" / "a").read_text() == "neovim-git\nvim\n"
        assert (root / "sets" / "b").read_text() == "neovim-git\n"
        assert (root / "sets" / "c").read_text() == "htop\n"
        assert fake_manager.calls == []

    def test_replace_all_no_match(self, invoke, make_set) -> None:
        """No matching set is reported."""
        make_set("a", "vim\n")

        result = invoke("replace-all", "neovim", "neovim-git")

        assert result.exit_code == 0
        assert "No set lists 'neovim'" in result.output
