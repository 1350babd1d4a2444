"""Shared Rich display functions for sets and package changes."""

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from pkgsets.core.reconcile import ApplyPlan, SetSummary
from pkgsets.utils.formatting import console


def _status_markup(installed: bool) -> str:
    if installed:
        return "[installed]installed[/installed]"
    return "[uninstalled]uninstalled[/uninstalled]"


def create_sets_table(summaries: list[SetSummary]) -> Table:
    """Create a Rich table with one row per set.

    Args:
        summaries: Sets to display.

    Returns:
        Rich Table with Set, Status and Packages columns.
    """
    table = Table(
        title="Package Sets",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Set", no_wrap=True)
    table.add_column("Status", width=11)
    table.add_column("Packages", justify="right", style="info")

    for summary in summaries:
        table.add_row(
            f"[set.name]{escape(summary.name)}[/set.name]",
            _status_markup(summary.installed),
            str(len(summary.members)),
        )

    return table


def create_sets_tree(summaries: list[SetSummary]) -> Tree:
    """Create a Rich tree listing every set and its members.

    Args:
        summaries: Sets to display.

    Returns:
        Rich Tree with one branch per set.
    """
    tree = Tree("[bold_header]Package Sets[/bold_header]", guide_style="border")
    for summary in summaries:
        label = f"[set.name]{escape(summary.name)}[/set.name]"
        branch = tree.add(f"{label} {_status_markup(summary.installed)}")
        if not summary.members:
            branch.add("[muted](empty)[/muted]")
        for member in summary.members:
            branch.add(f"[package.name]{escape(member)}[/package.name]")
    return tree


def print_packages(label: str, style: str, packages: frozenset[str] | set[str]) -> None:
    """Print a labelled, sorted package list on one line.

    Nothing is printed for an empty collection.
    """
    if not packages:
        return
    names = escape(" ".join(sorted(packages)))
    console.print(f"[{style}]{label}:[/{style}] {names}")


def print_apply_plan(plan: ApplyPlan) -> None:
    """Print the packages apply() demotes and installs."""
    print_packages("Mark as dependency", "removed", plan.to_uninstall)
    print_packages("Install", "added", plan.to_install)
