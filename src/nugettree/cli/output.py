"""Rich output formatting helpers for the nugettree CLI.

Renders resolved dependency trees as ``rich.tree.Tree`` objects. Every
piece of registry-provided text is passed through ``rich.markup.escape``
before it is embedded in markup, so a range such as ``[1.0.0, )`` or an
id that looks like a style tag prints verbatim.

Styles:
    root package = bold cyan, dependency = yellow, range/version = grey,
    circular reference and framework label = dim
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from nugettree.core.models import PackageInfo
from nugettree.core.resolver import DependencyNode, DependencyTree

console = Console()


def root_label(package: PackageInfo, target_framework: str | None = None) -> str:
    """Markup label for the root of a tree."""
    label = f"[bold cyan]{escape(package.id)}[/] [grey]{escape(package.version)}[/]"
    if target_framework is not None:
        label += f" [dim]({escape(target_framework)})[/]"
    return label


def node_label(node: DependencyNode) -> str:
    """Markup label for an edge or circular reference node."""
    if node.circular:
        return f"[dim]{escape(node.id)} {escape(node.version or '')} (circular reference)[/]"
    return f"[yellow]{escape(node.id)}[/] [grey]{escape(node.range or '')}[/]"


def new_tree(package: PackageInfo, target_framework: str | None = None) -> Tree:
    """Create an empty rich tree rooted at ``package``."""
    return Tree(root_label(package, target_framework))


def add_tree_node(parent: Tree, node: DependencyNode) -> Tree:
    """Node factory that builds a rich tree while the resolver fetches.

    Args:
        parent: Rich tree (or subtree) to attach to.
        node: Node produced by the resolver.

    Returns:
        The new rich subtree, used as the parent of ``node``'s children.
    """
    return parent.add(node_label(node))


def render_tree(tree: DependencyTree) -> Tree:
    """Convert an already resolved ``DependencyTree`` to a rich tree."""
    rendered = new_tree(tree.root, tree.target_framework)
    pending: list[tuple[Tree, DependencyNode]] = [
        (rendered, child) for child in reversed(tree.children)
    ]
    while pending:
        parent, node = pending.pop()
        branch = add_tree_node(parent, node)
        pending.extend((branch, child) for child in reversed(node.children))
    return rendered


def print_not_found(package_id: str) -> None:
    """Print the user-facing message for an unknown package or version."""
    console.print(f"[red]Package '{escape(package_id)}' not found[/]")


def print_error(message: str) -> None:
    """Print a fatal error message."""
    console.print(f"[red]Error: {escape(message)}[/]")


def print_versions(package_id: str, versions: list[str]) -> None:
    """Print the published versions of a package, latest last.

    Args:
        package_id: Package id as requested.
        versions: Versions in registry order.
    """
    if not versions:
        console.print(f"[dim]No versions published for {escape(package_id)}.[/dim]")
        return

    table = Table(title=f"{escape(package_id)} versions", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Version", style="bold")
    for index, version in enumerate(versions, start=1):
        latest = " [green](latest)[/green]" if index == len(versions) else ""
        table.add_row(str(index), f"{escape(version)}{latest}")
    console.print(table)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout.

    Args:
        data: Any JSON-serializable data structure.
    """
    console.print_json(json.dumps(data, default=str))


def print_json_error(package_id: str, message: str) -> None:
    """Print a failure as a JSON object, for ``--format json`` callers."""
    print_json({"id": package_id, "error": message})
