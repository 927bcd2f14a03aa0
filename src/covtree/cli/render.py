"""Terminal rendering of coverage trees."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from covtree.core.console import get_console
from covtree.coverage import Band, Folder, Node, Thresholds, classify, format_percent

_BAND_STYLES = {
    Band.LOW: "red",
    Band.MEDIUM: "yellow",
    Band.HIGH: "green",
}


def _label(node: Node, thresholds: Thresholds) -> str:
    style = _BAND_STYLES[classify(node, thresholds)]
    name = escape(node.name or node.path or ".")
    if not node.is_leaf:
        name = f"[bold]{name}/[/bold]"
    return (
        f"{name} [{style}]{format_percent(node.coverage_percent)}%[/{style}] "
        f"[dim]({node.lines_hit}/{node.lines_found})[/dim]"
    )


def build_rich_tree(root: Folder, thresholds: Thresholds) -> Tree:
    """Mirror a coverage tree as a Rich tree, children in name order."""

    def add_children(branch: Tree, folder: Folder) -> None:
        for child in folder.children.values():
            sub = branch.add(_label(child, thresholds))
            if isinstance(child, Folder):
                add_children(sub, child)

    tree = Tree(_label(root, thresholds))
    add_children(tree, root)
    return tree


def render_tree(root: Folder, thresholds: Thresholds, console: Console | None = None) -> None:
    """Print a coverage tree to stdout (or the given console)."""
    console = console or get_console(stderr=False)
    console.print(build_rich_tree(root, thresholds))
