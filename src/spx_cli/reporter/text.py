"""Text formatter: the work item tree as a Rich tree."""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

from spx_cli.status.models import TreeNode, WorkItemStatus, WorkItemTree

STATUS_STYLES: dict[WorkItemStatus, str] = {
    WorkItemStatus.DONE: "green",
    WorkItemStatus.IN_PROGRESS: "yellow",
    WorkItemStatus.OPEN: "bright_black",
}


def node_label(node: TreeNode) -> Text:
    label = Text(node.dir_name)
    label.append(" ")
    label.append(f"[{node.status}]", style=STATUS_STYLES[node.status])
    return label


def render_text(tree: WorkItemTree, title: str = "Work items") -> Tree:
    """Build a Rich tree with one line per work item."""
    root = Tree(f"[cyan]{escape(title)}[/cyan]", guide_style="grey50")
    stack: list[tuple[TreeNode, Tree]] = [(node, root) for node in reversed(tree.nodes)]
    while stack:
        node, parent = stack.pop()
        branch = parent.add(node_label(node))
        stack.extend((child, branch) for child in reversed(node.children))
    return root
