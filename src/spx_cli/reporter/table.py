"""Table formatter: one row per work item, indented by level."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from spx_cli.status.models import WorkItemTree

from .text import STATUS_STYLES


def render_table(tree: WorkItemTree, title: str = "Work items") -> Table:
    table = Table(title=title)
    table.add_column("Level", style="cyan")
    table.add_column("Number", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Status")

    for node, depth in tree.walk():
        table.add_row(
            "  " * depth + node.kind.title(),
            str(node.number),
            node.slug,
            Text(str(node.status), style=STATUS_STYLES[node.status]),
        )
    return table
