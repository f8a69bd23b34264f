"""Markdown formatter: capabilities, features and stories as nested headings."""

from __future__ import annotations

from spx_cli.status.models import WorkItemTree


def format_markdown(tree: WorkItemTree) -> str:
    lines: list[str] = []
    for node, depth in tree.walk():
        if lines:
            lines.append("")
        lines.append(f"{'#' * (depth + 1)} {node.kind.title()} {node.number}: {node.slug}")
        lines.append("")
        lines.append(f"Status: {node.status}")
    return "\n".join(lines) + "\n"
