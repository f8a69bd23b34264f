"""Assemble a flat list of work items into an ordered tree.

Parent/child links come from filesystem containment: an item's parent is
its nearest ancestor directory that is itself a work item, so non-work-item
directories in between are skipped. This step is pure: it never touches the
filesystem and never recomputes status.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .models import TreeNode, WorkItemIdentifier, WorkItemStatus, WorkItemTree


def _sort_key(node: TreeNode) -> int:
    return node.number


def find_parent_path(path: Path, known_paths: set[Path]) -> Path | None:
    """Return the nearest ancestor of ``path`` present in ``known_paths``."""
    for ancestor in path.parents:
        if ancestor in known_paths:
            return ancestor
    return None


def assemble_tree(
    items: Sequence[WorkItemIdentifier],
    statuses: Sequence[WorkItemStatus],
) -> WorkItemTree:
    """Build a :class:`WorkItemTree` from items and their own statuses.

    Args:
        items: Parsed work items, each carrying an absolute path
        statuses: Own status for each item, aligned with ``items``

    Returns:
        Tree whose roots are the items without a work item ancestor. Roots
        and every child list are sorted ascending by number (stable, so
        duplicate numbers keep input order until the validator rejects them).
        Roots that are not capabilities are kept so the validator can report
        them.
    """
    if len(items) != len(statuses):
        raise ValueError(
            f"Got {len(items)} work items but {len(statuses)} statuses"
        )

    nodes: dict[Path, TreeNode] = {}
    order: list[Path] = []
    for item, status in zip(items, statuses):
        node = TreeNode.from_identifier(item, status)
        if node.path in nodes:
            raise ValueError(f"Work item listed twice: {node.path}")
        nodes[node.path] = node
        order.append(node.path)

    known_paths = set(nodes)
    roots: list[TreeNode] = []
    for path in order:
        node = nodes[path]
        parent_path = find_parent_path(path, known_paths)
        if parent_path is None:
            roots.append(node)
        else:
            nodes[parent_path].children.append(node)

    for node in nodes.values():
        node.children.sort(key=_sort_key)
    roots.sort(key=_sort_key)

    return WorkItemTree(nodes=roots)
