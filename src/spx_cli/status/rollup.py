"""Bottom-up status rollup.

A parent is DONE only when its own completion marker is present *and* every
child is DONE, and OPEN only when it and every child are OPEN. Anything in
between is IN_PROGRESS: a parent marked DONE with a lagging child, and a
parent still OPEN whose children are already DONE, both report IN_PROGRESS.
"""

from __future__ import annotations

from typing import Iterable

from .models import TreeNode, WorkItemStatus, WorkItemTree


def combine_status(
    own: WorkItemStatus, child_statuses: Iterable[WorkItemStatus]
) -> WorkItemStatus:
    """Combine a node's own status with its children's effective statuses."""
    statuses = list(child_statuses)
    if not statuses:
        return own
    if own == WorkItemStatus.DONE and all(s == WorkItemStatus.DONE for s in statuses):
        return WorkItemStatus.DONE
    if own == WorkItemStatus.OPEN and all(s == WorkItemStatus.OPEN for s in statuses):
        return WorkItemStatus.OPEN
    return WorkItemStatus.IN_PROGRESS


def rollup_status(tree: WorkItemTree) -> WorkItemTree:
    """Recompute ``effective_status`` for every node, children first.

    Uses an explicit stack, so arbitrarily deep trees do not hit the
    interpreter recursion limit. Nodes are updated in place; the same tree
    is returned.
    """
    stack: list[tuple[TreeNode, bool]] = [(node, False) for node in tree.nodes]
    while stack:
        node, children_done = stack.pop()
        if children_done or not node.children:
            node.effective_status = combine_status(
                node.own_status, (child.status for child in node.children)
            )
            continue
        stack.append((node, True))
        stack.extend((child, False) for child in node.children)
    return tree
