"""Queries over a validated work item tree."""

from __future__ import annotations

from typing import Iterable

from .models import TreeNode, WorkItemKind, WorkItemStatus, WorkItemTree

SUMMARY_KINDS: tuple[WorkItemKind, ...] = (WorkItemKind.CAPABILITY, WorkItemKind.FEATURE)


def find_next_work_item(tree: WorkItemTree) -> TreeNode | None:
    """Return the first story that is not DONE, in tree order.

    Ordering numbers are absolute: a lower-numbered capability (then
    feature, then story) must finish first, so an OPEN story can come before
    an IN_PROGRESS one. Story numbers are only compared among siblings; this
    is tree order, not a global sort of pending stories by their own number.
    Returns None when every story is DONE or the tree holds no stories.
    """
    for node, _depth in tree.walk():
        if node.kind == WorkItemKind.STORY and node.status != WorkItemStatus.DONE:
            return node
    return None


def find_ancestors(tree: WorkItemTree, target: TreeNode) -> list[TreeNode]:
    """Return the ancestors of ``target`` ordered root first.

    Returns an empty list for roots and for nodes not in ``tree``.
    """
    stack: list[tuple[TreeNode, tuple[TreeNode, ...]]] = [(node, ()) for node in tree.nodes]
    while stack:
        node, ancestors = stack.pop()
        if node is target:
            return list(ancestors)
        chain = ancestors + (node,)
        stack.extend((child, chain) for child in node.children)
    return []


def summarize(
    tree: WorkItemTree, kinds: Iterable[WorkItemKind] = SUMMARY_KINDS
) -> dict[str, int]:
    """Count nodes of ``kinds`` per effective status.

    Stories are left out by default; the summary describes progress of
    capabilities and features.
    """
    wanted = set(kinds)
    summary = {"done": 0, "in_progress": 0, "open": 0}
    for node, _depth in tree.walk():
        if node.kind in wanted:
            summary[node.status.lower()] += 1
    return summary
