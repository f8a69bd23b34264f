"""Structural validation for assembled work item trees.

Checks run in a fixed order and the first violation wins:

1. duplicate ordering numbers among siblings (including the root level)
2. hierarchy shape (number range, leaf children, capability > feature > story)
3. cycles (a node whose path equals one of its ancestors' paths)

This module is a library -- it reports problems but never repairs them.
"""

from __future__ import annotations

import os
from collections import defaultdict
from pathlib import Path
from typing import Iterator

from .errors import CycleError, DuplicateNumberError, HierarchyError
from .models import (
    MAX_NUMBER,
    MIN_NUMBER,
    PARENT_KIND,
    TreeNode,
    WorkItemKind,
    WorkItemTree,
    is_valid_number,
)


def _sibling_groups(tree: WorkItemTree) -> Iterator[tuple[TreeNode | None, list[TreeNode]]]:
    """Yield ``(parent, children)`` for the root level and every node.

    Each node object is expanded once, so a malformed tree that links a node
    under its own descendant still terminates and reaches the cycle check.
    """
    yield None, tree.nodes
    seen: set[int] = set()
    stack = list(reversed(tree.nodes))
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if node.children:
            yield node, node.children
            stack.extend(reversed(node.children))


def _parent_pairs(tree: WorkItemTree) -> Iterator[tuple[TreeNode | None, TreeNode]]:
    for parent, children in _sibling_groups(tree):
        for child in children:
            yield parent, child


def check_duplicates(tree: WorkItemTree) -> None:
    """Raise :class:`DuplicateNumberError` when siblings share a number."""
    for parent, siblings in _sibling_groups(tree):
        by_number: dict[int, list[TreeNode]] = defaultdict(list)
        for node in siblings:
            by_number[node.number].append(node)
        for number in sorted(by_number):
            group = by_number[number]
            if len(group) > 1:
                raise DuplicateNumberError(
                    kind=str(group[0].kind),
                    number=number,
                    slugs=[node.slug for node in group],
                    parent=parent.dir_name if parent is not None else None,
                )


def check_hierarchy(tree: WorkItemTree) -> None:
    """Raise :class:`HierarchyError` for nodes at the wrong level."""
    for parent, node in _parent_pairs(tree):
        if not is_valid_number(node.number):
            raise HierarchyError(
                f"Hierarchy violation: {node.dir_name} has number {node.number}, "
                f"expected {MIN_NUMBER}-{MAX_NUMBER} ({node.path})"
            )

        if node.kind == WorkItemKind.STORY and node.children:
            names = ", ".join(child.dir_name for child in node.children)
            raise HierarchyError(
                f"Hierarchy violation: leaf nodes must not have children; "
                f"{node.dir_name} contains {names} ({node.path})"
            )

        expected = PARENT_KIND[node.kind]
        actual = parent.kind if parent is not None else None
        if expected == actual:
            continue
        if parent is None:
            raise HierarchyError(
                f"Hierarchy violation: {node.kind} {node.dir_name} has no "
                f"{expected} parent (orphan at {node.path})"
            )
        if expected is None:
            raise HierarchyError(
                f"Hierarchy violation: {node.kind} {node.dir_name} must be top-level "
                f"but is nested in {parent.dir_name} ({node.path})"
            )
        raise HierarchyError(
            f"Hierarchy violation: {node.kind} {node.dir_name} must be inside a "
            f"{expected}, found inside {parent.kind} {parent.dir_name} ({node.path})"
        )


def check_cycles(tree: WorkItemTree) -> None:
    """Raise :class:`CycleError` when a node repeats an ancestor's path.

    Paths are compared after symlink resolution.
    """
    stack: list[tuple[TreeNode, tuple[Path, ...]]] = [
        (node, ()) for node in reversed(tree.nodes)
    ]
    while stack:
        node, ancestors = stack.pop()
        path = Path(os.path.realpath(node.path))
        if path in ancestors:
            start = ancestors.index(path)
            raise CycleError(list(ancestors[start:]) + [path])
        chain = ancestors + (path,)
        stack.extend((child, chain) for child in reversed(node.children))


def validate_tree(tree: WorkItemTree) -> WorkItemTree:
    """Validate ``tree`` and return it unchanged.

    Raises:
        DuplicateNumberError: Two siblings share an ordering number.
        HierarchyError: A node breaks the capability > feature > story shape.
        CycleError: A node's path equals an ancestor's path.
    """
    check_duplicates(tree)
    check_hierarchy(tree)
    check_cycles(tree)
    return tree
