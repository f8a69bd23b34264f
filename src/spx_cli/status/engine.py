"""Engine entry point: directory tree in, validated status tree out."""

from __future__ import annotations

import logging
from pathlib import Path

from .models import DEFAULT_MARKERS, MarkerConfig, WorkItemTree
from .resolver import resolve_statuses
from .rollup import rollup_status
from .tree import assemble_tree
from .validate import validate_tree
from .walk import walk_work_items

logger = logging.getLogger(__name__)


def build_status_tree(
    root: Path | str,
    markers: MarkerConfig = DEFAULT_MARKERS,
    *,
    max_workers: int | None = None,
) -> WorkItemTree:
    """Scan ``root`` and return its validated, rolled-up work item tree.

    Pipeline: walk -> parse -> resolve own status -> assemble -> rollup ->
    validate. Each stage consumes the full output of the previous one and
    no partial tree is ever returned.

    Args:
        root: Directory holding capability directories
        markers: Marker directory and completion file names
        max_workers: Thread pool size for status resolution
            (``1`` resolves sequentially)

    Raises:
        FilesystemError: ``root`` is missing or unreadable, or a marker
            directory cannot be read.
        ValidationError: Duplicate sibling numbers, hierarchy violation, or
            cycle.
    """
    items = walk_work_items(root)
    statuses = resolve_statuses(items, markers, max_workers=max_workers)
    tree = assemble_tree(items, statuses)
    rollup_status(tree)
    validate_tree(tree)
    logger.debug(
        "Built status tree for %s: %d item(s), %d capability root(s)",
        root,
        len(items),
        len(tree),
    )
    return tree
