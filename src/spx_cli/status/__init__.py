"""Work item status engine for spx.

Public API surface -- the CLI and reporters import from this package.
"""

from .engine import build_status_tree
from .errors import (
    CycleError,
    DuplicateNumberError,
    FilesystemError,
    HierarchyError,
    ParseError,
    ValidationError,
    WorkItemError,
)
from .models import (
    DEFAULT_MARKERS,
    MAX_NUMBER,
    MIN_NUMBER,
    PARENT_KIND,
    MarkerConfig,
    TreeNode,
    WorkItemIdentifier,
    WorkItemKind,
    WorkItemStatus,
    WorkItemTree,
)
from .patterns import is_work_item_name, parse_work_item_name
from .resolver import determine_status, resolve_own_status, resolve_statuses
from .rollup import combine_status, rollup_status
from .selection import find_ancestors, find_next_work_item, summarize
from .tree import assemble_tree
from .validate import validate_tree
from .walk import walk_work_items

__all__ = [
    "CycleError",
    "DEFAULT_MARKERS",
    "DuplicateNumberError",
    "FilesystemError",
    "HierarchyError",
    "MAX_NUMBER",
    "MIN_NUMBER",
    "MarkerConfig",
    "PARENT_KIND",
    "ParseError",
    "TreeNode",
    "ValidationError",
    "WorkItemError",
    "WorkItemIdentifier",
    "WorkItemKind",
    "WorkItemStatus",
    "WorkItemTree",
    "assemble_tree",
    "build_status_tree",
    "combine_status",
    "determine_status",
    "find_ancestors",
    "find_next_work_item",
    "is_work_item_name",
    "parse_work_item_name",
    "resolve_own_status",
    "resolve_statuses",
    "rollup_status",
    "summarize",
    "validate_tree",
    "walk_work_items",
]
