"""Work item data model for the spx status engine.

Defines the closed set of work item kinds, the three derived statuses,
the immutable identifier parsed from a directory name, and the tree
types produced by the assembler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Iterator

MIN_NUMBER = 10
MAX_NUMBER = 99


class WorkItemKind(StrEnum):
    """Three-level work item hierarchy: capability > feature > story."""

    CAPABILITY = "capability"
    FEATURE = "feature"
    STORY = "story"


class WorkItemStatus(StrEnum):
    """Derived status of a work item."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


# kind -> required parent kind (None means the kind sits at the root)
PARENT_KIND: dict[WorkItemKind, WorkItemKind | None] = {
    WorkItemKind.CAPABILITY: None,
    WorkItemKind.FEATURE: WorkItemKind.CAPABILITY,
    WorkItemKind.STORY: WorkItemKind.FEATURE,
}

# Child collection key used when serialising each level.
CHILDREN_KEY: dict[WorkItemKind, str | None] = {
    WorkItemKind.CAPABILITY: "features",
    WorkItemKind.FEATURE: "stories",
    WorkItemKind.STORY: None,
}


def is_valid_number(number: int) -> bool:
    """Return True when ``number`` lies in the ordering range [10, 99]."""
    return MIN_NUMBER <= number <= MAX_NUMBER


@dataclass(frozen=True)
class WorkItemIdentifier:
    """Parsed work item directory name plus its location on disk."""

    kind: WorkItemKind
    number: int
    slug: str
    path: Path | None = None

    @property
    def dir_name(self) -> str:
        """Canonical directory name, e.g. ``feature-32_directory-walking``."""
        return f"{self.kind}-{self.number}_{self.slug}"


@dataclass
class TreeNode:
    """One work item inside an assembled tree."""

    kind: WorkItemKind
    number: int
    slug: str
    path: Path
    own_status: WorkItemStatus
    children: list[TreeNode] = field(default_factory=list)
    effective_status: WorkItemStatus = field(init=False)

    def __post_init__(self) -> None:
        # Rollup overwrites this once children are known.
        self.effective_status = self.own_status

    @classmethod
    def from_identifier(
        cls, identifier: WorkItemIdentifier, own_status: WorkItemStatus
    ) -> TreeNode:
        if identifier.path is None:
            raise ValueError(f"Work item {identifier.dir_name} has no path")
        return cls(
            kind=identifier.kind,
            number=identifier.number,
            slug=identifier.slug,
            path=identifier.path,
            own_status=own_status,
        )

    @property
    def dir_name(self) -> str:
        return f"{self.kind}-{self.number}_{self.slug}"

    @property
    def status(self) -> WorkItemStatus:
        """Effective status, the value reported to users."""
        return self.effective_status

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "kind": str(self.kind),
            "number": self.number,
            "slug": self.slug,
            "path": str(self.path),
            "status": str(self.status),
            "own_status": str(self.own_status),
        }
        key = CHILDREN_KEY[self.kind]
        if key is not None:
            d[key] = [child.to_dict() for child in self.children]
        elif self.children:
            # Only reachable for unvalidated trees.
            d["children"] = [child.to_dict() for child in self.children]
        return d


@dataclass
class WorkItemTree:
    """Ordered root-level capabilities of a scanned work area."""

    nodes: list[TreeNode] = field(default_factory=list)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def walk(self) -> Iterator[tuple[TreeNode, int]]:
        """Yield ``(node, depth)`` pairs in pre-order, siblings in order."""
        stack: list[tuple[TreeNode, int]] = [(node, 0) for node in reversed(self.nodes)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            stack.extend((child, depth + 1) for child in reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        return {"capabilities": [node.to_dict() for node in self.nodes]}


DEFAULT_MARKER_DIR = "tests"
DEFAULT_DONE_FILE = "DONE.md"


@dataclass(frozen=True)
class MarkerConfig:
    """Names that drive status derivation.

    Attributes:
        marker_dir: Subdirectory directly inside each work item whose
            contents decide the item's own status (default ``tests``)
        done_file: File inside ``marker_dir`` whose presence marks the item
            as finished (default ``DONE.md``; matched case-sensitively)
    """

    marker_dir: str = DEFAULT_MARKER_DIR
    done_file: str = DEFAULT_DONE_FILE

    def to_dict(self) -> dict[str, str]:
        return {"dir": self.marker_dir, "done_file": self.done_file}


DEFAULT_MARKERS = MarkerConfig()
