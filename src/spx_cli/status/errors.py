"""Exception hierarchy for the work item status engine."""

from __future__ import annotations

from pathlib import Path


class WorkItemError(Exception):
    """Base exception for work item scanning errors."""


class ParseError(WorkItemError, ValueError):
    """A directory name is not a work item name.

    The walker treats this as "not a work item" and skips the directory.
    """

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(
            f'Invalid work item name "{name}": {reason}. '
            "Expected format: {kind}-{number}_{slug} "
            '(e.g., "capability-21_core-cli", "feature-32_directory-walking")'
        )


class FilesystemError(WorkItemError):
    """Filesystem access failed for a reason other than absence."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {path}")


class ValidationError(WorkItemError):
    """The assembled tree violates a structural invariant."""


class DuplicateNumberError(ValidationError):
    """Two siblings share an ordering number."""

    def __init__(self, kind: str, number: int, slugs: list[str], parent: str | None):
        self.kind = kind
        self.number = number
        self.slugs = slugs
        self.parent = parent
        location = f" under {parent}" if parent else " at root level"
        super().__init__(
            f"Duplicate {kind} number {number}{location}: {', '.join(slugs)}"
        )


class HierarchyError(ValidationError):
    """A node sits at the wrong level of the capability/feature/story hierarchy."""


class CycleError(ValidationError):
    """A node's path repeats the path of one of its ancestors."""

    def __init__(self, chain: list[Path]):
        self.chain = chain
        super().__init__(
            "Cycle detected in work item tree: " + " -> ".join(str(p) for p in chain)
        )
