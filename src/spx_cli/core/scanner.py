"""Scanner for discovering work items in a project.

All directory paths are derived from an injected :class:`SpxConfig`; nothing
here hardcodes ``specs/work/doing``.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from spx_cli.core.config import SpxConfig
from spx_cli.status.engine import build_status_tree
from spx_cli.status.models import WorkItemIdentifier, WorkItemTree
from spx_cli.status.walk import walk_work_items


class WorkScope(StrEnum):
    """Lifecycle directory to scan under the work dir."""

    DOING = "doing"
    BACKLOG = "backlog"
    DONE = "done"


class Scanner:
    """Locate and scan the work item directories of one project.

    Example:
        scanner = Scanner(Path("/path/to/project"), load_config(project_root))
        tree = scanner.build_tree()
    """

    def __init__(self, project_root: Path, config: SpxConfig, scope: WorkScope = WorkScope.DOING):
        self.project_root = project_root
        self.config = config
        self.scope = scope

    def get_specs_root_path(self) -> Path:
        return self.project_root / self.config.specs.root

    def get_work_path(self) -> Path:
        return self.get_specs_root_path() / self.config.specs.work_dir

    def get_doing_path(self) -> Path:
        return self.get_work_path() / self.config.specs.status_dirs.doing

    def get_backlog_path(self) -> Path:
        return self.get_work_path() / self.config.specs.status_dirs.backlog

    def get_done_path(self) -> Path:
        return self.get_work_path() / self.config.specs.status_dirs.done

    def get_scan_path(self) -> Path:
        """Directory selected by ``scope``."""
        if self.scope == WorkScope.BACKLOG:
            return self.get_backlog_path()
        if self.scope == WorkScope.DONE:
            return self.get_done_path()
        return self.get_doing_path()

    def display_path(self) -> str:
        """Scan directory relative to the project root, for messages."""
        return self.get_scan_path().relative_to(self.project_root).as_posix()

    def scan(self) -> list[WorkItemIdentifier]:
        """Return the work items found in the scanned directory."""
        return walk_work_items(self.get_scan_path())

    def build_tree(self, max_workers: int | None = None) -> WorkItemTree:
        """Return the validated status tree of the scanned directory."""
        return build_status_tree(
            self.get_scan_path(),
            self.config.markers,
            max_workers=max_workers,
        )
