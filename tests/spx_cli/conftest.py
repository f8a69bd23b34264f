"""Shared fixtures: on-disk spec trees for scanner and CLI tests."""

from __future__ import annotations

import errno
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Callable

import pytest

from spx_cli.status.models import DEFAULT_MARKERS, MarkerConfig

WorkItemFactory = Callable[..., Path]

STATES = ("open", "empty", "in_progress", "done", "done_only")


def make_work_item(
    parent: Path,
    name: str,
    state: str = "open",
    markers: MarkerConfig = DEFAULT_MARKERS,
) -> Path:
    """Create a work item directory in the requested marker state.

    States:
        open: no marker directory
        empty: marker directory with only a .gitkeep
        in_progress: marker directory with one test file
        done: test file plus completion marker
        done_only: completion marker alone
    """
    if state not in STATES:
        raise ValueError(f"Unknown state {state!r}")
    item = parent / name
    item.mkdir(parents=True, exist_ok=True)
    (item / "spec.md").write_text(f"# {name}\n", encoding="utf-8")
    if state == "open":
        return item

    marker = item / markers.marker_dir
    marker.mkdir(exist_ok=True)
    if state == "empty":
        (marker / ".gitkeep").write_text("", encoding="utf-8")
    if state in ("in_progress", "done"):
        (marker / "example.test.py").write_text("def test_it():\n    pass\n", encoding="utf-8")
    if state in ("done", "done_only"):
        (marker / markers.done_file).write_text("# Done\n", encoding="utf-8")
    return item


@pytest.fixture
def work_item() -> WorkItemFactory:
    """Factory fixture wrapping :func:`make_work_item`."""
    return make_work_item


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project with an empty specs/work/doing directory."""
    root = tmp_path / "project"
    (root / "specs" / "work" / "doing").mkdir(parents=True)
    return root


@pytest.fixture
def doing_dir(project_root: Path) -> Path:
    return project_root / "specs" / "work" / "doing"


@pytest.fixture
def sample_project(project_root: Path, doing_dir: Path) -> Path:
    """Two capabilities with mixed progress.

    capability-21_core-cli            own DONE   -> IN_PROGRESS
      feature-21_pattern-matching     own DONE   -> DONE
        story-21_parse-names          DONE
        story-32_parse-numbers        DONE
      feature-32_directory-walking    own OPEN   -> IN_PROGRESS
        story-21_recursive-walk       DONE
        story-32_symlink-guard        IN_PROGRESS
    capability-32_output              own OPEN   -> OPEN
      feature-21_text-output          own OPEN   -> OPEN
        story-21_render-tree          OPEN (empty tests/)
    """
    cap = make_work_item(doing_dir, "capability-21_core-cli", "done")
    feat = make_work_item(cap, "feature-21_pattern-matching", "done")
    make_work_item(feat, "story-21_parse-names", "done")
    make_work_item(feat, "story-32_parse-numbers", "done_only")
    feat = make_work_item(cap, "feature-32_directory-walking", "open")
    make_work_item(feat, "story-21_recursive-walk", "done")
    make_work_item(feat, "story-32_symlink-guard", "in_progress")

    cap = make_work_item(doing_dir, "capability-32_output", "open")
    feat = make_work_item(cap, "feature-21_text-output", "open")
    make_work_item(feat, "story-21_render-tree", "empty")
    return project_root


class _UnstattableEntry:
    """Directory entry whose type lookup fails with EACCES."""

    def __init__(self, entry: os.DirEntry[str]):
        self.name = entry.name
        self.path = entry.path

    def _deny(self, *args, **kwargs) -> bool:
        raise PermissionError(errno.EACCES, "Permission denied", self.path)

    is_dir = _deny
    is_file = _deny


@pytest.fixture
def deny_stat(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Make ``is_dir()``/``is_file()`` raise EACCES for entries named ``name``.

    Stands in for a symlink whose target sits behind an unsearchable
    directory, which cannot be reproduced when tests run as root.
    """
    real_scandir = os.scandir

    def install(name: str) -> None:
        @contextmanager
        def scandir(path):
            with real_scandir(path) as it:
                yield [_UnstattableEntry(entry) if entry.name == name else entry for entry in it]

        monkeypatch.setattr(os, "scandir", scandir)

    return install
