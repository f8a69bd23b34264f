"""Own-status derivation from a work item's marker directory.

Truth table (own status only, children are not considered):

| marker dir | completion file | other entries | status      |
|------------|-----------------|---------------|-------------|
| missing    | n/a             | n/a           | OPEN        |
| present    | yes             | any           | DONE        |
| present    | no              | no            | OPEN        |
| present    | no              | yes           | IN_PROGRESS |

Dotfiles (``.gitkeep``, ``.DS_Store``) never count as entries.
"""

from __future__ import annotations

import errno
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .errors import FilesystemError
from .models import DEFAULT_MARKERS, MarkerConfig, WorkItemIdentifier, WorkItemStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerState:
    """Flags read from one marker directory listing."""

    has_marker_dir: bool
    has_done_file: bool
    has_other_entries: bool


def determine_status(state: MarkerState) -> WorkItemStatus:
    """Map marker directory flags to an own status."""
    if not state.has_marker_dir:
        return WorkItemStatus.OPEN
    if state.has_done_file:
        return WorkItemStatus.DONE
    if not state.has_other_entries:
        return WorkItemStatus.OPEN
    return WorkItemStatus.IN_PROGRESS


def _is_regular_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except FileNotFoundError:
        return False
    except PermissionError as exc:
        raise FilesystemError(entry.path, f"Permission denied checking completion marker ({exc.strerror})") from exc
    except OSError as exc:
        if exc.errno == errno.ELOOP:
            return False
        raise FilesystemError(entry.path, f"Failed to check completion marker ({exc.strerror})") from exc


def read_marker_state(
    work_item_path: Path | str, markers: MarkerConfig = DEFAULT_MARKERS
) -> MarkerState:
    """Inspect the marker directory of one work item with a single listing.

    Raises:
        FilesystemError: On permission errors or other I/O failures. A missing
            marker directory is not an error.
    """
    marker_path = Path(work_item_path) / markers.marker_dir
    has_done_file = False
    has_other_entries = False
    try:
        with os.scandir(marker_path) as it:
            for entry in it:
                if entry.name == markers.done_file:
                    # A directory with the marker name is not a completion marker.
                    has_done_file = _is_regular_file(entry)
                elif not entry.name.startswith("."):
                    has_other_entries = True
    except (FileNotFoundError, NotADirectoryError):
        return MarkerState(has_marker_dir=False, has_done_file=False, has_other_entries=False)
    except PermissionError as exc:
        raise FilesystemError(marker_path, f"Permission denied reading marker directory ({exc.strerror})") from exc
    except OSError as exc:
        raise FilesystemError(marker_path, f"Failed to read marker directory ({exc.strerror})") from exc

    return MarkerState(
        has_marker_dir=True,
        has_done_file=has_done_file,
        has_other_entries=has_other_entries,
    )


def resolve_own_status(
    work_item_path: Path | str, markers: MarkerConfig = DEFAULT_MARKERS
) -> WorkItemStatus:
    """Return the own status of the work item at ``work_item_path``."""
    return determine_status(read_marker_state(work_item_path, markers))


def resolve_statuses(
    items: Sequence[WorkItemIdentifier],
    markers: MarkerConfig = DEFAULT_MARKERS,
    max_workers: int | None = None,
) -> list[WorkItemStatus]:
    """Resolve own statuses for ``items``, preserving input order.

    Each resolution reads one directory and shares no state, so the work is
    spread over a thread pool. ``max_workers=1`` resolves sequentially.
    The first ``FilesystemError`` raised by any item propagates.
    """
    paths = [item.path for item in items]
    if any(path is None for path in paths):
        raise ValueError("Every work item needs a path to resolve its status")

    if max_workers == 1 or len(paths) <= 1:
        return [resolve_own_status(path, markers) for path in paths]

    logger.debug("Resolving %d statuses with max_workers=%s", len(paths), max_workers)
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="spx-status") as pool:
        return list(pool.map(lambda path: resolve_own_status(path, markers), paths))
