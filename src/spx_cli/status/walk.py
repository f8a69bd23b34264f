"""Directory walking for work item discovery.

Walks every directory below a root and keeps the ones whose basename parses
as a work item. Symlinked directories are followed, but each canonical
(symlink-resolved) directory is visited at most once per walk.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from .errors import FilesystemError, ParseError
from .models import WorkItemIdentifier
from .patterns import parse_work_item_name

logger = logging.getLogger(__name__)


def _list_subdirectories(directory: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as it:
            entries = [entry for entry in it if _is_directory(entry)]
    except PermissionError as exc:
        raise FilesystemError(directory, f"Permission denied reading directory ({exc.strerror})") from exc
    except FileNotFoundError:
        # Removed between listing its parent and descending into it.
        logger.debug("Directory vanished during walk: %s", directory)
        return []
    except OSError as exc:
        raise FilesystemError(directory, f"Failed to read directory ({exc.strerror})") from exc
    entries.sort(key=lambda entry: entry.name)
    return entries


def _is_directory(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except FileNotFoundError:
        return False
    except PermissionError as exc:
        raise FilesystemError(entry.path, f"Permission denied checking directory ({exc.strerror})") from exc
    except OSError as exc:
        # Symlink loop: not a directory.
        if exc.errno == errno.ELOOP:
            return False
        raise FilesystemError(entry.path, f"Failed to check directory ({exc.strerror})") from exc


def walk_directories(root: Path | str) -> list[Path]:
    """Return every directory below ``root`` in deterministic pre-order.

    Raises:
        FilesystemError: If ``root`` does not exist, is not a directory, or a
            directory cannot be read.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise FilesystemError(root_path, "Directory does not exist")
    if not root_path.is_dir():
        raise FilesystemError(root_path, "Not a directory")
    root_path = root_path.resolve()

    visited: set[str] = {os.path.realpath(root_path)}
    results: list[Path] = []
    stack: list[Path] = [root_path]

    while stack:
        current = stack.pop()
        if current is not root_path:
            results.append(current)
        children: list[Path] = []
        for entry in _list_subdirectories(current):
            canonical = os.path.realpath(entry.path)
            if canonical in visited:
                logger.debug("Skipping already visited directory %s (-> %s)", entry.path, canonical)
                continue
            visited.add(canonical)
            children.append(Path(entry.path))
        stack.extend(reversed(children))

    return results


def walk_work_items(root: Path | str) -> list[WorkItemIdentifier]:
    """Walk ``root`` and return identifiers for every work item directory.

    Directories outside the naming convention (``tests``, ``.git``,
    ``node_modules``...) are not work items and are skipped without error,
    though their contents are still searched. A root with no work items
    yields an empty list.
    """
    items: list[WorkItemIdentifier] = []
    for directory in walk_directories(root):
        try:
            items.append(parse_work_item_name(directory.name, path=directory))
        except ParseError:
            continue

    logger.debug("Found %d work item(s) under %s", len(items), root)
    return items
