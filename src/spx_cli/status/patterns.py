"""Pattern matching for work item directory names.

Format: ``{kind}-{number}_{slug}``

- kind: ``capability``, ``feature`` or ``story``
- number: decimal ordering number in [10, 99]; leading zeros are accepted
- slug: kebab-case, lowercase letters, digits and hyphens, starting with a letter
"""

from __future__ import annotations

import re
from pathlib import Path

from .errors import ParseError
from .models import MAX_NUMBER, MIN_NUMBER, WorkItemIdentifier, WorkItemKind, is_valid_number

_NAME_SHAPE = re.compile(r"^(?P<prefix>[^-_]+)-(?P<number>[^_]+)_(?P<slug>.*)$")
_NUMBER_PATTERN = re.compile(r"^[0-9]+$")
SLUG_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")

KIND_PREFIXES: dict[str, WorkItemKind] = {kind.value: kind for kind in WorkItemKind}


def parse_work_item_name(dir_name: str, path: Path | None = None) -> WorkItemIdentifier:
    """Parse a directory basename into a :class:`WorkItemIdentifier`.

    Args:
        dir_name: Directory basename, e.g. ``"story-21_parse-names"``
        path: Optional absolute location of the directory

    Returns:
        The parsed identifier; status and children are not populated here.

    Raises:
        ParseError: If the prefix is unknown, the number is not a decimal
            integer in [10, 99], or the slug has disallowed characters.
    """
    match = _NAME_SHAPE.match(dir_name)
    if not match:
        raise ParseError(dir_name, "does not match {kind}-{number}_{slug}")

    prefix = match.group("prefix")
    kind = KIND_PREFIXES.get(prefix)
    if kind is None:
        known = ", ".join(KIND_PREFIXES)
        raise ParseError(dir_name, f"unknown kind prefix '{prefix}' (expected one of: {known})")

    raw_number = match.group("number")
    if not _NUMBER_PATTERN.match(raw_number):
        raise ParseError(dir_name, f"number '{raw_number}' is not a decimal integer")
    number = int(raw_number)
    if not is_valid_number(number):
        raise ParseError(
            dir_name,
            f"number must be between {MIN_NUMBER} and {MAX_NUMBER}, got {number}",
        )

    slug = match.group("slug")
    if not SLUG_PATTERN.match(slug):
        raise ParseError(
            dir_name,
            f"slug '{slug}' must be lowercase kebab-case ([a-z][a-z0-9-]*)",
        )

    return WorkItemIdentifier(kind=kind, number=number, slug=slug, path=path)


def is_work_item_name(dir_name: str) -> bool:
    """Return True when ``dir_name`` follows the work item naming convention."""
    try:
        parse_work_item_name(dir_name)
    except ParseError:
        return False
    return True
