"""JSON formatter with summary statistics and the full tree."""

from __future__ import annotations

import json
from typing import Any

from spx_cli.core.config import SpxConfig
from spx_cli.status.models import WorkItemTree
from spx_cli.status.selection import summarize

JSON_INDENT = 2


def build_report(tree: WorkItemTree, config: SpxConfig) -> dict[str, Any]:
    """Return the JSON-serialisable status report.

    The summary counts capabilities and features only; stories appear in
    the tree but not in the counts.
    """
    return {
        "config": config.to_dict(),
        "summary": summarize(tree),
        "capabilities": tree.to_dict()["capabilities"],
    }


def format_json(tree: WorkItemTree, config: SpxConfig) -> str:
    return json.dumps(build_report(tree, config), indent=JSON_INDENT)
