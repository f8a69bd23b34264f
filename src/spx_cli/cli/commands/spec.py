"""Spec workflow commands.

- ``spx spec status`` -- show the work item tree with derived statuses
- ``spx spec next`` -- show the next story to work on
"""

from __future__ import annotations

import json
import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from typing_extensions import Annotated

from spx_cli.cli.helpers import console, load_config_or_exit, output_error, resolve_project_root
from spx_cli.core.scanner import Scanner, WorkScope
from spx_cli.reporter import format_json, format_markdown, render_table, render_text
from spx_cli.status import WorkItemError, WorkItemTree, find_ancestors, find_next_work_item

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="spec",
    help="Inspect spec work items and their status",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"
    TABLE = "table"


RootOption = Annotated[
    Optional[Path],
    typer.Option("--root", help="Project root (defaults to the current directory)"),
]
ScopeOption = Annotated[
    WorkScope,
    typer.Option("--scope", help="Work directory to scan: doing, backlog or done"),
]
JobsOption = Annotated[
    Optional[int],
    typer.Option("--jobs", "-j", min=1, help="Worker threads for status resolution (1 = sequential)"),
]


def _build_tree(
    scanner: Scanner, json_mode: bool, jobs: int | None
) -> WorkItemTree:
    try:
        return scanner.build_tree(max_workers=jobs)
    except WorkItemError as exc:
        logger.debug("Scan of %s failed", scanner.get_scan_path(), exc_info=True)
        output_error(json_mode, str(exc))
        raise typer.Exit(1)


@app.command()
def status(
    root: RootOption = None,
    scope: ScopeOption = WorkScope.DOING,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text, json, markdown or table"),
    ] = OutputFormat.TEXT,
    jobs: JobsOption = None,
) -> None:
    """Show every work item with its derived status.

    Examples:
        spx spec status
        spx spec status --format json
        spx spec status --scope backlog --format table
    """
    json_mode = output_format == OutputFormat.JSON
    project_root = resolve_project_root(root)
    config = load_config_or_exit(project_root, json_mode)
    scanner = Scanner(project_root, config, scope=scope)
    tree = _build_tree(scanner, json_mode, jobs)

    if json_mode:
        print(format_json(tree, config))
        return

    if tree.is_empty:
        console.print(f"No work items found in {escape(scanner.display_path())}", highlight=False)
        return

    if output_format == OutputFormat.MARKDOWN:
        print(format_markdown(tree), end="")
    elif output_format == OutputFormat.TABLE:
        console.print(render_table(tree))
    else:
        console.print(render_text(tree, title=scanner.display_path()))


@app.command("next")
def next_item(
    root: RootOption = None,
    scope: ScopeOption = WorkScope.DOING,
    json_output: Annotated[bool, typer.Option("--json", help="Machine-readable JSON output")] = False,
    jobs: JobsOption = None,
) -> None:
    """Show the next story to work on.

    Lower ordering numbers always come first, whatever their status: the
    first story that is not DONE wins.
    """
    project_root = resolve_project_root(root)
    config = load_config_or_exit(project_root, json_output)
    scanner = Scanner(project_root, config, scope=scope)
    tree = _build_tree(scanner, json_output, jobs)

    node = find_next_work_item(tree)
    ancestors = find_ancestors(tree, node) if node is not None else []

    if json_output:
        print(json.dumps({
            "next": node.to_dict() if node is not None else None,
            "ancestors": [ancestor.dir_name for ancestor in ancestors],
        }))
        return

    if tree.is_empty:
        console.print(f"No work items found in {escape(scanner.display_path())}", highlight=False)
        return

    if node is None:
        console.print("[green]All work items are complete![/green]")
        return

    breadcrumb = " > ".join([ancestor.dir_name for ancestor in ancestors] + [node.dir_name])
    console.print("Next work item:")
    console.print()
    console.print(f"  [bold]{escape(breadcrumb)}[/bold]", highlight=False, soft_wrap=True)
    console.print()
    console.print(f"  Status: {node.status}", highlight=False)
    console.print(f"  Path: {escape(str(node.path))}", highlight=False, soft_wrap=True)
