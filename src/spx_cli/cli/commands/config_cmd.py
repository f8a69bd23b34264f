"""Top-level ``spx config`` command.

Displays the resolved project configuration: the defaults with any values
from .spx/config.yaml layered on top.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from spx_cli.cli.helpers import console, load_config_or_exit, resolve_project_root
from spx_cli.core.config import config_path


def _flatten(data: dict, prefix: str = "") -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            rows.extend(_flatten(value, dotted))
        else:
            rows.append((dotted, str(value)))
    return rows


def config(
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        help="Project root (defaults to the current directory)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
) -> None:
    """Display the resolved project configuration."""
    project_root = resolve_project_root(root)
    resolved = load_config_or_exit(project_root, json_output)
    source = config_path(project_root)

    if json_output:
        print(json.dumps(resolved.to_dict(), indent=2))
        return

    table = Table(title="spx configuration", show_lines=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="bold")
    for key, value in _flatten(resolved.to_dict()):
        table.add_row(key, escape(value))

    console.print(table)
    if source.exists():
        console.print(f"[dim]Loaded from {escape(str(source))}[/dim]", highlight=False)
    else:
        console.print("[dim]No .spx/config.yaml found; showing defaults[/dim]")
