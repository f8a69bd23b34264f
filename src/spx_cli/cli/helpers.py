"""Shared helpers for spx CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from spx_cli.core.config import ConfigError, SpxConfig, load_config

console = Console()


def resolve_project_root(root: Path | None) -> Path:
    """Return the absolute project root, defaulting to the working directory."""
    return (root or Path.cwd()).resolve()


def output_error(json_mode: bool, error_message: str) -> None:
    """Output error in JSON or human-readable format."""
    if json_mode:
        print(json.dumps({"error": error_message}))
    else:
        console.print(f"[red]Error:[/red] {escape(error_message)}", highlight=False, soft_wrap=True)


def load_config_or_exit(project_root: Path, json_mode: bool = False) -> SpxConfig:
    try:
        return load_config(project_root)
    except ConfigError as exc:
        output_error(json_mode, str(exc))
        raise typer.Exit(1)
