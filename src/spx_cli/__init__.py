"""
spx - spec work item status CLI.

Usage:
    spx spec status [--format text|json|markdown|table]
    spx spec next
    spx config
"""

from __future__ import annotations

import logging

import typer

from spx_cli.cli.commands import config, spec_app

__version__ = "0.1.0"

app = typer.Typer(
    name="spx",
    help="Track spec work items whose status is derived from the filesystem",
    add_completion=False,
    no_args_is_help=True,
)

app.add_typer(spec_app, name="spec")
app.command()(config)


def _version_callback(value: bool) -> None:
    if value:
        print(f"spx {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Track spec work items whose status is derived from the filesystem."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main():
    app()


if __name__ == "__main__":
    main()
