"""CLI helpers exposed for other modules."""

from .helpers import console, load_config_or_exit, output_error, resolve_project_root

__all__ = ["console", "load_config_or_exit", "output_error", "resolve_project_root"]
