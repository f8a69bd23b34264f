"""Output formats for work item trees."""

from .json_report import format_json
from .markdown import format_markdown
from .table import render_table
from .text import STATUS_STYLES, render_text

__all__ = ["STATUS_STYLES", "format_json", "format_markdown", "render_table", "render_text"]
