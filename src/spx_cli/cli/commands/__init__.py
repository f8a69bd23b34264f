"""CLI command modules for spx."""

from .config_cmd import config
from .spec import app as spec_app

__all__ = ["config", "spec_app"]
