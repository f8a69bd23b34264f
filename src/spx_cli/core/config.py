"""Project configuration stored in .spx/config.yaml.

Every value has a default, so a project without a config file behaves as
if it contained::

    specs:
      root: specs
      work:
        dir: work
        status_dirs:
          doing: doing
          backlog: backlog
          done: archive
      decisions: decisions
    markers:
      dir: tests
      done_file: DONE.md
    sessions:
      dir: .spx/sessions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from spx_cli.status.models import MarkerConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = ".spx"
CONFIG_FILENAME = "config.yaml"


class ConfigError(RuntimeError):
    """Raised when .spx/config.yaml cannot be parsed or validated."""


@dataclass(frozen=True)
class StatusDirs:
    """Directories under the work dir that group work items by lifecycle."""

    doing: str = "doing"
    backlog: str = "backlog"
    done: str = "archive"

    def to_dict(self) -> dict[str, str]:
        return {"doing": self.doing, "backlog": self.backlog, "done": self.done}


@dataclass(frozen=True)
class SpecsConfig:
    """Layout of the specs tree relative to the project root."""

    root: str = "specs"
    work_dir: str = "work"
    status_dirs: StatusDirs = field(default_factory=StatusDirs)
    decisions: str = "decisions"

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "work": {"dir": self.work_dir, "status_dirs": self.status_dirs.to_dict()},
            "decisions": self.decisions,
        }


@dataclass(frozen=True)
class SessionsConfig:
    dir: str = ".spx/sessions"

    def to_dict(self) -> dict[str, str]:
        return {"dir": self.dir}


@dataclass(frozen=True)
class SpxConfig:
    """Resolved project configuration."""

    specs: SpecsConfig = field(default_factory=SpecsConfig)
    markers: MarkerConfig = field(default_factory=MarkerConfig)
    sessions: SessionsConfig = field(default_factory=SessionsConfig)

    def to_dict(self) -> dict[str, Any]:
        return {
            "specs": self.specs.to_dict(),
            "markers": self.markers.to_dict(),
            "sessions": self.sessions.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> SpxConfig:
        """Build a config from parsed YAML, falling back to defaults per key."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Top level of config.yaml must be a mapping")

        specs_data = _section(data, "specs")
        work_data = _section(specs_data, "work", prefix="specs")
        status_data = _section(work_data, "status_dirs", prefix="specs.work")
        markers_data = _section(data, "markers")
        sessions_data = _section(data, "sessions")

        defaults = cls()
        status_dirs = StatusDirs(
            doing=_name(status_data, "doing", defaults.specs.status_dirs.doing, "specs.work.status_dirs"),
            backlog=_name(status_data, "backlog", defaults.specs.status_dirs.backlog, "specs.work.status_dirs"),
            done=_name(status_data, "done", defaults.specs.status_dirs.done, "specs.work.status_dirs"),
        )
        specs = SpecsConfig(
            root=_path(specs_data, "root", defaults.specs.root, "specs"),
            work_dir=_path(work_data, "dir", defaults.specs.work_dir, "specs.work"),
            status_dirs=status_dirs,
            decisions=_path(specs_data, "decisions", defaults.specs.decisions, "specs"),
        )
        markers = MarkerConfig(
            marker_dir=_name(markers_data, "dir", defaults.markers.marker_dir, "markers"),
            done_file=_name(markers_data, "done_file", defaults.markers.done_file, "markers"),
        )
        sessions = SessionsConfig(
            dir=_path(sessions_data, "dir", defaults.sessions.dir, "sessions"),
        )
        return cls(specs=specs, markers=markers, sessions=sessions)


DEFAULT_CONFIG = SpxConfig()


def _section(data: dict[str, Any], key: str, prefix: str = "") -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        dotted = f"{prefix}.{key}" if prefix else key
        raise ConfigError(f"Invalid {dotted} in config.yaml: expected a mapping")
    return value


def _string(data: dict[str, Any], key: str, default: str, prefix: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"Invalid {prefix}.{key} in config.yaml: expected a non-empty string"
        )
    return value.strip()


def _name(data: dict[str, Any], key: str, default: str, prefix: str) -> str:
    """Read a single path component (no separators)."""
    value = _string(data, key, default, prefix)
    if "/" in value or "\\" in value or value in (".", ".."):
        raise ConfigError(
            f"Invalid {prefix}.{key} in config.yaml: '{value}' must be a plain name, not a path"
        )
    return value


def _path(data: dict[str, Any], key: str, default: str, prefix: str) -> str:
    """Read a relative path."""
    value = _string(data, key, default, prefix)
    if Path(value).is_absolute():
        raise ConfigError(
            f"Invalid {prefix}.{key} in config.yaml: '{value}' must be relative to the project root"
        )
    return value


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_FILENAME


def load_config(project_root: Path) -> SpxConfig:
    """Load configuration from .spx/config.yaml, or defaults if absent.

    Args:
        project_root: Project root directory

    Returns:
        SpxConfig with file values layered over the defaults

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values
    """
    path = config_path(project_root)
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return SpxConfig()

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.load(handle)
    except Exception as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    config = SpxConfig.from_dict(data)
    logger.debug("Loaded config from %s", path)
    return config
