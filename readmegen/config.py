"""Configuration loading for readmegen (.readmegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .probes.tasks import DEFAULT_TASK_LIMIT

CONFIG_FILENAME = ".readmegen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProjectConfig:
    """Name and description overrides."""

    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class ProbeConfig:
    """Manifest probe enablement."""

    enabled: Optional[List[str]] = None


@dataclass
class OutputConfig:
    """Where the README is written."""

    filename: str = "README.md"


@dataclass
class ReadmeGenConfig:
    """Represents the settings defined in .readmegen.yml."""

    root: Path
    project: ProjectConfig = field(default_factory=ProjectConfig)
    probes: ProbeConfig = field(default_factory=ProbeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    task_limit: int = DEFAULT_TASK_LIMIT


def load_config(config_path: Path) -> ReadmeGenConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    try:
        present = config_file.is_file()
    except OSError:
        present = False
    if not present:
        return ReadmeGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    project_data = _as_dict(data.get("project"))
    project = ProjectConfig(
        name=_as_str(project_data.get("name")),
        description=_as_str(project_data.get("description")),
    )

    probe_data = _as_dict(data.get("probes"))
    probes = ProbeConfig()
    if "enabled" in probe_data:
        probes.enabled = _as_str_list(probe_data.get("enabled"))

    output_data = _as_dict(data.get("output"))
    output = OutputConfig()
    filename = _as_str(output_data.get("filename"))
    if filename:
        if Path(filename).name != filename:
            raise ConfigError("output.filename must be a bare file name")
        output.filename = filename

    task_limit = DEFAULT_TASK_LIMIT
    task_data = _as_dict(data.get("tasks"))
    if "limit" in task_data:
        limit = _as_int(task_data.get("limit"))
        if limit is None or limit < 0:
            raise ConfigError("tasks.limit must be a non-negative integer")
        task_limit = limit

    return ReadmeGenConfig(
        root=root,
        project=project,
        probes=probes,
        output=output,
        task_limit=task_limit,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        text = str(value).strip()
        return text or None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "OutputConfig",
    "ProbeConfig",
    "ProjectConfig",
    "ReadmeGenConfig",
    "load_config",
]
