"""Core data models shared across readmegen components."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Language(str, Enum):
    """Primary language inferred from the first matching manifest."""

    JAVASCRIPT = "JavaScript/TypeScript"
    GO = "Go"
    RUST = "Rust"
    PYTHON = "Python"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ManifestFindings:
    """Facts extracted from a single manifest file."""

    language: Language
    source: str
    name: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None
    prerequisites: Tuple[str, ...] = ()
    install_command: Optional[str] = None
    run_command: Optional[str] = None


@dataclass(frozen=True)
class TaskList:
    """Named targets discovered in a task-runner file."""

    runner: str
    source: str
    tasks: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectProfile:
    """Normalized view of a project used to compose its README."""

    name: str
    description: Optional[str] = None
    primary_language: Language = Language.UNKNOWN
    prerequisites: Tuple[str, ...] = ()
    install_command: Optional[str] = None
    run_command: Optional[str] = None
    license: Optional[str] = None
    available_tasks: Optional[Tuple[str, ...]] = None
    task_runner: Optional[str] = None
    remote_url: Optional[str] = None
    version: Optional[str] = None
    manifest: Optional[str] = None
    build_files: Tuple[str, ...] = ()
    ci: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["primary_language"] = self.primary_language.value
        data["prerequisites"] = list(self.prerequisites)
        data["build_files"] = list(self.build_files)
        data["ci"] = list(self.ci)
        if self.available_tasks is not None:
            data["available_tasks"] = list(self.available_tasks)
        return data
