"""Build, run and CI file detection reported alongside the manifest facts."""

from __future__ import annotations

from typing import Sequence, Tuple

from ..fs import FileReader

BUILD_FILES: Tuple[str, ...] = (
    "Makefile",
    "Dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    "Justfile",
    "Taskfile.yml",
)

# Directories count when present; the rest are single files.
CI_PATHS: Tuple[str, ...] = (
    ".github/workflows",
    ".gitlab-ci.yml",
    ".circleci",
    "Jenkinsfile",
    ".travis.yml",
)


def detect_build_files(
    reader: FileReader, candidates: Sequence[str] = BUILD_FILES
) -> Tuple[str, ...]:
    """Return the build/run files present at the project root, in candidate order."""
    return tuple(name for name in candidates if reader.exists(name))


def detect_ci(reader: FileReader, candidates: Sequence[str] = CI_PATHS) -> Tuple[str, ...]:
    """Return the CI/CD configuration paths present under the project root."""
    return tuple(path for path in candidates if reader.exists(path) or reader.is_dir(path))


__all__ = ["BUILD_FILES", "CI_PATHS", "detect_build_files", "detect_ci"]
