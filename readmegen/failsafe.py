"""Fallback profile when a project root cannot be scanned."""

from __future__ import annotations

from pathlib import Path

from .models import ProjectProfile


def fallback_profile(
    repo_path: Path,
    *,
    name: str | None = None,
    description: str | None = None,
) -> ProjectProfile:
    """Return a profile built only from overrides and the directory name."""
    project_name = (name or "").strip() or Path(repo_path).name or "project"
    return ProjectProfile(
        name=project_name,
        description=(description or "").strip() or None,
    )


__all__ = ["fallback_profile"]
