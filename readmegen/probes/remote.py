"""Version-control remote lookup for the quickstart clone step."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..logging import get_logger

logger = get_logger("probes.remote")


class RemoteResolver:
    """Resolves the ``origin`` remote URL of a Git checkout."""

    def __init__(self, runner: Callable[..., str] | None = None, remote: str = "origin") -> None:
        self._runner = runner or self._default_runner
        self.remote = remote

    def resolve(self, repo_path: str | Path) -> Optional[str]:
        args = ["git", "remote", "get-url", self.remote]
        try:
            output = self._runner(args, cwd=Path(repo_path))
        except FileNotFoundError:
            logger.debug("git executable not found; skipping remote lookup")
            return None
        except subprocess.CalledProcessError as exc:
            logger.debug("No %s remote for %s (exit %s)", self.remote, repo_path, exc.returncode)
            return None
        url = output.strip()
        return url or None

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["RemoteResolver"]
