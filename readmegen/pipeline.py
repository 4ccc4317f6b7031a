"""Pipeline orchestration: configuration, scanning, composing and writing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .composer import ReadmeComposer
from .config import CONFIG_FILENAME, ConfigError, ReadmeGenConfig, load_config
from .failsafe import fallback_profile
from .fs import ScanError
from .logging import get_logger
from .models import ProjectProfile
from .probes import RemoteResolver, discover_probes
from .scanner import ManifestScanner


@dataclass
class ScaffoldOutcome:
    """Result of a README scaffold run."""

    profile: ProjectProfile
    markdown: str
    config: Optional[ReadmeGenConfig] = None
    fallback: bool = False


class Scaffolder:
    """Coordinates config loading, the manifest scanner and the composer."""

    def __init__(
        self,
        composer: ReadmeComposer | None = None,
        remote_resolver: RemoteResolver | None = None,
        scanner_factory: Optional[Callable[[ReadmeGenConfig], ManifestScanner]] = None,
    ) -> None:
        self.composer = composer or ReadmeComposer()
        self.remote_resolver = remote_resolver or RemoteResolver()
        self._scanner_factory = scanner_factory or self._default_scanner
        self.logger = get_logger("pipeline")

    def build_profile(
        self,
        path: str | Path,
        *,
        name: str | None = None,
        description: str | None = None,
        fallback: bool = False,
    ) -> ScaffoldOutcome:
        """Scan ``path`` and return its profile with rendered markdown.

        With ``fallback`` set, an unreadable root yields a minimal profile
        instead of raising ScanError.
        """
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Scanning %s", repo_path)
        config = load_config(repo_path / CONFIG_FILENAME)
        scanner = self._scanner_factory(config)
        try:
            profile = scanner.scan(
                repo_path,
                name=name or config.project.name,
                description=description or config.project.description,
            )
        except ScanError as exc:
            if not fallback:
                raise
            self.logger.warning("%s; falling back to directory name", exc)
            profile = fallback_profile(repo_path, name=name, description=description)
            return ScaffoldOutcome(
                profile=profile, markdown=self.composer.compose(profile), fallback=True
            )
        return ScaffoldOutcome(
            profile=profile, markdown=self.composer.compose(profile), config=config
        )

    def render(
        self,
        path: str | Path,
        *,
        name: str | None = None,
        description: str | None = None,
        fallback: bool = False,
    ) -> str:
        return self.build_profile(
            path, name=name, description=description, fallback=fallback
        ).markdown

    def write(
        self,
        path: str | Path,
        *,
        name: str | None = None,
        description: str | None = None,
        force: bool = False,
    ) -> Path:
        """Write the scaffolded README into the project root and return its path."""
        repo_path = Path(path).expanduser().resolve()
        outcome = self.build_profile(repo_path, name=name, description=description)
        filename = outcome.config.output.filename if outcome.config else "README.md"
        target = repo_path / filename
        if target.exists() and not force:
            raise FileExistsError(f"{target} already exists; pass --force to overwrite it")
        target.write_text(outcome.markdown, encoding="utf-8")
        self.logger.info("Wrote %s", target)
        return target

    def _default_scanner(self, config: ReadmeGenConfig) -> ManifestScanner:
        try:
            probes = discover_probes(config.probes.enabled)
        except ValueError as exc:
            raise ConfigError(f"Invalid probes.enabled in {CONFIG_FILENAME}: {exc}") from exc
        return ManifestScanner(
            probes=probes,
            remote_resolver=self.remote_resolver,
            task_limit=config.task_limit,
        )


__all__ = ["ScaffoldOutcome", "Scaffolder"]
