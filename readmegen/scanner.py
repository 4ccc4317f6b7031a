"""Project scanning: turns a directory into a ProjectProfile."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .fs import FileReader, LocalFileReader
from .logging import get_logger
from .models import Language, ManifestFindings, ProjectProfile
from .probes import (
    ManifestProbe,
    RemoteResolver,
    detect_build_files,
    detect_ci,
    detect_license,
    detect_tasks,
    discover_probes,
)
from .probes.tasks import DEFAULT_TASK_LIMIT

_FALLBACK_NAME = "project"


class ManifestScanner:
    """Probes a project root for manifests, license, tasks and remote."""

    def __init__(
        self,
        reader_factory: Callable[[Path], FileReader] = LocalFileReader,
        probes: Optional[Iterable[ManifestProbe]] = None,
        remote_resolver: RemoteResolver | None = None,
        task_limit: int = DEFAULT_TASK_LIMIT,
    ) -> None:
        self.reader_factory = reader_factory
        self.probes: List[ManifestProbe] = list(probes) if probes is not None else discover_probes()
        self.remote_resolver = remote_resolver or RemoteResolver()
        self.task_limit = task_limit
        self.logger = get_logger("scanner")

    def scan(
        self,
        root: str | Path,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> ProjectProfile:
        """Return a fresh profile for ``root``; raises ScanError if it is unreadable."""
        root_path = Path(root).expanduser()
        reader = self.reader_factory(root_path)
        return self.scan_reader(
            reader,
            name=name,
            description=description,
            remote_url=self.remote_resolver.resolve(root_path),
        )

    def scan_reader(
        self,
        reader: FileReader,
        *,
        name: str | None = None,
        description: str | None = None,
        remote_url: str | None = None,
    ) -> ProjectProfile:
        """Build a profile from an already-open reader."""
        findings = self.detect_manifest(reader)
        license_label = detect_license(reader)
        task_list = detect_tasks(reader, self.task_limit)

        resolved_name = (
            _clean(name)
            or (findings.name if findings else None)
            or _clean(reader.root_name)
            or _FALLBACK_NAME
        )
        resolved_description = _clean(description) or (findings.description if findings else None)

        profile = ProjectProfile(
            name=resolved_name,
            description=resolved_description,
            primary_language=findings.language if findings else Language.UNKNOWN,
            prerequisites=findings.prerequisites if findings else (),
            install_command=findings.install_command if findings else None,
            run_command=findings.run_command if findings else None,
            license=license_label,
            available_tasks=task_list.tasks if task_list else None,
            task_runner=task_list.runner if task_list else None,
            remote_url=_clean(remote_url),
            version=findings.version if findings else None,
            manifest=findings.source if findings else None,
            build_files=detect_build_files(reader),
            ci=detect_ci(reader),
        )
        self.logger.debug(
            "Profile for %s: language=%s manifest=%s license=%s tasks=%d",
            profile.name,
            profile.primary_language.value,
            profile.manifest,
            profile.license,
            len(profile.available_tasks or ()),
        )
        return profile

    def detect_manifest(self, reader: FileReader) -> Optional[ManifestFindings]:
        """Run probes in priority order and return the first findings."""
        for probe in self.probes:
            if not probe.supports(reader):
                self.logger.debug("Probe %s: no manifest present", probe.name)
                continue
            findings = probe.probe(reader)
            if findings is None:
                self.logger.debug("Probe %s: manifest present but yielded nothing", probe.name)
                continue
            self.logger.debug("Probe %s matched %s", probe.name, findings.source)
            return findings
        return None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


__all__ = ["ManifestScanner"]
