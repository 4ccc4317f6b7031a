"""Manifest probe implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from .base import ManifestProbe
from .layout import detect_build_files, detect_ci
from .license import detect_license
from .manifests import GoProbe, NodeProbe, PythonProbe, RustProbe
from .remote import RemoteResolver
from .tasks import detect_tasks

_ENTRY_POINT_GROUP = "readmegen.probes"

# Priority order: the first probe that yields findings decides the language.
_BUILTIN_FACTORIES: dict[str, Callable[[], ManifestProbe]] = {
    "node": NodeProbe,
    "go": GoProbe,
    "rust": RustProbe,
    "python": PythonProbe,
}


def discover_probes(enabled: Sequence[str] | None = None) -> List[ManifestProbe]:
    """Return instantiated probes in priority order, honoring optional enabled names.

    Probes registered under the ``readmegen.probes`` entry point group run
    after the built-in ones.
    """

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    probes: List[ManifestProbe] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], ManifestProbe]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, ManifestProbe):
            raise TypeError(f"Probe factory for '{name}' did not return a ManifestProbe instance")
        probes.append(instance)
        seen.add(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load probe entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> ManifestProbe:
            return _coerce_probe(obj)

        _add(name, _factory)

    if enabled_set is not None:
        missing = enabled_set - seen
        if missing:
            raise ValueError(f"Unknown probes requested: {', '.join(sorted(missing))}")

    return probes


def _coerce_probe(obj: object) -> ManifestProbe:
    if isinstance(obj, ManifestProbe):
        return obj
    if isinstance(obj, type) and issubclass(obj, ManifestProbe):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, ManifestProbe):
            return instance
    raise TypeError("Probe entry point must be a ManifestProbe subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "GoProbe",
    "ManifestProbe",
    "NodeProbe",
    "PythonProbe",
    "RemoteResolver",
    "RustProbe",
    "detect_build_files",
    "detect_ci",
    "detect_license",
    "detect_tasks",
    "discover_probes",
]
