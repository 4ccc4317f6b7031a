"""Manifest probes for the supported ecosystems."""

from __future__ import annotations

import json
import re
from typing import Iterable, Optional, Tuple

from ..fs import FileReader
from ..logging import get_logger
from ..models import Language, ManifestFindings
from .base import ManifestProbe

logger = get_logger("probes.manifests")

NODE_URL = "[Node.js](https://nodejs.org)"
GO_URL = "[Go](https://go.dev)"
RUST_URL = "[Rust](https://rustup.rs)"
PYTHON_URL = "[Python](https://python.org)"

DEFAULT_NODE_VERSION = ">= 18"
DEFAULT_PYTHON_VERSION = ">= 3.10"

# Lock markers in priority order; the first present wins.
_NODE_LOCKFILES: Tuple[Tuple[str, str], ...] = (
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
)

_MANAGER_PREREQUISITES = {
    "bun": "[Bun](https://bun.sh)",
    "pnpm": "[pnpm](https://pnpm.io)",
}

_RUN_SCRIPTS = ("dev", "start", "build")


class NodeProbe(ManifestProbe):
    """Reads package.json and infers the package manager from lockfiles."""

    name = "node"
    files = ("package.json",)

    def probe(self, reader: FileReader) -> Optional[ManifestFindings]:
        text = reader.read_text("package.json")
        if text is None:
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.debug("Ignoring malformed package.json: %s", exc)
            return None
        if not isinstance(data, dict):
            logger.debug("Ignoring package.json without a top-level object")
            return None

        manager = detect_node_package_manager(reader)
        scripts = data.get("scripts")
        script_names = set(scripts) if isinstance(scripts, dict) else set()

        run_command = None
        for script in _RUN_SCRIPTS:
            if script in script_names:
                run_command = build_node_script_command(script, manager)
                break

        engines = data.get("engines")
        node_version = engines.get("node") if isinstance(engines, dict) else None
        if not isinstance(node_version, str) or not node_version.strip():
            node_version = DEFAULT_NODE_VERSION
        prerequisites = [f"{NODE_URL} {node_version.strip()}"]
        if manager in _MANAGER_PREREQUISITES:
            prerequisites.append(_MANAGER_PREREQUISITES[manager])

        return ManifestFindings(
            language=Language.JAVASCRIPT,
            source="package.json",
            name=_as_text(data.get("name")),
            description=_as_text(data.get("description")),
            version=_as_text(data.get("version")),
            prerequisites=unique(prerequisites),
            install_command=f"{manager} install",
            run_command=run_command,
        )


class GoProbe(ManifestProbe):
    """Reads go.mod for the module path and toolchain version."""

    name = "go"
    files = ("go.mod",)

    _MODULE_RE = re.compile(r"^module\s+(\S+)", re.MULTILINE)
    _GO_RE = re.compile(r"^go\s+(\S+)", re.MULTILINE)

    def probe(self, reader: FileReader) -> Optional[ManifestFindings]:
        text = reader.read_text("go.mod")
        if text is None:
            return None

        name = None
        module = self._MODULE_RE.search(text)
        if module:
            segments = [part for part in module.group(1).strip('"').split("/") if part]
            # Major-version suffixes (example.com/tool/v2) name the version, not the project.
            if len(segments) > 1 and re.fullmatch(r"v\d+", segments[-1]):
                segments.pop()
            name = segments[-1] if segments else None

        version = self._GO_RE.search(text)
        prerequisite = f"{GO_URL} >= {version.group(1)}" if version else GO_URL

        return ManifestFindings(
            language=Language.GO,
            source="go.mod",
            name=name,
            prerequisites=(prerequisite,),
            install_command="go mod download",
            run_command="go run .",
        )


class RustProbe(ManifestProbe):
    """Reads Cargo.toml with line patterns rather than a TOML parser."""

    name = "rust"
    files = ("Cargo.toml",)

    def probe(self, reader: FileReader) -> Optional[ManifestFindings]:
        text = reader.read_text("Cargo.toml")
        if text is None:
            return None
        return ManifestFindings(
            language=Language.RUST,
            source="Cargo.toml",
            name=match_field(text, "name"),
            description=match_field(text, "description"),
            version=match_field(text, "version"),
            prerequisites=(RUST_URL,),
            install_command="cargo build",
            run_command="cargo run",
        )


class PythonProbe(ManifestProbe):
    """Reads pyproject.toml, falling back to a bare requirements.txt."""

    name = "python"
    files = ("pyproject.toml", "requirements.txt")

    def probe(self, reader: FileReader) -> Optional[ManifestFindings]:
        pyproject = reader.read_text("pyproject.toml")
        requirements = reader.read_text("requirements.txt")
        if pyproject is None and requirements is None:
            return None

        name = description = version = None
        python_version = DEFAULT_PYTHON_VERSION
        if pyproject is not None:
            name = match_field(pyproject, "name")
            description = match_field(pyproject, "description")
            version = match_field(pyproject, "version")
            declared = match_field(pyproject, "requires-python")
            if declared:
                python_version = _format_constraint(declared)

        return ManifestFindings(
            language=Language.PYTHON,
            source="pyproject.toml" if pyproject is not None else "requirements.txt",
            name=name,
            description=description,
            version=version,
            prerequisites=(f"{PYTHON_URL} {python_version}",),
            install_command="pip install -r requirements.txt",
            run_command="python main.py",
        )


def detect_node_package_manager(reader: FileReader) -> str:
    """Infer the preferred Node package manager based on lockfiles."""
    for lockfile, manager in _NODE_LOCKFILES:
        if reader.exists(lockfile):
            return manager
    return "npm"


def build_node_script_command(script: str, manager: str) -> str:
    if script == "start":
        return "npm run start" if manager == "npm" else f"{manager} start"
    return f"{manager} run {script}"


def match_field(text: str, key: str) -> Optional[str]:
    """Return the first ``key = "value"`` at line start, or None."""
    pattern = re.compile(rf'^{re.escape(key)}\s*=\s*"([^"]+)"', re.MULTILINE)
    match = pattern.search(text)
    if match is None:
        return None
    return match.group(1).strip() or None


def unique(items: Iterable[str]) -> Tuple[str, ...]:
    seen: list[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return tuple(seen)


def _format_constraint(value: str) -> str:
    value = value.strip()
    if value[:1].isdigit():
        return f">= {value}"
    return re.sub(r"^(>=|<=|~=|==|>|<)\s*", r"\1 ", value)


def _as_text(value: object) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


__all__ = [
    "GoProbe",
    "NodeProbe",
    "PythonProbe",
    "RustProbe",
    "build_node_script_command",
    "detect_node_package_manager",
    "match_field",
]
