"""Tests for the per-ecosystem manifest probes."""

from __future__ import annotations

import json

import pytest

from readmegen.fs import MemoryFileReader
from readmegen.models import Language
from readmegen.probes.manifests import (
    GoProbe,
    NodeProbe,
    PythonProbe,
    RustProbe,
    build_node_script_command,
    detect_node_package_manager,
    match_field,
)


def _reader(files: dict[str, str]) -> MemoryFileReader:
    return MemoryFileReader("demo", files)


def _package_json(**fields: object) -> str:
    return json.dumps(fields)


@pytest.mark.parametrize(
    ("lockfiles", "expected"),
    [
        ((), "npm"),
        (("yarn.lock",), "yarn"),
        (("pnpm-lock.yaml", "yarn.lock"), "pnpm"),
        (("bun.lockb", "pnpm-lock.yaml", "yarn.lock"), "bun"),
        (("bun.lock",), "bun"),
    ],
)
def test_detect_node_package_manager_uses_lockfile_priority(lockfiles, expected) -> None:
    reader = _reader({name: "" for name in lockfiles})
    assert detect_node_package_manager(reader) == expected


def test_node_probe_with_bun_lock_uses_bun_commands() -> None:
    reader = _reader(
        {
            "package.json": _package_json(name="widget", scripts={"dev": "vite"}),
            "bun.lockb": "",
        }
    )

    findings = NodeProbe().probe(reader)

    assert findings is not None
    assert findings.language is Language.JAVASCRIPT
    assert findings.install_command == "bun install"
    assert findings.run_command == "bun run dev"
    assert findings.prerequisites == (
        "[Node.js](https://nodejs.org) >= 18",
        "[Bun](https://bun.sh)",
    )


def test_node_probe_reads_metadata_and_engines() -> None:
    reader = _reader(
        {
            "package.json": _package_json(
                name="widget",
                description="does widgets",
                version="1.2.3",
                engines={"node": ">=20"},
                scripts={"build": "tsc"},
            ),
            "pnpm-lock.yaml": "lockfileVersion: 6\n",
        }
    )

    findings = NodeProbe().probe(reader)

    assert findings is not None
    assert findings.name == "widget"
    assert findings.description == "does widgets"
    assert findings.version == "1.2.3"
    assert findings.prerequisites == (
        "[Node.js](https://nodejs.org) >=20",
        "[pnpm](https://pnpm.io)",
    )
    assert findings.run_command == "pnpm run build"


@pytest.mark.parametrize(
    ("scripts", "manager", "expected"),
    [
        ({"dev": "x", "start": "y"}, "npm", "npm run dev"),
        ({"start": "y", "build": "z"}, "npm", "npm run start"),
        ({"start": "y"}, "yarn", "yarn start"),
        ({"build": "z"}, "yarn", "yarn run build"),
        ({"test": "jest"}, "npm", None),
    ],
)
def test_node_probe_run_command_priority(scripts, manager, expected) -> None:
    files = {"package.json": _package_json(name="demo", scripts=scripts)}
    if manager == "yarn":
        files["yarn.lock"] = ""

    findings = NodeProbe().probe(_reader(files))

    assert findings is not None
    assert findings.run_command == expected


def test_build_node_script_command() -> None:
    assert build_node_script_command("start", "npm") == "npm run start"
    assert build_node_script_command("start", "pnpm") == "pnpm start"
    assert build_node_script_command("dev", "bun") == "bun run dev"


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", ""])
def test_node_probe_ignores_malformed_package_json(content: str) -> None:
    assert NodeProbe().probe(_reader({"package.json": content})) is None


def test_go_probe_extracts_module_name_and_version() -> None:
    reader = _reader(
        {"go.mod": "module github.com/acme/gadget\n\ngo 1.22\n\nrequire example.com/x v1.0.0\n"}
    )

    findings = GoProbe().probe(reader)

    assert findings is not None
    assert findings.language is Language.GO
    assert findings.name == "gadget"
    assert findings.prerequisites == ("[Go](https://go.dev) >= 1.22",)
    assert findings.install_command == "go mod download"
    assert findings.run_command == "go run ."


def test_go_probe_skips_major_version_suffix() -> None:
    findings = GoProbe().probe(_reader({"go.mod": "module github.com/acme/gadget/v2\n"}))

    assert findings is not None
    assert findings.name == "gadget"
    assert findings.prerequisites == ("[Go](https://go.dev)",)


def test_rust_probe_uses_line_patterns() -> None:
    reader = _reader(
        {
            "Cargo.toml": (
                "[package]\n"
                'name = "crab"\n'
                'version = "0.3.0"\n'
                'description = "A crab"\n'
                "\n[dependencies]\n"
                'serde = "1"\n'
            )
        }
    )

    findings = RustProbe().probe(reader)

    assert findings is not None
    assert findings.language is Language.RUST
    assert findings.name == "crab"
    assert findings.description == "A crab"
    assert findings.version == "0.3.0"
    assert findings.prerequisites == ("[Rust](https://rustup.rs)",)
    assert (findings.install_command, findings.run_command) == ("cargo build", "cargo run")


def test_python_probe_reads_pyproject() -> None:
    reader = _reader(
        {
            "pyproject.toml": (
                "[project]\n"
                'name = "snake"\n'
                'description = "Hiss"\n'
                'requires-python = ">=3.11"\n'
            )
        }
    )

    findings = PythonProbe().probe(reader)

    assert findings is not None
    assert findings.language is Language.PYTHON
    assert findings.name == "snake"
    assert findings.description == "Hiss"
    assert findings.source == "pyproject.toml"
    assert findings.prerequisites == ("[Python](https://python.org) >= 3.11",)


def test_python_probe_falls_back_for_requirements_only() -> None:
    findings = PythonProbe().probe(_reader({"requirements.txt": "requests\n"}))

    assert findings is not None
    assert findings.name is None
    assert findings.source == "requirements.txt"
    assert findings.prerequisites == ("[Python](https://python.org) >= 3.10",)
    assert findings.install_command == "pip install -r requirements.txt"
    assert findings.run_command == "python main.py"


def test_probes_report_support_only_when_manifest_present() -> None:
    reader = _reader({"requirements.txt": ""})

    assert PythonProbe().supports(reader)
    assert not NodeProbe().supports(reader)
    assert not GoProbe().supports(reader)
    assert not RustProbe().supports(reader)


def test_match_field_requires_line_start() -> None:
    text = '  name = "indented"\nname = "real"\n'
    assert match_field(text, "name") == "real"
    assert match_field(text, "description") is None
