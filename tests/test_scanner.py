"""Tests for readmegen.scanner."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from readmegen.fs import MemoryFileReader, ScanError
from readmegen.models import Language
from readmegen.probes import GoProbe, RemoteResolver
from readmegen.scanner import ManifestScanner
from tests._fixtures.project_builder import ProjectBuilder, no_remote_runner


def test_scan_empty_directory_uses_basename(project_builder: ProjectBuilder) -> None:
    profile = project_builder.scan()

    assert profile.name == "project"
    assert profile.description is None
    assert profile.primary_language is Language.UNKNOWN
    assert profile.prerequisites == ()
    assert profile.install_command is None
    assert profile.run_command is None
    assert profile.license is None
    assert profile.available_tasks is None
    assert profile.remote_url is None
    assert profile.manifest is None


def test_scan_package_json_wins_over_go_mod(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "package.json": json.dumps({"scripts": {"start": "node ."}}),
            "go.mod": "module github.com/acme/gadget\n\ngo 1.22\n",
        }
    )

    profile = project_builder.scan()

    assert profile.primary_language is Language.JAVASCRIPT
    assert profile.name == "project"
    assert profile.manifest == "package.json"
    assert profile.install_command == "npm install"
    assert profile.run_command == "npm run start"
    assert all("go.dev" not in item for item in profile.prerequisites)


def test_scan_malformed_manifest_falls_through(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "package.json": "{ this is not json",
            "Cargo.toml": '[package]\nname = "crab"\ndescription = "A crab"\n',
        }
    )

    profile = project_builder.scan()

    assert profile.primary_language is Language.RUST
    assert profile.name == "crab"
    assert profile.description == "A crab"


def test_scan_overrides_take_precedence(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {"package.json": json.dumps({"name": "widget", "description": "does widgets"})}
    )

    profile = project_builder.scan(name="Gizmo", description="Better widgets")

    assert profile.name == "Gizmo"
    assert profile.description == "Better widgets"
    assert profile.primary_language is Language.JAVASCRIPT


def test_scan_blank_overrides_are_ignored(project_builder: ProjectBuilder) -> None:
    project_builder.write({"package.json": json.dumps({"name": "widget"})})

    profile = project_builder.scan(name="   ", description="")

    assert profile.name == "widget"
    assert profile.description is None


def test_scan_collects_independent_facts(project_builder: ProjectBuilder) -> None:
    project_builder.remote_url = "https://github.com/acme/project.git"
    project_builder.write(
        {
            "LICENSE": "MIT License\n\nCopyright (c) 2024 Acme\n",
            "Makefile": "build:\n\tgo build\ntest:\n\tgo test\n",
        }
    )

    profile = project_builder.scan()

    assert profile.primary_language is Language.UNKNOWN
    assert profile.license == "MIT"
    assert profile.available_tasks == ("build", "test")
    assert profile.task_runner == "make"
    assert profile.remote_url == "https://github.com/acme/project.git"


def test_scan_is_idempotent(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "pyproject.toml": '[project]\nname = "snake"\n',
            "requirements.txt": "requests\n",
            "LICENSE": "Apache License\nVersion 2.0\n",
            "Makefile": "run:\n\tpython main.py\n",
        }
    )

    assert project_builder.scan() == project_builder.scan()


def test_scan_honors_custom_probe_list(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "package.json": json.dumps({"name": "widget"}),
            "go.mod": "module example.com/gadget\n",
        }
    )

    profile = project_builder.scanner(probes=[GoProbe()]).scan(project_builder.path())

    assert profile.primary_language is Language.GO
    assert profile.name == "gadget"


def test_scan_honors_task_limit(project_builder: ProjectBuilder) -> None:
    project_builder.write({"Makefile": "a:\nb:\nc:\n"})

    profile = project_builder.scanner(task_limit=2).scan(project_builder.path())

    assert profile.available_tasks == ("a", "b")


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    scanner = ManifestScanner(remote_resolver=RemoteResolver(runner=no_remote_runner))
    missing = tmp_path / "missing"

    with pytest.raises(ScanError) as excinfo:
        scanner.scan(missing)

    assert str(missing) in str(excinfo.value)


def test_scan_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")
    scanner = ManifestScanner(remote_resolver=RemoteResolver(runner=no_remote_runner))

    with pytest.raises(ScanError):
        scanner.scan(target)


def test_scan_reader_works_with_memory_files() -> None:
    reader = MemoryFileReader(
        "inmem",
        {"go.mod": "module example.com/inmem/tool\ngo 1.21\n", "LICENSE": "Weird terms"},
    )

    profile = ManifestScanner().scan_reader(reader, remote_url="https://example.com/tool.git")

    assert profile.name == "tool"
    assert profile.primary_language is Language.GO
    assert profile.prerequisites == ("[Go](https://go.dev) >= 1.21",)
    assert profile.license == "LICENSE"
    assert profile.remote_url == "https://example.com/tool.git"


def test_scan_accepts_bom_package_json(project_builder: ProjectBuilder) -> None:
    (project_builder.path() / "package.json").write_bytes(
        b'\xef\xbb\xbf{"name": "widget", "description": "does widgets"}'
    )

    profile = project_builder.scan()

    assert profile.primary_language is Language.JAVASCRIPT
    assert profile.name == "widget"
    assert profile.description == "does widgets"


def test_scan_reads_latin1_makefile_and_license(project_builder: ProjectBuilder) -> None:
    root = project_builder.path()
    (root / "Makefile").write_bytes(b"# auteur: Jos\xe9\nbuild:\n\tcc main.c\n")
    (root / "LICENSE").write_bytes(b"MIT License\n\nCopyright (c) 2024 Jos\xe9\n")

    profile = project_builder.scan()

    assert profile.available_tasks == ("build",)
    assert profile.license == "MIT"


def test_scan_reports_build_and_ci_files(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "Dockerfile": "FROM python:3.12\n",
            "docker-compose.yml": "services: {}\n",
            ".github/workflows/ci.yml": "on: push\n",
        }
    )

    profile = project_builder.scan()

    assert profile.build_files == ("Dockerfile", "docker-compose.yml")
    assert profile.ci == (".github/workflows",)
    assert profile.to_dict()["ci"] == [".github/workflows"]
