"""Scaffold minimalist README files from project manifests."""

from .composer import ReadmeComposer
from .fs import FileReader, LocalFileReader, MemoryFileReader, ScanError
from .models import Language, ManifestFindings, ProjectProfile, TaskList
from .pipeline import Scaffolder
from .scanner import ManifestScanner

__version__ = "0.1.0"

__all__ = [
    "FileReader",
    "Language",
    "LocalFileReader",
    "ManifestFindings",
    "ManifestScanner",
    "MemoryFileReader",
    "ProjectProfile",
    "ReadmeComposer",
    "ScanError",
    "Scaffolder",
    "TaskList",
]
