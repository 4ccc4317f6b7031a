"""Read-only file access used by probes.

Probes never touch the filesystem directly. They receive a ``FileReader``
whose methods return ``None`` for anything missing or unreadable, so each
probe can treat absence as data instead of handling exceptions.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from itertools import islice
from pathlib import Path
from typing import Mapping, Optional

from .logging import get_logger

logger = get_logger("fs")


class ScanError(RuntimeError):
    """Raised when the project root itself cannot be read."""


class FileReader(ABC):
    """Soft-failing access to files relative to a project root."""

    @property
    @abstractmethod
    def root_name(self) -> str:
        """Return the basename of the project root."""

    @abstractmethod
    def read_text(self, relative: str) -> Optional[str]:
        """Return the file contents, or None when missing or unreadable."""

    def exists(self, relative: str) -> bool:
        return self.read_text(relative) is not None

    @abstractmethod
    def is_dir(self, relative: str) -> bool:
        """Return True when ``relative`` names a directory under the root."""

    def head(self, relative: str, lines: int) -> Optional[str]:
        """Return the first ``lines`` lines of a file, stripped."""
        text = self.read_text(relative)
        if text is None:
            return None
        return "\n".join(text.splitlines()[:lines]).strip()


class LocalFileReader(FileReader):
    """FileReader backed by a directory on disk.

    Files are decoded as UTF-8 with an optional BOM; undecodable bytes are
    replaced rather than dropping the whole file.
    """

    encoding = "utf-8-sig"
    errors = "replace"

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()
        try:
            if not self.root.is_dir():
                raise ScanError(f"{self.root} is not a readable directory")
            # Listing proves the directory is readable, not just present.
            with os.scandir(self.root) as entries:
                next(entries, None)
        except OSError as exc:
            raise ScanError(f"Cannot read {self.root}: {exc}") from exc

    @property
    def root_name(self) -> str:
        return self.root.resolve().name

    def read_text(self, relative: str) -> Optional[str]:
        path = self.root / relative
        try:
            if not path.is_file():
                return None
            return path.read_text(encoding=self.encoding, errors=self.errors)
        except OSError as exc:
            logger.debug("Skipping unreadable file %s: %s", path, exc)
            return None

    def exists(self, relative: str) -> bool:
        try:
            return (self.root / relative).is_file()
        except OSError:
            return False

    def is_dir(self, relative: str) -> bool:
        try:
            return (self.root / relative).is_dir()
        except OSError:
            return False

    def head(self, relative: str, lines: int) -> Optional[str]:
        path = self.root / relative
        try:
            if not path.is_file():
                return None
            with path.open(encoding=self.encoding, errors=self.errors) as handle:
                text = "".join(islice(handle, lines))
        except OSError as exc:
            logger.debug("Skipping unreadable file %s: %s", path, exc)
            return None
        return text.strip()


class MemoryFileReader(FileReader):
    """In-memory FileReader for tests and callers that already hold file contents."""

    def __init__(self, name: str, files: Mapping[str, str]) -> None:
        self._name = name
        self._files = dict(files)

    @property
    def root_name(self) -> str:
        return self._name

    def read_text(self, relative: str) -> Optional[str]:
        return self._files.get(relative)

    def is_dir(self, relative: str) -> bool:
        prefix = relative.rstrip("/") + "/"
        return any(path.startswith(prefix) for path in self._files)


__all__ = ["FileReader", "LocalFileReader", "MemoryFileReader", "ScanError"]
