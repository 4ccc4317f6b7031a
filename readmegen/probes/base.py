"""Base classes for manifest probes."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..fs import FileReader
from ..models import ManifestFindings


class ManifestProbe(ABC):
    """Contract for probes that extract project facts from one manifest type."""

    name: str = ""
    files: Sequence[str] = ()

    def supports(self, reader: FileReader) -> bool:
        """Return True when one of this probe's manifest files is present."""
        return any(reader.exists(filename) for filename in self.files)

    @abstractmethod
    def probe(self, reader: FileReader) -> Optional[ManifestFindings]:
        """Return findings, or None when the manifest yields nothing usable."""
