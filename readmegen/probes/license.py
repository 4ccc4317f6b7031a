"""License file detection."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..fs import FileReader

LICENSE_FILES: Tuple[str, ...] = ("LICENSE", "LICENSE.md", "LICENSE.txt")

# Keyword -> label, checked in order against the first lines of the file.
LICENSE_FAMILIES: Tuple[Tuple[str, str], ...] = (
    ("MIT", "MIT"),
    ("Apache", "Apache 2.0"),
    ("GPL", "GPL"),
    ("BSD", "BSD"),
)

HEAD_LINES = 3


def detect_license(
    reader: FileReader, candidates: Sequence[str] = LICENSE_FILES
) -> Optional[str]:
    """Return a short license label, or the filename when it cannot be classified."""
    for filename in candidates:
        head = reader.head(filename, HEAD_LINES)
        if not head:
            continue
        return classify_license(head) or filename
    return None


def classify_license(text: str) -> Optional[str]:
    for keyword, label in LICENSE_FAMILIES:
        if keyword in text:
            return label
    return None


__all__ = ["LICENSE_FILES", "classify_license", "detect_license"]
