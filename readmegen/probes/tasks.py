"""Task-runner target discovery (Makefile, justfile)."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ..fs import FileReader
from ..models import TaskList

DEFAULT_TASK_LIMIT = 8

TASK_FILES: Tuple[Tuple[str, str], ...] = (
    ("Makefile", "make"),
    ("justfile", "just"),
    ("Justfile", "just"),
)

_TARGET_RE = re.compile(r"^([A-Za-z_-]+):(?!=)")
_RESERVED_PREFIXES = (".", "_")


def detect_tasks(reader: FileReader, limit: int = DEFAULT_TASK_LIMIT) -> Optional[TaskList]:
    """Return the targets of the first task-runner file found, in file order."""
    for filename, runner in TASK_FILES:
        text = reader.read_text(filename)
        if text is None:
            continue
        tasks = parse_targets(text, limit)
        if not tasks:
            return None
        return TaskList(runner=runner, source=filename, tasks=tuple(tasks))
    return None


def parse_targets(text: str, limit: int = DEFAULT_TASK_LIMIT) -> List[str]:
    targets: List[str] = []
    if limit <= 0:
        return targets
    for line in text.splitlines():
        match = _TARGET_RE.match(line)
        if not match:
            continue
        name = match.group(1)
        if name.startswith(_RESERVED_PREFIXES):
            continue
        targets.append(name)
        if len(targets) >= limit:
            break
    return targets


__all__ = ["DEFAULT_TASK_LIMIT", "TASK_FILES", "detect_tasks", "parse_targets"]
