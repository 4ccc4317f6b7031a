"""Markdown rendering of a ProjectProfile."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .models import ProjectProfile

DEFAULT_SECTIONS: tuple[str, ...] = (
    "title",
    "description",
    "prerequisites",
    "quickstart",
    "commands",
    "license",
)

SECTION_TITLES: dict[str, str] = {
    "prerequisites": "Prerequisites",
    "quickstart": "Quickstart",
    "commands": "Available Commands",
    "license": "License",
}

QUICKSTART_PLACEHOLDER = "# TODO: add install and run commands"


class ReadmeComposer:
    """Renders a profile into a README document without touching the filesystem."""

    def __init__(self, shell: str = "bash") -> None:
        self.shell = shell

    def compose(self, profile: ProjectProfile) -> str:
        blocks = [body for _, body in self.compose_sections(profile)]
        return "\n\n".join(blocks) + "\n"

    def compose_sections(self, profile: ProjectProfile) -> List[Tuple[str, str]]:
        """Return ``(section, markdown)`` pairs for every section that has content."""
        sections: List[Tuple[str, str]] = []
        for name in DEFAULT_SECTIONS:
            body = getattr(self, f"_render_{name}")(profile)
            if body is not None:
                sections.append((name, body))
        return sections

    def _render_title(self, profile: ProjectProfile) -> str:
        return f"# {profile.name}"

    def _render_description(self, profile: ProjectProfile) -> Optional[str]:
        return profile.description or None

    def _render_prerequisites(self, profile: ProjectProfile) -> Optional[str]:
        if not profile.prerequisites:
            return None
        items = "\n".join(f"- {item}" for item in profile.prerequisites)
        return _section("prerequisites", items)

    def _render_quickstart(self, profile: ProjectProfile) -> str:
        lines: List[str] = []
        if profile.remote_url:
            lines.append(f"git clone {profile.remote_url}")
            lines.append(f"cd {profile.name}")
        if profile.install_command:
            lines.append(profile.install_command)
        if profile.run_command:
            lines.append(profile.run_command)
        if not profile.install_command and not profile.run_command:
            lines.append(QUICKSTART_PLACEHOLDER)
        fence = "\n".join([f"```{self.shell}", *lines, "```"])
        return _section("quickstart", fence)

    def _render_commands(self, profile: ProjectProfile) -> Optional[str]:
        if not profile.available_tasks:
            return None
        runner = profile.task_runner or "make"
        return _section("commands", f"`{runner} [{', '.join(profile.available_tasks)}]`")

    def _render_license(self, profile: ProjectProfile) -> Optional[str]:
        if not profile.license:
            return None
        return _section("license", profile.license)


def _section(name: str, body: str) -> str:
    return f"## {SECTION_TITLES[name]}\n\n{body}"


__all__ = ["DEFAULT_SECTIONS", "QUICKSTART_PLACEHOLDER", "ReadmeComposer", "SECTION_TITLES"]
