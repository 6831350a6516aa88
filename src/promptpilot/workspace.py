"""Active workspace tracking for project-scoped prompts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_PROJECT_DIR = ".promptpilot"
DEFAULT_MARKERS = (DEFAULT_PROJECT_DIR, ".git")


@dataclass(frozen=True)
class ProjectContext:
    """The currently open workspace, or none.

    Held by the store and swapped wholesale via refresh_project_context().
    """

    root: Path | None = None
    dir_name: str = DEFAULT_PROJECT_DIR

    @property
    def is_open(self) -> bool:
        return self.root is not None

    def collection_path(self, file_name: str) -> Path | None:
        if self.root is None:
            return None
        return self.root / self.dir_name / file_name


def find_workspace_root(
    start: Path | str,
    markers: tuple[str, ...] | list[str] = DEFAULT_MARKERS,
) -> Path | None:
    """Walk up from start, return the nearest directory containing a marker."""
    home = Path.home().resolve()
    p = Path(start).resolve()
    while True:
        if p != home and any((p / m).exists() for m in markers):
            return p
        if p == p.parent:
            return None
        p = p.parent
