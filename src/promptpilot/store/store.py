"""Prompt store: two JSON collections (global, project) with project-wins merge.

Every operation reloads from disk; nothing is cached between calls, so edits
made to the files by hand are picked up on the next read.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import shutil
from datetime import datetime
from pathlib import Path

from promptpilot.store.models import Prompt, SaveResult, SaveStatus, Scope
from promptpilot.workspace import ProjectContext

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "PromptPilot.json"


class PromptStore:
    """Read/write access to the global and project prompt collections."""

    def __init__(
        self,
        global_dir: Path,
        project: ProjectContext | None = None,
        file_name: str = DEFAULT_FILE_NAME,
    ) -> None:
        self.global_dir = Path(global_dir)
        self.file_name = file_name
        self.project = project or ProjectContext()
        self.global_dir.mkdir(parents=True, exist_ok=True)

    # ── Paths ─────────────────────────────────────────────────

    @property
    def global_path(self) -> Path:
        return self.global_dir / self.file_name

    @property
    def project_path(self) -> Path | None:
        return self.project.collection_path(self.file_name)

    def _path_for(self, scope: Scope) -> Path | None:
        return self.global_path if scope is Scope.GLOBAL else self.project_path

    def refresh_project_context(self, root: Path | str | None) -> None:
        """Point project-scoped operations at a new workspace (or none)."""
        new_root = Path(root) if root is not None else None
        self.project = ProjectContext(root=new_root, dir_name=self.project.dir_name)
        logger.info("Project context: %s", self.project_path or "(none)")

    # ── File I/O ──────────────────────────────────────────────

    def _parse(self, path: Path) -> list[Prompt]:
        """Read a collection file. Raises OSError/ValueError on bad files."""
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        return [Prompt.from_dict(item) for item in data]

    def _read(self, path: Path) -> list[Prompt]:
        if not path.exists():
            return []
        try:
            return self._parse(path)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.warning("Error reading prompts from %s: %s", path, e)
            return []

    def _backup_unreadable(self, path: Path) -> None:
        """Copy aside a collection file that is about to be overwritten but cannot be read."""
        if not path.is_file():
            return
        try:
            self._parse(path)
            return
        except (OSError, ValueError):
            pass
        ts = datetime.now().strftime("%Y%m%dT%H%M%S")
        backup = path.with_name(f"{path.name}.{ts}.bak")
        shutil.copy2(path, backup)
        logger.error("Unreadable prompts file %s replaced; previous content saved to %s", path, backup)

    def _write(self, path: Path, prompts: list[Prompt]) -> None:
        """Persist a collection. Raises OSError; callers turn it into a result."""
        path.parent.mkdir(parents=True, exist_ok=True)
        self._backup_unreadable(path)
        text = json.dumps([p.to_dict() for p in prompts], indent=2, ensure_ascii=False)
        path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %d prompt(s) to %s", len(prompts), path)

    # ── Reads ─────────────────────────────────────────────────

    def load_collection(self, scope: Scope) -> list[Prompt]:
        """Load one scope's collection. Never raises on bad files.

        Each record's scope is the collection it was read from, whatever the
        file's own "scope" field says.
        """
        path = self._path_for(scope)
        if path is None:
            return []
        return [
            p if p.scope is scope else dataclasses.replace(p, scope=scope)
            for p in self._read(path)
        ]

    def merged_view(self) -> list[Prompt]:
        """Global prompts overlaid by project prompts, one entry per name."""
        by_name: dict[str, Prompt] = {}
        for prompt in self.load_collection(Scope.GLOBAL):
            by_name[prompt.short_name] = prompt
        for prompt in self.load_collection(Scope.PROJECT):
            by_name[prompt.short_name] = prompt
        return list(by_name.values())

    def find_by_name(self, name: str) -> Prompt | None:
        for prompt in self.merged_view():
            if prompt.short_name == name:
                return prompt
        return None

    # ── Mutations ─────────────────────────────────────────────

    def insert_or_update(
        self,
        prompt: Prompt,
        is_update: bool = False,
        previous: Prompt | None = None,
    ) -> SaveResult:
        """Add a prompt, or replace `previous` with it when is_update is set.

        Validation runs before anything is written: a rejected call leaves
        both files exactly as they were.
        """
        target_path = self._path_for(prompt.scope)
        if target_path is None:
            return SaveResult(
                SaveStatus.NO_PROJECT_CONTEXT,
                prompt,
                "No workspace folder is open; cannot save a project-specific prompt.",
            )

        target = self.load_collection(prompt.scope)
        same_slot = (
            is_update
            and previous is not None
            and previous.scope is prompt.scope
            and previous.short_name == prompt.short_name
        )
        if not same_slot and any(p.short_name == prompt.short_name for p in target):
            return SaveResult(
                SaveStatus.DUPLICATE_NAME,
                prompt,
                f'A {prompt.scope.label} prompt named "{prompt.short_name}" already exists.',
            )

        # (path, collection before removal) so a failed append can be undone
        removed_from: tuple[Path, list[Prompt]] | None = None
        if is_update and previous is not None:
            old_path = self._path_for(previous.scope)
            if old_path is not None:
                before = self.load_collection(previous.scope)
                remaining = [p for p in before if p.short_name != previous.short_name]
                try:
                    self._write(old_path, remaining)
                except OSError as e:
                    logger.error("Error writing prompts to %s: %s", old_path, e)
                    return SaveResult(SaveStatus.WRITE_FAILURE, prompt, str(e))
                removed_from = (old_path, before)

        # Re-read: the removal above may have touched this same file
        updated = self.load_collection(prompt.scope)
        updated.append(prompt)
        try:
            self._write(target_path, updated)
        except OSError as e:
            logger.error("Error writing prompts to %s: %s", target_path, e)
            if removed_from is not None:
                self._restore(*removed_from)
            return SaveResult(SaveStatus.WRITE_FAILURE, prompt, str(e))

        logger.info(
            "%s %s prompt: %s",
            "Updated" if is_update else "Saved",
            prompt.scope.label,
            prompt.short_name,
        )
        return SaveResult(SaveStatus.OK, prompt)

    def _restore(self, path: Path, prompts: list[Prompt]) -> None:
        """Put back a collection whose record was removed by a failed update."""
        try:
            self._write(path, prompts)
        except OSError as e:
            logger.error("Could not restore %s after failed update: %s", path, e)
        else:
            logger.warning("Restored %s after failed update", path)

    def delete(self, name: str) -> bool:
        """Delete the prompt the merged view shows under `name`."""
        prompt = self.find_by_name(name)
        if prompt is None:
            return False

        path = self._path_for(prompt.scope)
        if path is None:
            logger.warning("Prompt %s is project-specific but no workspace is open", name)
            return False

        remaining = [p for p in self.load_collection(prompt.scope) if p.short_name != name]
        try:
            self._write(path, remaining)
        except OSError as e:
            logger.error("Error writing prompts to %s: %s", path, e)
            return False
        logger.info("Deleted %s prompt: %s", prompt.scope.label, name)
        return True
