"""Terminal menu over the prompt store."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Callable, TextIO

from promptpilot.clipboard import copy_to_clipboard
from promptpilot.store.models import (
    MAX_SHORT_NAME_LENGTH,
    Prompt,
    SaveResult,
    SaveStatus,
    Scope,
    clean_instruction,
    validate_instruction,
    validate_short_name,
)

if TYPE_CHECKING:
    from promptpilot.store.store import PromptStore

logger = logging.getLogger(__name__)

_END_OF_TEXT = "."
_SCOPES = [Scope.GLOBAL, Scope.PROJECT]


def sort_prompts(prompts: list[Prompt]) -> list[Prompt]:
    """Display order: case-insensitive by name."""
    return sorted(prompts, key=lambda p: (p.short_name.casefold(), p.short_name))


class PromptMenu:
    """Interactive menu. Reads from input_func, writes to out."""

    def __init__(
        self,
        store: PromptStore,
        *,
        copy: Callable[[str], bool] = copy_to_clipboard,
        input_func: Callable[[str], str] = input,
        out: TextIO | None = None,
    ) -> None:
        self.store = store
        self._copy = copy
        self._input = input_func
        self._out = out or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _ask(self, label: str) -> str | None:
        """Read one line; None on EOF/Ctrl+C."""
        try:
            return self._input(label)
        except (EOFError, KeyboardInterrupt):
            return None

    # ── Main loop ─────────────────────────────────────────────

    def run(self) -> None:
        prompts = self.store.merged_view()
        logger.info("Loaded %d prompt(s)", len(prompts))
        while self.show_main_menu():
            pass
        self._print("Bye!")

    def show_main_menu(self) -> bool:
        """Render the menu and handle one selection. False means quit."""
        prompts = sort_prompts(self.store.merged_view())
        workspace = self.store.project.root or "(none)"

        self._print()
        self._print(f"PromptPilot | workspace: {workspace}")
        self._print("-" * 48)
        self._print("  a) Add new")
        for i, prompt in enumerate(prompts, 1):
            self._print(f"  {i}) {prompt.short_name}  [{prompt.scope.value}]")
        self._print("-" * 48)
        self._print("  m) Manage")
        self._print("  w) Switch workspace")
        self._print("  q) Quit")

        choice = self._ask("Select a prompt to run, or add a new one: ")
        if choice is None:
            return False
        choice = choice.strip()

        if choice.lower() in ("q", "quit", "exit"):
            return False
        if choice.lower() == "a":
            self.add_prompt()
        elif choice.lower() == "m":
            self.show_manage_menu()
        elif choice.lower() == "w":
            self.switch_workspace()
        elif choice:
            prompt = self._pick(prompts, choice)
            if prompt is not None:
                self.run_prompt(prompt.short_name)
        return True

    def _pick(self, prompts: list[Prompt], choice: str) -> Prompt | None:
        if choice.isdigit() and 1 <= int(choice) <= len(prompts):
            return prompts[int(choice) - 1]
        for prompt in prompts:
            if prompt.short_name == choice:
                return prompt
        self._print(f"Unknown selection: {choice}")
        return None

    def _select(self, placeholder: str) -> Prompt | None:
        prompts = sort_prompts(self.store.merged_view())
        if not prompts:
            self._print("No prompts yet.")
            return None
        for i, prompt in enumerate(prompts, 1):
            self._print(f"  {i}) {prompt.short_name}  [{prompt.scope.value}]")
        choice = self._ask(placeholder)
        if not choice or not choice.strip():
            return None
        return self._pick(prompts, choice.strip())

    # ── Actions ───────────────────────────────────────────────

    def show_manage_menu(self) -> None:
        self._print("  e) Edit prompt")
        self._print("  d) Delete prompt")
        choice = self._ask("Select a management action: ")
        if not choice:
            return
        choice = choice.strip().lower()
        if choice == "e":
            prompt = self._select("Select a prompt to edit: ")
            if prompt is not None:
                self.edit_prompt(prompt.short_name)
        elif choice == "d":
            prompt = self._select("Select a prompt to delete: ")
            if prompt is not None:
                self.delete_prompt(prompt.short_name)

    def run_prompt(self, name: str) -> None:
        """Copy a prompt's instruction to the clipboard (or print it)."""
        prompt = self.store.find_by_name(name)
        if prompt is None:
            self._print(f'Prompt "{name}" not found.')
            return
        if self._copy(prompt.instruction):
            self._print(
                f'Prompt "{name}" copied to clipboard. '
                "Paste (Cmd+V / Ctrl+V) it into the AI chat input."
            )
        else:
            self._print(prompt.instruction)

    def add_prompt(self) -> None:
        prompt = self._form()
        if prompt is None:
            return
        self._report(self.store.insert_or_update(prompt), "saved")

    def edit_prompt(self, name: str) -> None:
        existing = self.store.find_by_name(name)
        if existing is None:
            self._print(f'Prompt "{name}" not found.')
            return
        prompt = self._form(existing)
        if prompt is None:
            return
        self._report(
            self.store.insert_or_update(prompt, is_update=True, previous=existing),
            "updated",
        )

    def delete_prompt(self, name: str) -> None:
        answer = self._ask(f'Are you sure you want to delete the prompt "{name}"? [y/N] ')
        if not answer or answer.strip().lower() not in ("y", "yes"):
            return
        if self.store.delete(name):
            self._print(f'Prompt "{name}" deleted successfully.')
        else:
            self._print(f'Failed to delete prompt "{name}".')

    def switch_workspace(self) -> None:
        raw = self._ask("Workspace folder (empty to close the current one): ")
        if raw is None:
            return
        raw = raw.strip()
        if not raw:
            self.store.refresh_project_context(None)
            self._print("No workspace open.")
            return
        root = Path(raw).expanduser()
        if not root.is_dir():
            self._print(f"Not a directory: {root}")
            return
        self.store.refresh_project_context(root)
        self._print(f"Workspace: {root}")

    def _report(self, result: SaveResult, verb: str) -> None:
        if result.ok:
            self._print(f'Prompt "{result.prompt.short_name}" {verb} successfully.')
        elif result.status is SaveStatus.WRITE_FAILURE:
            self._print(f"Failed to save prompt: {result.error}")
        else:
            self._print(result.error or f"Could not save prompt ({result.status.value}).")

    # ── Form ──────────────────────────────────────────────────

    def _form(self, existing: Prompt | None = None) -> Prompt | None:
        """Collect name, instruction and scope. None if the user cancels."""
        name = self._read_short_name(existing)
        if name is None:
            return None
        instruction = self._read_instruction(existing)
        if instruction is None:
            return None
        scope = self._read_scope(existing)
        if scope is None:
            return None
        return Prompt(
            short_name=name.strip(),
            instruction=clean_instruction(instruction),
            scope=scope,
        )

    def _read_short_name(self, existing: Prompt | None) -> str | None:
        hint = f" [{existing.short_name}]" if existing else ""
        while True:
            value = self._ask(f"Short name (up to {MAX_SHORT_NAME_LENGTH} characters){hint}: ")
            if value is None:
                return None
            if not value.strip():
                return existing.short_name if existing else None
            error = validate_short_name(value.strip())
            if error is None:
                return value.strip()
            self._print(error)

    def _read_instruction(self, existing: Prompt | None) -> str | None:
        if existing:
            self._print("Current instruction:")
            self._print(existing.instruction)
        self._print(f"Detailed instruction (end with a line containing only '{_END_OF_TEXT}'):")
        lines: list[str] = []
        while True:
            line = self._ask("")
            if line is None or line.strip() == _END_OF_TEXT:
                break
            lines.append(line)
        text = "\n".join(lines)
        if validate_instruction(text) is None:
            return text
        if existing:
            return existing.instruction
        self._print("Detailed instruction is required")
        return None

    def _read_scope(self, existing: Prompt | None) -> Scope | None:
        for i, scope in enumerate(_SCOPES, 1):
            self._print(f"  {i}) {scope.value}")
        default = f" [{existing.scope.value}]" if existing else ""
        value = self._ask(f"Select scope{default}: ")
        if value is None:
            return None
        value = value.strip()
        if not value:
            return existing.scope if existing else None
        if value.isdigit() and 1 <= int(value) <= len(_SCOPES):
            return _SCOPES[int(value) - 1]
        for scope in _SCOPES:
            if value.lower() == scope.value.lower():
                return scope
        self._print(f"Unknown scope: {value}")
        return None
