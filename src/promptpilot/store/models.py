"""Prompt records and save results."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

MAX_SHORT_NAME_LENGTH = 25

_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\r?\n)+")


def validate_short_name(value: str) -> str | None:
    """Return an error message, or None if the name is acceptable."""
    if not value or not value.strip():
        return "Short name is required"
    if len(value) > MAX_SHORT_NAME_LENGTH:
        return f"Short name must be {MAX_SHORT_NAME_LENGTH} characters or less"
    return None


def validate_instruction(value: str) -> str | None:
    if not value or not value.strip():
        return "Detailed instruction is required"
    return None


def clean_instruction(text: str) -> str:
    """Drop leading blank lines and trailing whitespace; keep first-line indentation."""
    return _LEADING_BLANK_LINES.sub("", text.rstrip())


class Scope(str, Enum):
    """Which backing collection owns a prompt. Values are the on-disk strings."""

    GLOBAL = "Global"
    PROJECT = "Project-specific"

    @property
    def label(self) -> str:
        return "global" if self is Scope.GLOBAL else "project-specific"


@dataclass(frozen=True)
class Prompt:
    """A named text snippet."""

    short_name: str
    instruction: str
    scope: Scope = Scope.GLOBAL

    def to_dict(self) -> dict[str, str]:
        return {
            "shortName": self.short_name,
            "detailedInstruction": self.instruction,
            "scope": self.scope.value,
        }

    @classmethod
    def from_dict(cls, data: object) -> Prompt:
        """Build a Prompt from one entry of a collection file.

        Raises ValueError on anything that is not a complete prompt object.
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        try:
            name = data["shortName"]
            instruction = data["detailedInstruction"]
            scope = Scope(data["scope"])
        except KeyError as e:
            raise ValueError(f"missing field {e}") from e
        if not isinstance(name, str) or not isinstance(instruction, str):
            raise ValueError("shortName and detailedInstruction must be strings")
        return cls(short_name=name, instruction=instruction, scope=scope)


class SaveStatus(str, Enum):
    OK = "ok"
    DUPLICATE_NAME = "duplicate_name"
    NO_PROJECT_CONTEXT = "no_project_context"
    WRITE_FAILURE = "write_failure"


@dataclass
class SaveResult:
    """Outcome of PromptStore.insert_or_update."""

    status: SaveStatus
    prompt: Prompt
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is SaveStatus.OK
