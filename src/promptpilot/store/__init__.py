"""Prompt storage.

Layout:
    ~/.promptpilot/
    ├── PromptPilot.json               # Global prompts
    └── promptpilot.toml               # Optional config
    <workspace>/.promptpilot/
    └── PromptPilot.json               # Project-specific prompts

Each PromptPilot.json is a JSON array of
{"shortName", "detailedInstruction", "scope"} objects.
"""

from promptpilot.store.models import MAX_SHORT_NAME_LENGTH, Prompt, SaveResult, SaveStatus, Scope
from promptpilot.store.store import DEFAULT_FILE_NAME, PromptStore

__all__ = [
    "DEFAULT_FILE_NAME",
    "MAX_SHORT_NAME_LENGTH",
    "Prompt",
    "PromptStore",
    "SaveResult",
    "SaveStatus",
    "Scope",
]
