"""Configuration loading from environment variables and promptpilot.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from promptpilot.store.store import DEFAULT_FILE_NAME
from promptpilot.workspace import DEFAULT_MARKERS, DEFAULT_PROJECT_DIR, find_workspace_root

_DEFAULT_GLOBAL_DIR = Path.home() / ".promptpilot"
_CONFIG_FILENAME = "promptpilot.toml"


@dataclass
class PromptPilotConfig:
    """Top-level PromptPilot configuration."""

    global_dir: Path = _DEFAULT_GLOBAL_DIR
    file_name: str = DEFAULT_FILE_NAME
    project_dir_name: str = DEFAULT_PROJECT_DIR
    workspace_markers: list[str] = field(default_factory=lambda: list(DEFAULT_MARKERS))
    workspace: Path | None = None
    clipboard_command: str | None = None
    log_level: str = "WARNING"


def load_config(config_path: Path | None = None) -> PromptPilotConfig:
    """Load configuration from environment variables and optional promptpilot.toml.

    Priority: environment variables > promptpilot.toml > defaults.
    The workspace falls back to the nearest marker directory above cwd.
    """
    global_dir = Path(os.getenv("PROMPTPILOT_HOME", str(_DEFAULT_GLOBAL_DIR)))

    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and the global dir
        for candidate in [Path.cwd() / _CONFIG_FILENAME, global_dir / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    store_data = file_data.get("store", {})
    workspace_data = file_data.get("workspace", {})

    if "PROMPTPILOT_HOME" not in os.environ and "global_dir" in store_data:
        global_dir = Path(store_data["global_dir"]).expanduser()

    markers = list(workspace_data.get("markers", DEFAULT_MARKERS))
    workspace_env = os.getenv("PROMPTPILOT_WORKSPACE", workspace_data.get("path"))
    if workspace_env:
        workspace: Path | None = Path(workspace_env).expanduser()
    else:
        workspace = find_workspace_root(Path.cwd(), markers)

    return PromptPilotConfig(
        global_dir=global_dir,
        file_name=store_data.get("file_name", DEFAULT_FILE_NAME),
        project_dir_name=workspace_data.get("dir_name", DEFAULT_PROJECT_DIR),
        workspace_markers=markers,
        workspace=workspace,
        clipboard_command=os.getenv("PROMPTPILOT_CLIPBOARD", file_data.get("clipboard_command")),
        log_level=os.getenv("PROMPTPILOT_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
