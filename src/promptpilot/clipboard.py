"""Copy text to the system clipboard through whatever helper is installed."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess

logger = logging.getLogger(__name__)

# Tried in order when no command is configured
_CANDIDATES = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


def detect_command() -> list[str] | None:
    for cmd in _CANDIDATES:
        if shutil.which(cmd[0]):
            return cmd
    return None


def copy_to_clipboard(text: str, command: str | None = None) -> bool:
    """Pipe text into a clipboard helper. Returns False if nothing worked."""
    cmd = shlex.split(command) if command else detect_command()
    if not cmd:
        logger.warning("No clipboard helper found (tried %s)", ", ".join(c[0] for c in _CANDIDATES))
        return False

    try:
        subprocess.run(cmd, input=text.encode("utf-8"), check=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("Clipboard command %s failed: %s", cmd[0], e)
        return False
    return True
