"""System clipboard access through the platform's copy utilities."""

from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)

# Tried in order; the first one found on PATH wins
COPY_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


class SystemClipboard:
    """Writes text to the system clipboard. Never raises."""

    def __init__(self, commands: list[list[str]] | None = None, timeout: float = 5.0):
        self.commands = commands if commands is not None else COPY_COMMANDS
        self.timeout = timeout

    def _find_command(self) -> list[str] | None:
        for cmd in self.commands:
            if shutil.which(cmd[0]):
                return cmd
        return None

    def is_supported(self) -> bool:
        return self._find_command() is not None

    def write(self, text: str) -> bool:
        cmd = self._find_command()
        if cmd is None:
            logger.warning("No clipboard utility found (tried %s)", ", ".join(c[0] for c in self.commands))
            return False
        try:
            subprocess.run(
                cmd,
                input=text.encode("utf-8"),
                check=True,
                timeout=self.timeout,
                capture_output=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Clipboard copy via %s failed: %s", cmd[0], e)
            return False
        return True
