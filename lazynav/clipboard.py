"""System clipboard access through the platform's copy commands."""

from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)

CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
)


class SystemClipboard:
    def __init__(self, commands: tuple[tuple[str, ...], ...] = CLIPBOARD_COMMANDS) -> None:
        self.commands = commands

    def write_text(self, text: str) -> str | None:
        """Copy ``text`` with the first available command; return an error message on failure."""
        for cmd in self.commands:
            if shutil.which(cmd[0]) is None:
                continue
            try:
                completed = subprocess.run(list(cmd), input=text.encode("utf-8"), check=False)
            except OSError as exc:
                logger.warning("clipboard command %s failed: %s", cmd[0], exc)
                continue
            if completed.returncode == 0:
                return None
            logger.warning("clipboard command %s exited with %s", cmd[0], completed.returncode)
        return "Cannot copy: no clipboard command available."
