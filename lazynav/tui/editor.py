"""Editor launch helper for opening files from the picker.

Runs ``$EDITOR`` while temporarily leaving raw/alternate-screen TUI mode.
Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Callable


def editor_command(editor_env: str, target: str, line: int | None = None) -> list[str] | None:
    """Argument vector for ``$EDITOR``; ``line`` is zero-based."""
    cmd = shlex.split(editor_env)
    if not cmd:
        return None
    if line is not None:
        cmd.append(f"+{line + 1}")
    cmd.append(target)
    return cmd


def launch_editor(
    target: str,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
    line: int | None = None,
) -> str | None:
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot edit: $EDITOR is not set."
    cmd = editor_command(editor_env, target, line)
    if cmd is None:
        return "Cannot edit: $EDITOR is empty."

    disable_tui_mode()
    try:
        subprocess.run(cmd, check=False)
    except OSError as exc:
        return f"Failed to launch editor: {exc}"
    finally:
        enable_tui_mode()
    return None
