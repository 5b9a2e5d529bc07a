"""Terminal-side ``Workbench``: documents, folders, and error messages."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..collaborators import Document
from .editor import launch_editor

logger = logging.getLogger(__name__)


class TerminalWorkbench:
    """Opens files through ``$EDITOR`` and keeps the status message shown by the picker.

    Opening a folder in place re-roots the workspace and asks the app loop to
    reopen the navigator; opening it in a new window ends the session and
    leaves the folder in ``exit_path`` for the caller to print.
    """

    def __init__(
        self,
        workspace_roots: list[str],
        document: Document | None = None,
        *,
        disable_tui_mode: Callable[[], None] = lambda: None,
        enable_tui_mode: Callable[[], None] = lambda: None,
        launch: Callable[..., str | None] = launch_editor,
    ) -> None:
        self.roots = list(workspace_roots)
        self.document = document
        self.disable_tui_mode = disable_tui_mode
        self.enable_tui_mode = enable_tui_mode
        self.launch = launch
        self.status = ""
        self.reopen_requested = False
        self.exit_path: str | None = None

    def active_document(self) -> Document | None:
        return self.document

    def workspace_roots(self) -> list[str]:
        return list(self.roots)

    def open_file(
        self,
        path: str,
        *,
        beside: bool = False,
        line: int | None = None,
        untitled: bool = False,
    ) -> None:
        logger.debug("opening %s (line=%s, beside=%s, untitled=%s)", path, line, beside, untitled)
        error = self.launch(path, self.disable_tui_mode, self.enable_tui_mode, line=line)
        if error:
            self.show_error(error)

    def open_folder(self, path: str, new_window: bool = False) -> None:
        if new_window:
            self.exit_path = path
            return
        self.roots = [path]
        self.document = None
        self.reopen_requested = True

    def show_error(self, message: str) -> None:
        logger.info("%s", message)
        self.status = message
