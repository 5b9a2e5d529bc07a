"""Event loop of the terminal host.

One thread reads keys, feeds them to the active picker, polls the search
session for finished results, and redraws. The loop ends when no session is
left open or a folder was opened "in a new window".
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable

from ..commands import CommandHost
from .input import read_key
from .keys import PickerKeys
from .terminal import TerminalController
from .view import Screen, render_picker
from .workbench import TerminalWorkbench

POLL_INTERVAL_MS = 50


class TerminalApp:
    def __init__(
        self,
        host: CommandHost,
        workbench: TerminalWorkbench,
        terminal: TerminalController,
        screen: Screen,
        *,
        read: Callable[[int, int | None], str] = read_key,
        get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
    ) -> None:
        self.host = host
        self.workbench = workbench
        self.terminal = terminal
        self.screen = screen
        self.keys = PickerKeys(host)
        self._read = read
        self._get_terminal_size = get_terminal_size

    def read_blocking(self) -> str:
        """Next key with no timeout; used by the modal prompts."""
        key = ""
        while not key:
            key = self._read(self.terminal.stdin_fd, None)
        return key

    def draw_lines(self, lines: list[str]) -> None:
        self.screen.draw(lines)

    def draw(self) -> None:
        picker = self.keys.picker
        if picker is None:
            return
        term = self._get_terminal_size((80, 24))
        self.screen.draw(
            render_picker(
                picker,
                term.columns,
                term.lines,
                status=self.workbench.status,
                local_filter=self.keys.local_filter,
            )
        )

    def _poll_timeout(self) -> int | None:
        search = self.host.search
        if search is not None and (search.searching or search.debouncer.pending):
            return POLL_INTERVAL_MS
        return None

    def step(self) -> bool:
        """Handle one key (or poll tick); return ``False`` once the loop should end."""
        if self.workbench.reopen_requested:
            self.workbench.reopen_requested = False
            self.host.open_navigator()
        if self.workbench.exit_path is not None:
            self.host.close_navigator()
            self.host.close_search()
            return False
        if self.host.navigator is None and self.host.search is None:
            return False

        self.draw()
        key = self._read(self.terminal.stdin_fd, self._poll_timeout())
        if key:
            self.workbench.status = ""
            self.keys.handle(key)
        self.host.poll()
        return True

    def run(self, start: Callable[[], object]) -> str | None:
        """Run ``start`` inside raw mode, then loop; return the folder to print, if any."""
        with self.terminal.raw_mode():
            start()
            while self.step():
                pass
        return self.workbench.exit_path
