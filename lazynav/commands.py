"""Command entry points a host binds to keys or menu items.

``CommandHost`` owns at most one navigator and one search session at a time.
Commands that target a live session are no-ops when none is open.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .classifier import RulesLoader
from .collaborators import Clipboard, FileSystem, ProcessRunner, Prompter, Workbench
from .config import NavigatorConfig
from .entries import Action, MenuAction, RealFile
from .errors import FileSystemError
from .ignore_rules import rules_for_directory
from .navigator import Navigator, NavigatorDeps
from .path import NavPath
from .picker import ListPicker
from .pins import PinStore
from .search import SearchDeps, SearchSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostServices:
    fs: FileSystem
    workbench: Workbench
    prompter: Prompter
    clipboard: Clipboard
    pins: PinStore
    config: NavigatorConfig
    runner: ProcessRunner
    picker_factory: Callable[[], ListPicker] = ListPicker
    clock: Callable[[], float] = time.monotonic
    load_rules: RulesLoader = rules_for_directory


class CommandHost:
    def __init__(self, services: HostServices) -> None:
        self.services = services
        self.navigator: Navigator | None = None
        self.search: SearchSession | None = None

    # session plumbing
    def _starting_location(self) -> tuple[NavPath, str | None]:
        """Directory of the active document (plus its name), else workspace root, else home."""
        workbench = self.services.workbench
        document = workbench.active_document()
        if document is not None and document.path and not document.untitled:
            path = NavPath.from_file_path(document.path)
            return path, path.pop()
        roots = workbench.workspace_roots()
        if roots:
            return NavPath.from_file_path(roots[0]), None
        return NavPath.from_file_path(os.path.expanduser("~")), None

    def _new_navigator(self, path: NavPath, file: str | None, *, write: bool = False) -> Navigator:
        self.close_navigator()
        self.close_search()
        services = self.services
        navigator: Navigator | None = None

        def on_disposed() -> None:
            if self.navigator is navigator:
                self.navigator = None

        navigator = Navigator(
            path,
            file,
            NavigatorDeps(
                picker=services.picker_factory(),
                fs=services.fs,
                workbench=services.workbench,
                prompter=services.prompter,
                clipboard=services.clipboard,
                pins=services.pins,
                config=services.config,
                open_search=lambda dirs, name_only: self.open_search(dirs, name_only=name_only),
                on_disposed=on_disposed,
                load_rules=services.load_rules,
            ),
            write=write,
        )
        self.navigator = navigator
        navigator.start()
        logger.debug("navigator opened at %s", path.fs_path)
        return navigator

    # commands
    def open_navigator(self, initial_query: str | None = None, *, write: bool = False) -> Navigator:
        path, file = self._starting_location()
        navigator = self._new_navigator(path, file, write=write)
        if initial_query is None and not write:
            document = self.services.workbench.active_document()
            initial_query = document.selection if document is not None else None
        if initial_query:
            navigator.picker.set_value(initial_query)
            navigator.on_value_change(initial_query)
        return navigator

    def open_navigator_in_write_mode(self) -> Navigator:
        return self.open_navigator(write=True)

    def rename_current_or_focused(self) -> None:
        """Rename the focused entry of the live navigator, or the active document."""
        navigator = self.navigator
        if navigator is None:
            path, file = self._starting_location()
            navigator = self._new_navigator(path, file)
            if file is not None:
                navigator.path.push(file)
        elif not navigator.in_actions:
            focused = navigator.active_item()
            if isinstance(focused, RealFile):
                navigator.path.push(focused.name)
        navigator.run_action(MenuAction("Rename", Action.RENAME_FILE))

    def step_in(self) -> None:
        if self.navigator is not None:
            self.navigator.step_in()

    def step_out(self) -> None:
        if self.navigator is not None:
            self.navigator.step_out()

    def open_actions_menu(self) -> None:
        if self.navigator is not None:
            self.navigator.actions()

    def tab_complete(self, forward: bool = True) -> None:
        if self.navigator is not None:
            self.navigator.tab_completion(forward)

    def invoke_search(
        self, initial_query: str | None = None, *, name_only: bool = True
    ) -> SearchSession | None:
        """Search from the live navigator's location, else from the active document's folder.

        Returns ``None`` when the navigator's location cannot be examined; the
        error is shown and the navigator stays open.
        """
        navigator = self.navigator
        if navigator is not None:
            path = navigator.path
            if initial_query is None:
                initial_query = navigator.picker.get_value()
            try:
                is_dir = path.is_dir(self.services.fs)
            except FileSystemError as exc:
                self.services.workbench.show_error(str(exc))
                return None
            if is_dir:
                directory = path.fs_path
            else:
                directory = os.path.dirname(path.fs_path)
        else:
            document = self.services.workbench.active_document()
            if document is not None and document.path and not document.untitled:
                directory = os.path.dirname(document.path)
            else:
                roots = self.services.workbench.workspace_roots()
                directory = roots[0] if roots else os.getcwd()
            if initial_query is None:
                initial_query = document.selection if document is not None else ""
        return self.open_search([directory], name_only=name_only, initial_query=initial_query or "")

    def open_search(
        self,
        dirs: Sequence[str],
        *,
        name_only: bool = True,
        initial_query: str = "",
    ) -> SearchSession:
        self.close_navigator()
        self.close_search()
        services = self.services
        session: SearchSession | None = None

        def on_disposed() -> None:
            if self.search is session:
                self.search = None

        session = SearchSession(
            dirs,
            SearchDeps(
                picker=services.picker_factory(),
                workbench=services.workbench,
                runner=services.runner,
                tool=services.config.search_tool,
                on_disposed=on_disposed,
                clock=services.clock,
            ),
            name_only=name_only,
        )
        self.search = session
        if initial_query:
            session.picker.set_value(initial_query)
            session.update_search(initial_query)
        return session

    def toggle_search_scope(self) -> None:
        if self.search is not None:
            self.search.toggle_scope()

    def toggle_search_mode(self) -> None:
        if self.search is not None:
            self.search.toggle_mode()

    # queries
    def current_path(self) -> str | None:
        return self.navigator.path.fs_path if self.navigator is not None else None

    def current_input_value(self) -> str | None:
        return self.navigator.picker.get_value() if self.navigator is not None else None

    def close_navigator(self) -> None:
        if self.navigator is not None:
            self.navigator.dispose()
        self.navigator = None

    def close_search(self) -> None:
        if self.search is not None:
            self.search.dispose()
        self.search = None

    def poll(self, timeout_seconds: float = 0.0) -> bool:
        if self.search is None:
            return False
        return self.search.poll(timeout_seconds)
