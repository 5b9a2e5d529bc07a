"""Executes menu actions and synthetic candidates for a ``Navigator``."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..entries import Action, FileType, MenuAction, Synthetic
from ..errors import FileSystemError, PreconditionViolation, UnhandledActionError
from ..path import NavPath
from .navigator import NavigatorMode

if TYPE_CHECKING:
    from .navigator import Navigator

logger = logging.getLogger(__name__)

Item = MenuAction | Synthetic


class ActionDispatcher:
    def __init__(self, navigator: Navigator) -> None:
        self.navigator = navigator
        self._handlers: dict[Action, Callable[[Item], None]] = {
            Action.NEW_FILE: self._new_file,
            Action.NEW_FOLDER: self._new_folder,
            Action.OPEN_FILE: self._open_file,
            Action.OPEN_FILE_BESIDE: self._open_file_beside,
            Action.RENAME_FILE: self._rename,
            Action.DELETE_FILE: self._delete,
            Action.OPEN_FOLDER: self._open_folder,
            Action.OPEN_FOLDER_IN_NEW_WINDOW: self._open_folder_in_new_window,
            Action.PIN: self._pin,
            Action.OPEN_PIN: self._open_pin,
            Action.FIND_FILES: self._find_files,
            Action.FIND_FILES_CONTENT: self._find_files_content,
            Action.COPY_PATH: self._copy_path,
        }

    def dispatch(self, item: Item) -> None:
        handler = self._handlers.get(item.tag)
        if handler is None:
            raise UnhandledActionError(f"Unhandled action {item.tag}")
        logger.debug("running %s on %s", item.tag.value, self.navigator.path.fs_path)
        handler(item)

    def _target(self, item: Item) -> NavPath:
        path = self.navigator.path.clone()
        if item.name:
            path.push(item.name)
        return path

    def _is_dir(self, path: NavPath) -> bool | None:
        """Stat ``path``; on failure report it and return ``None`` so the caller stops."""
        try:
            return path.is_dir(self.navigator.fs)
        except FileSystemError as exc:
            logger.warning("stat failed: %s", exc)
            self.navigator.workbench.show_error(str(exc))
            return None

    def _new_file(self, item: Item) -> None:
        self.navigator.open_file(self.navigator.path.append(item.name).fs_path, untitled=True)

    def _new_folder(self, item: Item) -> None:
        nav = self.navigator
        try:
            nav.fs.create_directory(nav.path.fs_path)
        except FileSystemError as exc:
            nav.workbench.show_error(str(exc))
        nav.refresh()

    def _open_file(self, item: Item) -> None:
        self.navigator.open_file(self._target(item).fs_path)

    def _open_file_beside(self, item: Item) -> None:
        self.navigator.open_file(self._target(item).fs_path, beside=True)

    def _suspended(self, mode: NavigatorMode, operation: Callable[[], None]) -> None:
        """Hide the picker without disposing it while ``operation`` prompts the user."""
        nav = self.navigator
        nav.keep_alive = True
        nav.mode = mode
        nav.hide()
        try:
            operation()
        finally:
            nav.show()
            nav.keep_alive = False
            nav.in_actions = False
            nav.mode = NavigatorMode.BROWSING
            nav.refresh()

    def _rename(self, item: Item) -> None:
        self._suspended(NavigatorMode.RENAMING, self.navigator.rename)

    def _delete(self, item: Item) -> None:
        self._suspended(NavigatorMode.DELETING, self._confirm_delete)

    def _confirm_delete(self) -> None:
        nav = self.navigator
        target = nav.path.fs_path
        is_dir = self._is_dir(nav.path)
        file_name = nav.path.pop()
        if file_name is None:
            raise PreconditionViolation("Can't delete an empty file name!")
        if is_dir is None:
            nav.file = file_name
            return
        nav.file = None
        kind = "folder" if is_dir else "file"
        go_ahead = f'Delete the {kind} "{file_name}"'
        if nav.deps.prompter.show_choice(["Cancel", go_ahead]) != go_ahead:
            return
        try:
            nav.fs.delete(target, recursive=is_dir)
        except FileSystemError:
            logger.exception("delete failed for %s", target)
            nav.workbench.show_error(f'Failed to delete {kind} "{file_name}"')

    def _open_folder(self, item: Item) -> None:
        path = self.navigator.path.fs_path
        self.navigator.dispose()
        self.navigator.workbench.open_folder(path, new_window=False)

    def _open_folder_in_new_window(self, item: Item) -> None:
        path = self.navigator.path.fs_path
        self.navigator.dispose()
        self.navigator.workbench.open_folder(path, new_window=True)

    def _pin(self, item: Item) -> None:
        nav = self.navigator
        is_dir = self._is_dir(nav.path)
        if is_dir is None:
            return
        file_type = FileType.DIRECTORY if is_dir else FileType.FILE
        nav.deps.pins.toggle(nav.path.fs_path, file_type)
        nav.hide()

    def _open_pin(self, item: Item) -> None:
        nav = self.navigator
        pin = item.pinned if isinstance(item, MenuAction) else None
        if pin is None:
            raise PreconditionViolation("Pinned entry without a pin")
        nav.path = NavPath.from_file_path(pin.path)
        if pin.file_type is FileType.DIRECTORY:
            nav.in_actions = False
            nav.file = None
            nav.refresh()
        else:
            nav.open_file(nav.path.fs_path)

    def _search_dirs(self) -> list[str] | None:
        path = self.navigator.path
        is_dir = self._is_dir(path)
        if is_dir is None:
            return None
        return [path.fs_path if is_dir else os.path.dirname(path.fs_path)]

    def _find_files(self, item: Item) -> None:
        dirs = self._search_dirs()
        if dirs is not None:
            self.navigator.deps.open_search(dirs, True)

    def _find_files_content(self, item: Item) -> None:
        dirs = self._search_dirs()
        if dirs is not None:
            self.navigator.deps.open_search(dirs, False)

    def _copy_path(self, item: Item) -> None:
        nav = self.navigator
        error = nav.deps.clipboard.write_text(nav.path.fs_path)
        if error:
            nav.workbench.show_error(error)
        nav.hide()
