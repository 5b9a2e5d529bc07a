"""Keystroke-driven directory navigation state machine.

The navigator owns the current ``NavPath``, the entry list of the last
refresh, the action-menu flag, and the tab-completion cursor. Every transition
runs to completion on the caller's thread before the next event is handled,
so the listed entries always belong to ``path``.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..classifier import RulesLoader, classify_entries
from ..collaborators import Clipboard, FileSystem, PickerButton, Prompter, Workbench
from ..config import NavigatorConfig
from ..entries import (
    REMOVE_PIN_BUTTON,
    Action,
    Entry,
    FileType,
    MenuAction,
    RealFile,
    Synthetic,
    file_actions,
    folder_actions,
    pinned_entry,
)
from ..errors import FileSystemError, PreconditionViolation
from ..ignore_rules import rules_for_directory
from ..path import NavPath, is_anchored_path, normalize_separators, strip_trailing_separator
from ..picker import ListPicker
from ..pins import PinStore
from .completion import AutoCompletion

ACTIONS_BUTTON = PickerButton("actions", "Actions on selected file")
STEP_OUT_BUTTON = PickerButton("step_out", "Step out of folder")
STEP_IN_BUTTON = PickerButton("step_in", "Step into folder")

PLACEHOLDER_LOADING = "Preparing the file list..."
PLACEHOLDER_BROWSE = "Type a file name here to search or open a new file"
PLACEHOLDER_WRITE = "Type a file name here to create a new file or overwrite existing one"


class NavigatorMode(Enum):
    BROWSING = "browsing"
    ACTIONS_MENU = "actions_menu"
    RENAMING = "renaming"
    DELETING = "deleting"
    DISPOSED = "disposed"


@dataclass(frozen=True)
class NavigatorDeps:
    """Collaborators the navigator talks to; supplied by the hosting commands."""

    picker: ListPicker
    fs: FileSystem
    workbench: Workbench
    prompter: Prompter
    clipboard: Clipboard
    pins: PinStore
    config: NavigatorConfig
    open_search: Callable[[list[str], bool], None]
    on_disposed: Callable[[], None] | None = None
    load_rules: RulesLoader = rules_for_directory


class Navigator:
    def __init__(
        self,
        path: NavPath,
        file: str | None,
        deps: NavigatorDeps,
        *,
        write: bool = False,
    ) -> None:
        from .actions import ActionDispatcher

        self.deps = deps
        self.picker = deps.picker
        self.fs = deps.fs
        self.workbench = deps.workbench
        self.path = path
        self.file = file
        self.write = write
        self.items: list[Entry] = []
        self.path_history: dict[str, str | None] = {path.id: file}
        self.in_actions = False
        self.keep_alive = False
        self.mode = NavigatorMode.BROWSING
        self.auto_completion: AutoCompletion | None = None
        self.dispatcher = ActionDispatcher(self)

        self.picker.set_buttons([ACTIONS_BUTTON, STEP_OUT_BUTTON, STEP_IN_BUTTON])
        self.picker.placeholder = PLACEHOLDER_LOADING
        self.picker.on_hidden(self._on_hidden)
        self.picker.on_accepted(self.on_accepted)
        self.picker.on_value_changed(self.on_value_change)
        self.picker.on_button_triggered(self.on_button_triggered)
        self.picker.on_item_button_triggered(self.on_item_button_triggered)

    # lifecycle
    def start(self) -> None:
        self.refresh()
        self.picker.placeholder = PLACEHOLDER_WRITE if self.write else PLACEHOLDER_BROWSE
        self.picker.busy = False

    @property
    def disposed(self) -> bool:
        return self.mode is NavigatorMode.DISPOSED

    def _on_hidden(self) -> None:
        if not self.keep_alive:
            self.dispose()

    def dispose(self) -> None:
        if self.disposed:
            return
        self.mode = NavigatorMode.DISPOSED
        self.picker.dispose()
        if self.deps.on_disposed is not None:
            self.deps.on_disposed()

    def hide(self) -> None:
        self.picker.hide()

    def show(self) -> None:
        self.picker.show()

    def workspace_root(self) -> str | None:
        roots = self.workbench.workspace_roots()
        return roots[0] if roots else None

    def parse_path(self, text: str) -> NavPath | None:
        """Parse user-typed root-prefixed text into an absolute path."""
        try:
            return NavPath.from_file_path(text, workspace_root=self.workspace_root()).absolute()
        except ValueError as exc:
            self.workbench.show_error(str(exc))
            return None

    # refresh
    def refresh(self) -> None:
        """Rebuild the entry list for ``path``; the picker is disabled meanwhile."""
        self.picker.show()
        self.picker.busy = True
        self.picker.enabled = False
        self.picker.title = self.path.fs_path
        self.picker.set_value("")
        self.auto_completion = None

        try:
            stat = self.fs.stat(self.path.fs_path)
        except FileSystemError as exc:
            self.workbench.show_error(str(exc))
            stat = None

        active: list[Entry] = []
        if stat is not None and self.in_actions and stat.file_type is not FileType.DIRECTORY:
            self.mode = NavigatorMode.ACTIONS_MENU
            self.items = [*file_actions(), *self.pinned_entries()]
        elif stat is not None and self.in_actions:
            self.mode = NavigatorMode.ACTIONS_MENU
            self.items = [*folder_actions(), *self.pinned_entries()]
        elif stat is not None and stat.file_type is FileType.DIRECTORY:
            self.mode = NavigatorMode.BROWSING
            self.items = list(self._read_entries())
            active = [item for item in self.items if self.file is not None and item.name == self.file]
        else:
            self.mode = NavigatorMode.BROWSING
            self.items = [MenuAction("Create this folder", Action.NEW_FOLDER)]

        self.picker.set_items(self.items)
        if active:
            self.picker.set_active_items(active)
        self.picker.enabled = True
        self.picker.busy = False
        if self.write:
            self.on_value_change(self.picker.get_value())

    def _read_entries(self) -> list[RealFile]:
        directory = self.path.fs_path
        try:
            records = self.fs.read_directory(directory)
        except FileSystemError as exc:
            self.workbench.show_error(str(exc))
            return []
        return classify_entries(directory, records, self.deps.config, self.deps.load_rules)

    def pinned_entries(self) -> list[MenuAction]:
        return [pinned_entry(pin) for pin in self.deps.pins.load()]

    def active_item(self) -> Entry | None:
        active = self.picker.get_active_items()
        return active[0] if active else None

    # input
    def on_value_change(self, value: str) -> None:
        if self.in_actions:
            return
        self.auto_completion = None

        existing = next((item for item in self.items if item.name == value), None)
        if value == "":
            document = self.workbench.active_document()
            if self.write and document is not None and document.path:
                base_name = os.path.basename(document.path)
                candidate = Synthetic(
                    name=base_name,
                    tag=Action.OPEN_FILE,
                    label=base_name,
                    description="Create file",
                )
                self.picker.set_items([candidate, *self.items])
                self.picker.set_active_items([candidate])
            else:
                self.picker.set_items(self.items)
                self.picker.set_active_items([])
        elif existing is not None:
            self.picker.set_items(self.items)
            self.picker.set_active_items([existing])
        else:
            self._resolve_typed_path(value)

    def _resolve_typed_path(self, original: str) -> None:
        value = normalize_separators(original)
        search_end = len(value) - 1
        if len(value) > 1 and value.endswith("/") and not value.endswith(":/"):
            search_end -= 1

        separator = value.rfind("/", 0, search_end + 1)
        if separator != -1:
            prefix = value[:separator]
            rest = value[separator + 1:]
            if is_anchored_path(value):
                target = self.parse_path(prefix or "/")
            else:
                target = self.path.append(prefix)
            if target is None:
                return
            self.step_into_folder(target)
            if rest:
                self.picker.set_value(rest)
                self.on_value_change(rest)
            return

        folder = strip_trailing_separator(value)
        if folder is not None:
            if folder == "..":
                self.step_out()
                return
            if folder == "":
                target = self.parse_path("/")
            elif is_anchored_path(folder):
                target = self.parse_path(folder)
            else:
                target = self.path.append(folder)
            if target is not None:
                self.step_into_folder(target)
            return

        if self.write:
            candidate = Synthetic(name=value, tag=Action.OPEN_FILE, label=original, description="Create new file")
        else:
            candidate = Synthetic(name=value, tag=Action.NEW_FILE, label=original, description="Open as new file")
        self.picker.set_items([candidate, *self.items])
        self.picker.set_active_items([candidate])

    def tab_completion(self, forward: bool) -> None:
        if self.in_actions:
            return

        if self.auto_completion is not None:
            self.auto_completion.advance(forward)
        else:
            self.auto_completion = AutoCompletion.start(self.items, self.picker.get_value(), forward)

        item = self.auto_completion.current()
        if item is None:
            return
        if len(self.auto_completion.items) == 1 and item.is_dir:
            self.picker.set_value(item.name + "/")
        else:
            self.picker.set_value(item.name)
        self.picker.set_items(self.items)
        self.picker.set_active_items([item])

    # transitions
    def on_button_triggered(self, button: PickerButton) -> None:
        if button.id == STEP_IN_BUTTON.id:
            self.step_in()
        elif button.id == STEP_OUT_BUTTON.id:
            self.step_out()
        elif button.id == ACTIONS_BUTTON.id:
            self.actions()

    def on_item_button_triggered(self, item: Entry, button_id: str) -> None:
        if button_id != REMOVE_PIN_BUTTON or not isinstance(item, MenuAction) or item.pinned is None:
            return
        self.deps.pins.toggle(item.pinned.path, item.pinned.file_type)
        self.refresh()

    def step_into_folder(self, folder: NavPath) -> None:
        self.path = folder
        self.file = self.path_history.get(self.path.id)
        self.refresh()

    def step_in(self) -> None:
        item = self.active_item()
        if item is None:
            return
        if isinstance(item, (MenuAction, Synthetic)):
            self.run_action(item)
        elif item.is_dir:
            self.step_into_folder(self.path.append(item.name))
        else:
            self.path.push(item.name)
            self.file = None
            self.in_actions = True
            self.refresh()

    def step_out(self) -> None:
        self.in_actions = False
        if self.path.at_top():
            return
        active = self.active_item()
        self.path_history[self.path.id] = active.name if isinstance(active, RealFile) else None
        self.file = self.path.pop()
        self.refresh()

    def actions(self) -> None:
        if self.in_actions:
            return
        item = self.active_item()
        self.in_actions = True
        # a focused create candidate does not exist yet; its menu is the folder's
        if isinstance(item, RealFile):
            self.path.push(item.name)
        self.file = None
        self.refresh()

    def on_accepted(self) -> None:
        self.auto_completion = None
        item = self.active_item()
        if item is None:
            return
        if isinstance(item, (MenuAction, Synthetic)):
            self.run_action(item)
        elif item.is_dir:
            self.step_in()
        else:
            self.open_file(self.path.append(item.name).fs_path)

    def run_action(self, item: MenuAction | Synthetic) -> None:
        self.dispatcher.dispatch(item)

    # side effects
    def open_file(self, path: str, *, beside: bool = False, untitled: bool = False) -> None:
        self.dispose()
        if self.write:
            document = self.workbench.active_document()
            if document is None:
                return
            try:
                self.fs.write_file(path, document.text)
            except FileSystemError as exc:
                self.workbench.show_error(f"Failed to create file.\n{exc}")
        self.workbench.open_file(path, beside=beside, untitled=untitled)

    def rename(self) -> None:
        """Prompt for a new name for ``path`` and rename it; ``path`` ends at the parent."""
        target = self.path.fs_path
        try:
            stat = self.fs.stat(target)
        except FileSystemError as exc:
            self.workbench.show_error(str(exc))
            self.file = self.path.pop()
            return
        if stat is None:
            self.workbench.show_error(f'"{target}" does not exist')
            return
        is_dir = stat.file_type is FileType.DIRECTORY
        file_name = self.path.pop()
        if file_name is None:
            raise PreconditionViolation("Can't rename an empty file name!")
        kind = "folder" if is_dir else "file"

        workspace_root = self.workspace_root()
        relative = NavPath.from_file_path(target).relative_to(workspace_root) if workspace_root else None
        shown = relative or file_name
        extension = os.path.splitext(shown)[1]
        start = len(shown) - len(file_name)
        end = start + (len(file_name) - len(extension))
        result = self.deps.prompter.show_input_box(f"Enter the new {kind} name", shown, (start, end))
        self.file = file_name
        if result is None:
            return

        base = workspace_root if relative else self.path.fs_path
        new_path = NavPath.from_file_path(base).append(result).fs_path
        try:
            self.fs.rename(target, new_path)
        except FileSystemError:
            self.workbench.show_error(f'Failed to rename {kind} "{file_name}"')
            return
        self.file = os.path.basename(normalize_separators(result).rstrip("/"))
