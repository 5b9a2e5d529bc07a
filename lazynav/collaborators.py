"""Capability interfaces the navigator and search session depend on.

The core never talks to a concrete widget, filesystem, editor, or process
API directly. Hosts pass objects satisfying these protocols; the terminal
front end in ``lazynav.tui`` and the in-memory ``ListPicker`` are the
implementations shipped with the package.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from .entries import FileType


@dataclass(frozen=True)
class FileStat:
    file_type: FileType
    size: int | None = None


@dataclass(frozen=True)
class Document:
    """Snapshot of the host's active document."""

    path: str | None
    text: str = ""
    untitled: bool = False
    selection: str = ""


@dataclass(frozen=True)
class PickerButton:
    id: str
    tooltip: str
    checked: bool = False


class FileSystem(Protocol):
    def stat(self, path: str) -> FileStat | None: ...

    def read_directory(self, path: str) -> list[tuple[str, FileType]]: ...

    def create_directory(self, path: str) -> None: ...

    def delete(self, path: str, recursive: bool = False) -> None: ...

    def rename(self, old: str, new: str) -> None: ...

    def write_file(self, path: str, data: str) -> None: ...


class Picker(Protocol):
    title: str
    placeholder: str
    busy: bool
    enabled: bool

    def set_items(self, items: Sequence[Any]) -> None: ...

    def get_items(self) -> list[Any]: ...

    def set_value(self, value: str) -> None: ...

    def get_value(self) -> str: ...

    def set_active_items(self, items: Sequence[Any]) -> None: ...

    def get_active_items(self) -> list[Any]: ...

    def set_buttons(self, buttons: Sequence[PickerButton]) -> None: ...

    def get_buttons(self) -> list[PickerButton]: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def dispose(self) -> None: ...

    def on_value_changed(self, callback: Callable[[str], None]) -> None: ...

    def on_accepted(self, callback: Callable[[], None]) -> None: ...

    def on_button_triggered(self, callback: Callable[[PickerButton], None]) -> None: ...

    def on_item_button_triggered(self, callback: Callable[[Any, str], None]) -> None: ...

    def on_hidden(self, callback: Callable[[], None]) -> None: ...


class Prompter(Protocol):
    def show_input_box(self, prompt: str, value: str, selection: tuple[int, int]) -> str | None: ...

    def show_choice(self, options: Sequence[str]) -> str | None: ...


class Clipboard(Protocol):
    def write_text(self, text: str) -> str | None:
        """Copy ``text``; return an error message on failure."""
        ...


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class Workbench(Protocol):
    """Editor-side capabilities: documents, folders, and user messages."""

    def active_document(self) -> Document | None: ...

    def workspace_roots(self) -> list[str]: ...

    def open_file(
        self,
        path: str,
        *,
        beside: bool = False,
        line: int | None = None,
        untitled: bool = False,
    ) -> None: ...

    def open_folder(self, path: str, new_window: bool = False) -> None: ...

    def show_error(self, message: str) -> None: ...


class SearchProcess(Protocol):
    def stdout_lines(self) -> Iterator[str]: ...

    def wait(self) -> tuple[int, str]:
        """Block until exit; return ``(returncode, stderr_text)``."""
        ...

    def terminate(self) -> None: ...


class ProcessRunner(Protocol):
    def spawn(self, stages: Sequence[Sequence[str]], cwd: str) -> SearchProcess: ...
