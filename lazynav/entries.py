"""Picker entry variants shown by the navigator.

An entry is exactly one of:
- ``RealFile``: a member of the directory being browsed
- ``MenuAction``: an item of the action menu, optionally carrying a pin
- ``Synthetic``: a candidate made up from the typed input ("create ...")

Entries are frozen snapshots; a directory refresh replaces them wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FileType(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class Action(Enum):
    NEW_FILE = "new_file"
    NEW_FOLDER = "new_folder"
    OPEN_FILE = "open_file"
    OPEN_FILE_BESIDE = "open_file_beside"
    RENAME_FILE = "rename_file"
    DELETE_FILE = "delete_file"
    OPEN_FOLDER = "open_folder"
    OPEN_FOLDER_IN_NEW_WINDOW = "open_folder_in_new_window"
    PIN = "pin"
    OPEN_PIN = "open_pin"
    FIND_FILES = "find_files"
    FIND_FILES_CONTENT = "find_files_content"
    COPY_PATH = "copy_path"


REMOVE_PIN_BUTTON = "remove"


@dataclass(frozen=True)
class PinnedItem:
    path: str
    file_type: FileType

    def to_json(self) -> dict[str, str]:
        return {"path": self.path, "type": self.file_type.value}

    @classmethod
    def from_json(cls, raw: object) -> PinnedItem | None:
        """Decode one stored pin, returning ``None`` for malformed data."""
        if not isinstance(raw, dict):
            return None
        path = raw.get("path")
        if not isinstance(path, str) or not path:
            return None
        try:
            file_type = FileType(raw.get("type"))
        except ValueError:
            return None
        return cls(path=path, file_type=file_type)


@dataclass(frozen=True)
class RealFile:
    name: str
    file_type: FileType
    always_show: bool = False
    hidden: bool = False
    description: str = ""

    @property
    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    @property
    def label(self) -> str:
        return f"{self.name}/" if self.is_dir else self.name

    @property
    def buttons(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class MenuAction:
    label: str
    tag: Action
    pinned: PinnedItem | None = None
    description: str = ""

    name = ""
    always_show = True
    hidden = False

    @property
    def buttons(self) -> tuple[str, ...]:
        return (REMOVE_PIN_BUTTON,) if self.pinned is not None else ()


@dataclass(frozen=True)
class Synthetic:
    name: str
    tag: Action
    label: str
    description: str = ""

    always_show = True
    hidden = False

    @property
    def buttons(self) -> tuple[str, ...]:
        return ()


Entry = RealFile | MenuAction | Synthetic


def entry_sort_key(name: str, file_type: FileType) -> tuple[str, bool, str]:
    """Case-insensitive name order; a directory wins a case-insensitive tie."""
    return (name.lower(), file_type is not FileType.DIRECTORY, name)


def pinned_entry(pin: PinnedItem) -> MenuAction:
    marker = "[dir]" if pin.file_type is FileType.DIRECTORY else "[file]"
    return MenuAction(label=f"{marker} {pin.path}", tag=Action.OPEN_PIN, pinned=pin)


def file_actions() -> list[MenuAction]:
    return [
        MenuAction("Open this file", Action.OPEN_FILE),
        MenuAction("Open this file to the side", Action.OPEN_FILE_BESIDE),
        MenuAction("Rename this file", Action.RENAME_FILE),
        MenuAction("Delete this file", Action.DELETE_FILE),
        MenuAction("Find files in containing folder", Action.FIND_FILES),
        MenuAction("Find files in containing folder by content", Action.FIND_FILES_CONTENT),
        MenuAction("Pin this file", Action.PIN),
        MenuAction("Copy this file path", Action.COPY_PATH),
    ]


def folder_actions() -> list[MenuAction]:
    return [
        MenuAction("Open this folder", Action.OPEN_FOLDER),
        MenuAction("Open this folder in a new window", Action.OPEN_FOLDER_IN_NEW_WINDOW),
        MenuAction("Rename this folder", Action.RENAME_FILE),
        MenuAction("Delete this folder", Action.DELETE_FILE),
        MenuAction("Find files", Action.FIND_FILES),
        MenuAction("Find files by content", Action.FIND_FILES_CONTENT),
        MenuAction("Pin this folder", Action.PIN),
        MenuAction("Copy this folder path", Action.COPY_PATH),
    ]
