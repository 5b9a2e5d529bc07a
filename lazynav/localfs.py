"""``FileSystem`` implementation backed by the local disk.

Every ``OSError`` is re-raised as ``FileSystemError`` so callers handle one
failure type at the filesystem boundary. ``stat`` returns ``None`` for a
missing target instead of raising.
"""

from __future__ import annotations

import os
import shutil
import stat as stat_module

from .collaborators import FileStat
from .entries import FileType
from .errors import FileSystemError


def _file_type(mode: int) -> FileType:
    if stat_module.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat_module.S_ISREG(mode):
        return FileType.FILE
    return FileType.OTHER


class LocalFileSystem:
    def stat(self, path: str) -> FileStat | None:
        try:
            info = os.stat(path)
        except FileNotFoundError:
            return None
        except NotADirectoryError:
            return None
        except OSError as exc:
            raise FileSystemError("stat", path, exc) from exc
        file_type = _file_type(info.st_mode)
        return FileStat(
            file_type=file_type,
            size=int(info.st_size) if file_type is FileType.FILE else None,
        )

    def read_directory(self, path: str) -> list[tuple[str, FileType]]:
        records: list[tuple[str, FileType]] = []
        try:
            with os.scandir(path) as entries:
                for child in entries:
                    try:
                        if child.is_dir():
                            file_type = FileType.DIRECTORY
                        elif child.is_file():
                            file_type = FileType.FILE
                        else:
                            file_type = FileType.OTHER
                    except OSError:
                        file_type = FileType.OTHER
                    records.append((child.name, file_type))
        except OSError as exc:
            raise FileSystemError("read directory", path, exc) from exc
        return records

    def create_directory(self, path: str) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            raise FileSystemError("create directory", path, exc) from exc

    def delete(self, path: str, recursive: bool = False) -> None:
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                if recursive:
                    shutil.rmtree(path)
                else:
                    os.rmdir(path)
            else:
                os.remove(path)
        except OSError as exc:
            raise FileSystemError("delete", path, exc) from exc

    def rename(self, old: str, new: str) -> None:
        if os.path.exists(new):
            raise FileSystemError("rename", old, FileExistsError(17, "target already exists", new))
        try:
            parent = os.path.dirname(new)
            if parent:
                os.makedirs(parent, exist_ok=True)
            os.rename(old, new)
        except OSError as exc:
            raise FileSystemError("rename", old, exc) from exc

    def write_file(self, path: str, data: str) -> None:
        try:
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(path, "w", encoding="utf-8") as handle:
                handle.write(data)
        except OSError as exc:
            raise FileSystemError("write", path, exc) from exc
