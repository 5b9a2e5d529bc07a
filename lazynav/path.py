"""Navigator path value type.

A ``NavPath`` is a root anchor plus an ordered list of segments. Roots are the
filesystem root, a drive root (``C:/``), the home directory (``~``), the first
workspace root (``@``), or an environment variable value (``$env:NAME``).
``render()`` and ``NavPath.from_file_path()`` round-trip for every root kind;
``fs_path`` is the absolute location the path denotes.
"""

from __future__ import annotations

import os
import posixpath
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .collaborators import FileSystem
from .entries import FileType

_DRIVE_RE = re.compile(r"^([A-Za-z]:)(?:/|$)")
ENV_PREFIX = "$env:"


class RootKind(Enum):
    FILESYSTEM = "filesystem"
    DRIVE = "drive"
    HOME = "home"
    WORKSPACE = "workspace"
    ENV = "env"


@dataclass(frozen=True)
class PathRoot:
    """Anchor of a ``NavPath``.

    ``base`` is the absolute ``/``-separated directory the anchor stands for.
    ``name`` holds the drive (``C:``) or environment variable name.
    """

    kind: RootKind
    base: str
    name: str = ""

    def prefix(self) -> str:
        if self.kind is RootKind.FILESYSTEM:
            return "/"
        if self.kind is RootKind.DRIVE:
            return f"{self.name}/"
        if self.kind is RootKind.HOME:
            return "~"
        if self.kind is RootKind.WORKSPACE:
            return "@"
        return f"{ENV_PREFIX}{self.name}"


def normalize_separators(text: str) -> str:
    return text.replace("\\", "/")


def is_anchored_path(text: str) -> bool:
    """Return whether ``text`` starts with one of the recognised root prefixes."""
    text = normalize_separators(text)
    return (
        text.startswith("/")
        or text.startswith("~")
        or text.startswith("@")
        or text.startswith(ENV_PREFIX)
        or _DRIVE_RE.match(text) is not None
    )


def strip_trailing_separator(text: str) -> str | None:
    """Return ``text`` without its trailing separator, or ``None`` if it has none."""
    if text.endswith("/") or text.endswith("\\"):
        return text[:-1]
    return None


def _normalize_base(base: str) -> str:
    base = normalize_separators(base)
    match = _DRIVE_RE.match(base)
    if match is not None:
        rest = posixpath.normpath("/" + base[len(match.group(1)):])
        return match.group(1) + rest
    return posixpath.normpath(base) if base else base


class NavPath:
    """Mutable location used by the navigator; clone before handing it off."""

    def __init__(self, root: PathRoot, segments: list[str] | None = None) -> None:
        self.root = root
        self.segments: list[str] = []
        for segment in segments or []:
            self.push(segment)

    @classmethod
    def from_file_path(
        cls,
        text: str,
        *,
        workspace_root: str | None = None,
        home: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> NavPath:
        """Parse ``text`` honouring root prefixes.

        Relative text is resolved against the current working directory.
        Raises ``ValueError`` for ``$env:NAME`` when ``NAME`` is unset.
        """
        text = normalize_separators(text)
        if text.startswith(ENV_PREFIX):
            name, _sep, rest = text[len(ENV_PREFIX):].partition("/")
            env = os.environ if environ is None else environ
            value = env.get(name, "")
            if not name or not value:
                raise ValueError(f"Environment variable {name or '<empty>'} is not set")
            root = PathRoot(RootKind.ENV, _normalize_base(value), name)
        elif text.startswith("~"):
            rest = text[1:]
            base = home if home is not None else os.path.expanduser("~")
            root = PathRoot(RootKind.HOME, _normalize_base(base))
        elif text.startswith("@"):
            rest = text[1:]
            base = workspace_root if workspace_root is not None else os.getcwd()
            root = PathRoot(RootKind.WORKSPACE, _normalize_base(base))
        elif (match := _DRIVE_RE.match(text)) is not None:
            drive = match.group(1).upper()
            rest = text[len(match.group(1)):]
            root = PathRoot(RootKind.DRIVE, f"{drive}/", drive)
        elif text.startswith("/"):
            rest = text
            root = PathRoot(RootKind.FILESYSTEM, "/")
        else:
            return cls.from_file_path(posixpath.join(normalize_separators(os.getcwd()), text))

        path = cls(root)
        path._extend(rest)
        return path

    def _extend(self, relative: str) -> None:
        for part in normalize_separators(relative).split("/"):
            if part in ("", "."):
                continue
            if part == "..":
                self.pop()
                continue
            self.segments.append(part)

    @property
    def fs_path(self) -> str:
        if not self.segments:
            return self.root.base
        return posixpath.join(self.root.base, *self.segments)

    @property
    def id(self) -> str:
        """Normalized absolute location, used as a history key."""
        return _normalize_base(self.fs_path)

    def render(self) -> str:
        """Prefixed form that ``from_file_path`` parses back to an equal path."""
        prefix = self.root.prefix()
        if not self.segments:
            return prefix
        joined = "/".join(self.segments)
        if prefix.endswith("/"):
            return prefix + joined
        return f"{prefix}/{joined}"

    def display(self, workspace_root: str | None = None, home: str | None = None) -> str:
        """Short human form: ``@/...`` inside the workspace, ``~/...`` under home."""
        location = self.fs_path
        if workspace_root:
            rel = _relative(location, _normalize_base(workspace_root))
            if rel is not None:
                return "@" if rel == "" else f"@/{rel}"
        home_base = _normalize_base(home if home is not None else os.path.expanduser("~"))
        rel = _relative(location, home_base)
        if rel is not None:
            return "~" if rel == "" else f"~/{rel}"
        return location

    def absolute(self) -> NavPath:
        """Same location re-anchored at the filesystem or drive root."""
        return NavPath.from_file_path(self.fs_path)

    def clone(self) -> NavPath:
        return NavPath(self.root, list(self.segments))

    def append(self, relative: str) -> NavPath:
        """Return a new path with ``relative`` appended; ``..`` steps up."""
        path = self.clone()
        path._extend(relative)
        return path

    def push(self, name: str) -> None:
        self._extend(name)

    def pop(self) -> str | None:
        """Remove and return the last segment, or ``None`` at the root."""
        if not self.segments:
            return None
        return self.segments.pop()

    def at_top(self) -> bool:
        return not self.segments

    def relative_to(self, other: NavPath | str) -> str | None:
        base = other.fs_path if isinstance(other, NavPath) else _normalize_base(other)
        return _relative(self.fs_path, base)

    def is_dir(self, fs: FileSystem) -> bool:
        stat = fs.stat(self.fs_path)
        return stat is not None and stat.file_type is FileType.DIRECTORY

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NavPath):
            return NotImplemented
        return self.root == other.root and self.segments == other.segments

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"NavPath({self.render()!r} -> {self.fs_path!r})"


def _relative(location: str, base: str) -> str | None:
    location = _normalize_base(location)
    if location == base:
        return ""
    prefix = base if base.endswith("/") else base + "/"
    if not location.startswith(prefix):
        return None
    return location[len(prefix):]
