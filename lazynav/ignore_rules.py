"""Ignore-file rules used to de-emphasise directory entries.

Rules for a directory come from every ignore file (``.gitignore`` by default)
found in that directory and its ancestors; deeper files are applied last, and
within the combined list the last matching pattern wins so ``!pattern``
re-includes. Parsed rules are cached per directory with bounded staleness.
"""

from __future__ import annotations

import posixpath
import time
from collections import OrderedDict
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path

IGNORE_RULES_CACHE_MAX = 64
IGNORE_RULES_CACHE_TTL_SECONDS = 2.0


@dataclass(frozen=True)
class IgnorePattern:
    """One non-comment line of an ignore file."""

    base: str
    pattern: str
    negated: bool = False
    dir_only: bool = False
    anchored: bool = False

    def matches(self, path: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        prefix = self.base if self.base.endswith("/") else self.base + "/"
        if not path.startswith(prefix):
            return False
        relative = path[len(prefix):]
        if self.anchored:
            return fnmatchcase(relative, self.pattern)
        return fnmatchcase(posixpath.basename(relative), self.pattern)


def parse_ignore_file(text: str, base: str) -> list[IgnorePattern]:
    patterns: list[IgnorePattern] = []
    for raw_line in text.splitlines():
        line = raw_line.rstrip()
        if not line or line.startswith("#"):
            continue
        negated = line.startswith("!")
        if negated:
            line = line[1:]
        if line.startswith("\\"):
            line = line[1:]
        dir_only = line.endswith("/")
        line = line.rstrip("/")
        if line.startswith("**/"):
            line = line[3:]
        anchored = "/" in line
        line = line.lstrip("/")
        if not line:
            continue
        patterns.append(
            IgnorePattern(
                base=base,
                pattern=line,
                negated=negated,
                dir_only=dir_only,
                anchored=anchored,
            )
        )
    return patterns


@dataclass(frozen=True)
class IgnoreRules:
    patterns: tuple[IgnorePattern, ...] = ()

    def is_ignored(self, path: str, is_dir: bool) -> bool:
        ignored = False
        for pattern in self.patterns:
            if pattern.matches(path, is_dir):
                ignored = not pattern.negated
        return ignored


@dataclass(frozen=True)
class _RulesCacheEntry:
    rules: IgnoreRules
    directory_mtime_ns: int | None
    loaded_at: float


_IGNORE_RULES_CACHE: OrderedDict[tuple[str, tuple[str, ...]], _RulesCacheEntry] = OrderedDict()


def clear_ignore_rules_cache() -> None:
    _IGNORE_RULES_CACHE.clear()


def _ancestors(directory: str) -> list[str]:
    """Return ``directory`` and its parents, outermost first."""
    chain = [directory]
    current = directory
    while True:
        parent = posixpath.dirname(current)
        if not parent or parent == current:
            break
        chain.append(parent)
        current = parent
    chain.reverse()
    return chain


def _load_rules(directory: str, ignore_file_types: tuple[str, ...]) -> IgnoreRules:
    patterns: list[IgnorePattern] = []
    for folder in _ancestors(directory):
        for file_name in ignore_file_types:
            try:
                text = (Path(folder) / file_name).read_text(encoding="utf-8", errors="replace")
            except OSError:
                continue
            patterns.extend(parse_ignore_file(text, folder))
    return IgnoreRules(patterns=tuple(patterns))


def rules_for_directory(directory: str, ignore_file_types: tuple[str, ...]) -> IgnoreRules:
    """Return cached rules for ``directory``, reloading after a change or TTL expiry."""
    directory = posixpath.normpath(directory)
    key = (directory, tuple(ignore_file_types))
    try:
        mtime_ns: int | None = int(Path(directory).stat().st_mtime_ns)
    except OSError:
        mtime_ns = None
    now = time.monotonic()

    cached = _IGNORE_RULES_CACHE.get(key)
    if cached is not None:
        if (
            cached.directory_mtime_ns == mtime_ns
            and now - cached.loaded_at <= IGNORE_RULES_CACHE_TTL_SECONDS
        ):
            _IGNORE_RULES_CACHE.move_to_end(key)
            return cached.rules

    rules = _load_rules(directory, key[1])
    _IGNORE_RULES_CACHE[key] = _RulesCacheEntry(rules=rules, directory_mtime_ns=mtime_ns, loaded_at=now)
    _IGNORE_RULES_CACHE.move_to_end(key)
    while len(_IGNORE_RULES_CACHE) > IGNORE_RULES_CACHE_MAX:
        _IGNORE_RULES_CACHE.popitem(last=False)
    return rules
