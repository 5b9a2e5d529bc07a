"""Turns raw directory listings into sorted, classified ``RealFile`` entries."""

from __future__ import annotations

import posixpath
from collections.abc import Callable, Iterable
from fnmatch import fnmatchcase

from .config import NavigatorConfig
from .entries import FileType, RealFile, entry_sort_key
from .ignore_rules import IgnoreRules, rules_for_directory

IGNORED_LABEL = "ignored"

RulesLoader = Callable[[str, tuple[str, ...]], IgnoreRules]


def _always_shown(name: str, patterns: tuple[str, ...]) -> bool:
    return any(fnmatchcase(name, pattern) for pattern in patterns)


def classify_entries(
    directory: str,
    records: Iterable[tuple[str, FileType]],
    config: NavigatorConfig,
    load_rules: RulesLoader = rules_for_directory,
) -> list[RealFile]:
    """Sort ``records`` and apply dotfile, ignore-file, and removal rules.

    Entries matched by ``config.always_show`` are never hidden. Hidden entries
    stay in the list flagged ``hidden`` unless ``remove_ignored_files`` drops
    them outright.
    """
    ordered = sorted(records, key=lambda record: entry_sort_key(record[0], record[1]))
    rules = load_rules(directory, config.ignore_file_types) if config.hide_ignored_files else None

    entries: list[RealFile] = []
    for name, file_type in ordered:
        always_show = _always_shown(name, config.always_show)
        hidden = False
        description = ""
        if not always_show:
            if config.hide_dotfiles and name.startswith("."):
                hidden = True
            if rules is not None and rules.is_ignored(
                posixpath.join(directory, name),
                file_type is FileType.DIRECTORY,
            ):
                hidden = True
                if config.label_ignored_files:
                    description = IGNORED_LABEL
        if hidden and config.remove_ignored_files:
            continue
        entries.append(
            RealFile(
                name=name,
                file_type=file_type,
                always_show=always_show,
                hidden=hidden,
                description=description,
            )
        )
    return entries
