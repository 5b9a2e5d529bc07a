"""Row filtering and ANSI rendering of a ``ListPicker`` for the terminal host."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..path import normalize_separators
from ..picker import ListPicker


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the picker renderer."""

    reset: str = "\033[0m"
    title: str = "\033[1;38;5;81m"
    prompt: str = "\033[1;38;5;81m"
    placeholder: str = "\033[2;38;5;250m"
    selected: str = "\033[7m"
    directory: str = "\033[1;34m"
    description: str = "\033[2;38;5;250m"
    dimmed: str = "\033[2m"
    button_on: str = "\033[38;5;42m"
    button_off: str = "\033[2;38;5;250m"
    status_error: str = "\033[38;5;203m"


DEFAULT_THEME = UITheme()


def filter_query(value: str) -> str:
    """Last path component of ``value``; typed paths narrow by the final name."""
    return normalize_separators(value).rsplit("/", 1)[-1].lower()


def visible_items(items: Sequence[Any], value: str) -> list[Any]:
    """Items shown for ``value``.

    ``always_show`` items are always listed. Others must contain the query as a
    case-insensitive substring; hidden items only appear for a non-empty query.
    """
    query = filter_query(value)
    shown: list[Any] = []
    for item in items:
        if item.always_show:
            shown.append(item)
            continue
        if item.hidden and not query:
            continue
        if query in item.name.lower():
            shown.append(item)
    return shown


def highlighted_index(picker: ListPicker, rows: Sequence[Any]) -> int:
    """Row of the first active item, else 0 (the row Enter would pick)."""
    for active in picker.get_active_items():
        for index, row in enumerate(rows):
            if row is active or row == active:
                return index
    return 0


def move_highlight(picker: ListPicker, rows: Sequence[Any], delta: int) -> None:
    if not rows:
        return
    has_active = bool(picker.get_active_items())
    index = highlighted_index(picker, rows)
    if has_active:
        index = max(0, min(len(rows) - 1, index + delta))
    picker.set_active_items([rows[index]])


def _clip(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(0, width - 1)] + "…"


def _button_text(picker: ListPicker, theme: UITheme) -> str:
    parts = []
    for button in picker.get_buttons():
        if button.checked:
            parts.append(f"{theme.button_on}[x] {button.tooltip}{theme.reset}")
        elif button.id in {"search_workspace", "search_content"}:
            parts.append(f"{theme.button_off}[ ] {button.tooltip}{theme.reset}")
    return "  ".join(parts)


def _row_text(item: Any, width: int, theme: UITheme) -> tuple[str, str]:
    """Return the plain row text and the same text with ANSI styling."""
    label = str(item.label)
    description = str(getattr(item, "description", "") or "")
    detail = ""
    if getattr(item, "detail", "") and not getattr(item, "is_history", False):
        detail = os.path.dirname(item.detail)
    extra = "  ".join(part for part in (description, detail) if part)
    plain = _clip(f"{label}  {extra}" if extra else label, width)
    if not plain.startswith(label):
        return plain, plain
    style = ""
    if getattr(item, "hidden", False):
        style = theme.dimmed
    elif getattr(item, "is_dir", False):
        style = theme.directory
    head = f"{style}{label}{theme.reset}" if style else label
    tail = plain[len(label):]
    if tail:
        tail = f"{theme.description}{tail}{theme.reset}"
    return plain, head + tail


def render_picker(
    picker: ListPicker,
    width: int,
    height: int,
    *,
    status: str = "",
    local_filter: bool = True,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Build full-screen rows: title, prompt, items, and a status line."""
    width = max(10, width)
    height = max(4, height)
    lines: list[str] = []

    title = _clip(picker.title, width)
    buttons = _button_text(picker, theme)
    lines.append(f"{theme.title}{title}{theme.reset}" + (f"  {buttons}" if buttons else ""))

    value = picker.get_value()
    if value:
        lines.append(f"{theme.prompt}> {theme.reset}{_clip(value, width - 2)}")
    else:
        lines.append(f"{theme.prompt}> {theme.reset}{theme.placeholder}{_clip(picker.placeholder, width - 2)}{theme.reset}")

    rows = visible_items(picker.get_items(), value) if local_filter else picker.get_items()
    list_height = height - 3
    selected = highlighted_index(picker, rows)
    start = 0
    if selected >= list_height:
        start = selected - list_height + 1
    for index in range(start, min(len(rows), start + list_height)):
        plain, styled = _row_text(rows[index], width - 2, theme)
        if index == selected:
            lines.append(f"{theme.selected}› {plain}{theme.reset}")
        else:
            lines.append(f"  {styled}")
    while len(lines) < height - 1:
        lines.append("")

    if status:
        lines.append(f"{theme.status_error}{_clip(status, width)}{theme.reset}")
    elif picker.busy:
        lines.append(f"{theme.placeholder}working...{theme.reset}")
    else:
        lines.append("")
    return lines


class Screen:
    """Writes whole frames to the terminal."""

    def __init__(self, stdout_fd: int) -> None:
        self.stdout_fd = stdout_fd

    def draw(self, lines: Sequence[str]) -> None:
        out = ["\033[H"]
        for index, line in enumerate(lines):
            if index:
                out.append("\r\n")
            out.append(line)
            out.append("\033[K")
        out.append("\033[J")
        os.write(self.stdout_fd, "".join(out).encode("utf-8", errors="replace"))
