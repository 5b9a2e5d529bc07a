"""Search result rows and the parsers for the tool's output lines."""

from __future__ import annotations

import os
from dataclasses import dataclass

MAX_DESC_LENGTH = 1000
HISTORY_DESCRIPTION = "History"


@dataclass(frozen=True)
class SearchResult:
    label: str
    detail: str
    num: int = 0  # 1-based line reported by the tool, 0 when unknown
    description: str = ""
    is_history: bool = False

    @property
    def line(self) -> int | None:
        """Zero-based line to place the cursor on."""
        return self.num - 1 if self.num > 0 else None

    @property
    def always_show(self) -> bool:
        return True

    @property
    def hidden(self) -> bool:
        return False

    @property
    def buttons(self) -> tuple[str, ...]:
        return ()


def _relative(path_text: str) -> str:
    return path_text[2:] if path_text.startswith("./") else path_text


def parse_name_line(line: str, directory: str) -> SearchResult | None:
    relative = _relative(line.strip())
    if not relative:
        return None
    return SearchResult(
        label=os.path.basename(relative),
        detail=os.path.join(directory, relative),
    )


def parse_content_line(line: str, directory: str) -> SearchResult | None:
    """Parse ``path:line:text``; rows without a line number or with huge text are dropped."""
    path_text, _sep, rest = line.partition(":")
    num_text, _sep, description = rest.partition(":")
    try:
        num = int(num_text)
    except ValueError:
        return None
    description = description.strip()
    if num <= 0 or len(description) >= MAX_DESC_LENGTH:
        return None
    relative = _relative(path_text)
    return SearchResult(
        label=f"{os.path.basename(relative)} : {num}",
        detail=os.path.join(directory, relative),
        num=num,
        description=description,
    )


def history_entry(query: str) -> SearchResult:
    return SearchResult(label=query, detail="", description=HISTORY_DESCRIPTION, is_history=True)
