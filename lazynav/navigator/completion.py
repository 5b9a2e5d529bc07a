"""Tab-completion candidate ranking and the cyclic completion cursor."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..entries import RealFile


def completion_candidates(items: Iterable[object], query: str) -> list[RealFile]:
    """Return real entries containing ``query``, earliest match first, then by name."""
    folded = query.lower()
    matches = [item for item in items if isinstance(item, RealFile) and folded in item.name.lower()]
    matches.sort(key=lambda item: (item.name.lower().find(folded), item.name.lower()))
    return matches


@dataclass
class AutoCompletion:
    index: int
    items: list[RealFile] = field(default_factory=list)

    @classmethod
    def start(cls, items: Iterable[object], query: str, forward: bool) -> AutoCompletion:
        candidates = completion_candidates(items, query)
        return cls(index=0 if forward else len(candidates) - 1, items=candidates)

    def advance(self, forward: bool) -> None:
        if not self.items:
            return
        step = 1 if forward else -1
        self.index = (self.index + step) % len(self.items)

    def current(self) -> RealFile | None:
        if 0 <= self.index < len(self.items):
            return self.items[self.index]
        return None
