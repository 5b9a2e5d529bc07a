"""Pinned files and folders kept in the process-wide key-value store."""

from __future__ import annotations

from .collaborators import KeyValueStore
from .entries import FileType, PinnedItem

PINNED_KEY = "lazynav.pinned"


class PinStore:
    def __init__(self, store: KeyValueStore, key: str = PINNED_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> list[PinnedItem]:
        raw = self.store.get(self.key, [])
        if not isinstance(raw, list):
            return []
        pins: list[PinnedItem] = []
        for item in raw:
            pin = PinnedItem.from_json(item)
            if pin is not None and all(existing.path != pin.path for existing in pins):
                pins.append(pin)
        return pins

    def toggle(self, path: str, file_type: FileType) -> bool:
        """Add ``path`` if absent, remove it otherwise; return whether it is now pinned.

        The list is re-read right before writing so consecutive toggles compose.
        """
        pins = self.load()
        remaining = [pin for pin in pins if pin.path != path]
        pinned = len(remaining) == len(pins)
        if pinned:
            remaining.append(PinnedItem(path=path, file_type=file_type))
        self.store.set(self.key, [pin.to_json() for pin in remaining])
        return pinned
