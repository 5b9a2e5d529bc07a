"""In-memory picker model.

``ListPicker`` holds everything a single-line filterable picker shows and
dispatches the user events a host delivers through ``type_value``/``emit_*``.
Programmatic ``set_value`` never fires value-changed: only user edits do.
Setter calls are appended to ``calls`` so tests can assert on them.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .collaborators import PickerButton


class ListPicker:
    def __init__(self) -> None:
        self.title = ""
        self.placeholder = ""
        self.busy = False
        self.enabled = True
        self.visible = False
        self.disposed = False
        self.items: list[Any] = []
        self.value = ""
        self.active_items: list[Any] = []
        self.buttons: list[PickerButton] = []
        self.calls: list[tuple[str, Any]] = []
        self._value_changed: list[Callable[[str], None]] = []
        self._accepted: list[Callable[[], None]] = []
        self._button_triggered: list[Callable[[PickerButton], None]] = []
        self._item_button_triggered: list[Callable[[Any, str], None]] = []
        self._hidden: list[Callable[[], None]] = []

    # state
    def set_items(self, items: Sequence[Any]) -> None:
        self.items = list(items)
        self.active_items = []
        self.calls.append(("set_items", list(items)))

    def get_items(self) -> list[Any]:
        return list(self.items)

    def set_value(self, value: str) -> None:
        self.value = value
        self.calls.append(("set_value", value))

    def get_value(self) -> str:
        return self.value

    def set_active_items(self, items: Sequence[Any]) -> None:
        self.active_items = list(items)
        self.calls.append(("set_active_items", list(items)))

    def get_active_items(self) -> list[Any]:
        return list(self.active_items)

    def set_buttons(self, buttons: Sequence[PickerButton]) -> None:
        self.buttons = list(buttons)

    def get_buttons(self) -> list[PickerButton]:
        return list(self.buttons)

    def show(self) -> None:
        if not self.disposed:
            self.visible = True

    def hide(self) -> None:
        if not self.visible:
            return
        self.visible = False
        for callback in list(self._hidden):
            callback()

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self.visible = False
        self._value_changed.clear()
        self._accepted.clear()
        self._button_triggered.clear()
        self._item_button_triggered.clear()
        self._hidden.clear()

    # subscriptions
    def on_value_changed(self, callback: Callable[[str], None]) -> None:
        self._value_changed.append(callback)

    def on_accepted(self, callback: Callable[[], None]) -> None:
        self._accepted.append(callback)

    def on_button_triggered(self, callback: Callable[[PickerButton], None]) -> None:
        self._button_triggered.append(callback)

    def on_item_button_triggered(self, callback: Callable[[Any, str], None]) -> None:
        self._item_button_triggered.append(callback)

    def on_hidden(self, callback: Callable[[], None]) -> None:
        self._hidden.append(callback)

    # user events
    def type_value(self, value: str) -> None:
        """Replace the input as if the user typed it."""
        if value == self.value:
            return
        self.value = value
        self.emit_value_changed(value)

    def emit_value_changed(self, value: str) -> None:
        for callback in list(self._value_changed):
            callback(value)

    def emit_accepted(self) -> None:
        if not self.enabled:
            return
        for callback in list(self._accepted):
            callback()

    def emit_button(self, button_id: str) -> None:
        button = next((candidate for candidate in self.buttons if candidate.id == button_id), None)
        if button is None:
            return
        for callback in list(self._button_triggered):
            callback(button)

    def emit_item_button(self, item: Any, button_id: str) -> None:
        for callback in list(self._item_button_triggered):
            callback(item, button_id)
