"""Key bindings for the terminal picker host."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..commands import CommandHost
from ..entries import REMOVE_PIN_BUTTON
from ..picker import ListPicker
from .view import highlighted_index, move_highlight, visible_items


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Small key-dispatch table keyed by exact key tokens."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[combo] = binding.handler
        return self

    def dispatch(self, key: str) -> bool | None:
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


class PickerKeys:
    """Routes key tokens to the active picker and the host's commands."""

    def __init__(self, host: CommandHost) -> None:
        self.host = host
        self.registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("ESC",), self.close),
            KeyComboBinding(("CTRL_C",), self.quit),
            KeyComboBinding(("ENTER",), self.accept),
            KeyComboBinding(("UP",), lambda: self.move(-1)),
            KeyComboBinding(("DOWN",), lambda: self.move(1)),
            KeyComboBinding(("PAGE_UP",), lambda: self.move(-10)),
            KeyComboBinding(("PAGE_DOWN",), lambda: self.move(10)),
            KeyComboBinding(("TAB",), lambda: host.tab_complete(True)),
            KeyComboBinding(("SHIFT_TAB",), lambda: host.tab_complete(False)),
            KeyComboBinding(("LEFT",), host.step_out),
            KeyComboBinding(("RIGHT",), host.step_in),
            KeyComboBinding(("CTRL_O",), host.open_actions_menu),
            KeyComboBinding(("CTRL_R",), host.rename_current_or_focused),
            KeyComboBinding(("CTRL_G",), host.invoke_search),
            KeyComboBinding(("CTRL_W",), host.toggle_search_scope),
            KeyComboBinding(("CTRL_T",), host.toggle_search_mode),
            KeyComboBinding(("CTRL_X",), self.remove_pin),
            KeyComboBinding(("BACKSPACE",), self.backspace),
            KeyComboBinding(("CTRL_U",), lambda: self._type("")),
        )

    @property
    def picker(self) -> ListPicker | None:
        if self.host.navigator is not None:
            return self.host.navigator.picker
        if self.host.search is not None:
            return self.host.search.picker
        return None

    @property
    def local_filter(self) -> bool:
        return self.host.navigator is not None

    def rows(self) -> list:
        picker = self.picker
        if picker is None:
            return []
        if self.local_filter:
            return visible_items(picker.get_items(), picker.get_value())
        return picker.get_items()

    def handle(self, key: str) -> None:
        if not key:
            return
        if self.registry.dispatch(key) is None and len(key) == 1 and key.isprintable():
            picker = self.picker
            if picker is not None:
                self._type(picker.get_value() + key)

    def _type(self, value: str) -> None:
        picker = self.picker
        if picker is not None and picker.enabled:
            picker.type_value(value)

    def backspace(self) -> None:
        picker = self.picker
        if picker is not None:
            self._type(picker.get_value()[:-1])

    def move(self, delta: int) -> None:
        picker = self.picker
        if picker is not None:
            move_highlight(picker, self.rows(), delta)

    def accept(self) -> None:
        picker = self.picker
        if picker is None:
            return
        rows = self.rows()
        if not picker.get_active_items() and rows:
            picker.set_active_items([rows[highlighted_index(picker, rows)]])
        picker.emit_accepted()

    def remove_pin(self) -> None:
        picker = self.picker
        if picker is None:
            return
        active = picker.get_active_items()
        if active and REMOVE_PIN_BUTTON in active[0].buttons:
            picker.emit_item_button(active[0], REMOVE_PIN_BUTTON)

    def close(self) -> None:
        picker = self.picker
        if picker is not None:
            picker.hide()

    def quit(self) -> None:
        self.host.close_navigator()
        self.host.close_search()
