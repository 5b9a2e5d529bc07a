"""Modal input box and choice list drawn over the picker screen."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .view import DEFAULT_THEME, UITheme


class TerminalPrompter:
    def __init__(
        self,
        draw: Callable[[list[str]], None],
        read_key: Callable[[], str],
        theme: UITheme = DEFAULT_THEME,
    ) -> None:
        self.draw = draw
        self.read_key = read_key
        self.theme = theme

    def show_input_box(self, prompt: str, value: str, selection: tuple[int, int]) -> str | None:
        """Edit ``value``; the first edit replaces the ``selection`` range.

        Returns ``None`` on Esc or when the result is empty.
        """
        text = value
        start, end = selection
        selected = 0 <= start < end <= len(text)
        cursor = end if selected else len(text)
        theme = self.theme
        while True:
            if selected:
                shown = f"{text[:start]}{theme.selected}{text[start:end]}{theme.reset}{text[end:]}"
            else:
                under = text[cursor:cursor + 1] or " "
                shown = f"{text[:cursor]}{theme.selected}{under}{theme.reset}{text[cursor + 1:]}"
            self.draw([f"{theme.title}{prompt}{theme.reset}", f"{theme.prompt}> {theme.reset}{shown}"])
            key = self.read_key()
            if key in {"ESC", "CTRL_C"}:
                return None
            if key == "ENTER":
                return text or None
            if key == "BACKSPACE":
                if selected:
                    text = text[:start] + text[end:]
                    cursor = start
                elif cursor > 0:
                    text = text[:cursor - 1] + text[cursor:]
                    cursor -= 1
            elif key == "CTRL_U":
                text = ""
                cursor = 0
            elif key == "LEFT":
                cursor = start if selected else max(0, cursor - 1)
            elif key == "RIGHT":
                cursor = end if selected else min(len(text), cursor + 1)
            elif len(key) == 1 and key.isprintable():
                if selected:
                    text = text[:start] + key + text[end:]
                    cursor = start + 1
                else:
                    text = text[:cursor] + key + text[cursor:]
                    cursor += 1
            else:
                continue
            selected = False

    def show_choice(self, options: Sequence[str]) -> str | None:
        if not options:
            return None
        index = 0
        theme = self.theme
        while True:
            lines = []
            for row, option in enumerate(options):
                if row == index:
                    lines.append(f"{theme.selected}› {option}{theme.reset}")
                else:
                    lines.append(f"  {option}")
            self.draw(lines)
            key = self.read_key()
            if key in {"ESC", "CTRL_C"}:
                return None
            if key == "ENTER":
                return options[index]
            if key in {"UP", "SHIFT_TAB"}:
                index = (index - 1) % len(options)
            elif key in {"DOWN", "TAB"}:
                index = (index + 1) % len(options)
