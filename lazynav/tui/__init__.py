"""Terminal host for the navigator and search pickers."""

from .app import TerminalApp
from .prompter import TerminalPrompter
from .terminal import TerminalController
from .view import Screen, render_picker, visible_items
from .workbench import TerminalWorkbench

__all__ = [
    "Screen",
    "TerminalApp",
    "TerminalController",
    "TerminalPrompter",
    "TerminalWorkbench",
    "render_picker",
    "visible_items",
]
