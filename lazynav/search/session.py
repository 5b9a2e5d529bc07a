"""Interactive search picker backed by an external search tool.

Each settled input value starts one search generation: one process per target
directory, each drained by a worker thread that only posts parsed results to
an event queue. The owning thread consumes the queue in ``poll`` and renders a
generation once every directory has settled. Starting a generation terminates
the previous generation's processes; late events from it are discarded.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from queue import Empty, Queue

from ..collaborators import PickerButton, ProcessRunner, SearchProcess, Workbench
from ..errors import PreconditionViolation, SearchProcessError
from ..picker import ListPicker
from .debounce import Debouncer
from .query import content_search_command, name_search_command, tokenize_query
from .results import SearchResult, history_entry, parse_content_line, parse_name_line

logger = logging.getLogger(__name__)

SEARCH_DEBOUNCE_SECONDS = 0.1
SCROLLBACK_LIMIT = 20

SEARCH_WORKSPACE_BUTTON = PickerButton("search_workspace", "Search workspace")
SEARCH_CONTENT_BUTTON = PickerButton("search_content", "Search file content")

_SearchEvent = tuple[str, int, str, object]


@dataclass(frozen=True)
class SearchDeps:
    picker: ListPicker
    workbench: Workbench
    runner: ProcessRunner
    tool: str = "rg"
    on_disposed: Callable[[], None] | None = None
    clock: Callable[[], float] = time.monotonic


class SearchSession:
    def __init__(self, dirs: Sequence[str], deps: SearchDeps, *, name_only: bool = True) -> None:
        if not dirs:
            raise PreconditionViolation("Search needs at least one directory")
        self.deps = deps
        self.picker = deps.picker
        self.workbench = deps.workbench
        self.dirs = list(dirs)
        self.original_directory = self.dirs[0]
        self.name_only = name_only
        self.query = ""
        self.scrollback: list[SearchResult] = []
        self.generation = 0
        self.disposed = False
        self.debouncer = Debouncer(SEARCH_DEBOUNCE_SECONDS, deps.clock)
        self._processes: list[SearchProcess] = []
        self._outstanding: set[str] = set()
        self._results: dict[str, list[SearchResult]] = {}
        self._errors: dict[str, str] = {}
        self._events: Queue[_SearchEvent] = Queue()

        self.picker.placeholder = "Please enter a search term"
        self.picker.set_buttons(
            [
                SEARCH_WORKSPACE_BUTTON,
                replace(SEARCH_CONTENT_BUTTON, checked=not name_only),
            ]
        )
        self.picker.title = f"Searching in {self.dirs[0]}"
        self.picker.set_items(self.scrollback)
        self.picker.on_accepted(self.on_accepted)
        self.picker.on_value_changed(self.on_value_changed)
        self.picker.on_button_triggered(self.on_button_triggered)
        self.picker.on_hidden(self.dispose)
        self.picker.show()

    @property
    def searching(self) -> bool:
        return bool(self._outstanding)

    def on_value_changed(self, value: str) -> None:
        self.debouncer.push(value)

    def update_search(self, value: str) -> None:
        self.query = value
        self.picker.title = f"Searching in {self.dirs[0]}"
        if not value:
            self.cancel()
            self.picker.set_items(self.scrollback)
            return
        self._start_generation(value)

    def _start_generation(self, value: str) -> None:
        self.cancel()
        self.generation += 1
        generation = self.generation
        args = tokenize_query(value)
        if self.name_only:
            stages = name_search_command(self.deps.tool, args)
        else:
            stages = content_search_command(self.deps.tool, args)

        self.picker.busy = True
        for directory in self.dirs:
            try:
                process = self.deps.runner.spawn(stages, directory)
            except SearchProcessError as exc:
                self._errors[directory] = exc.message
                continue
            self._processes.append(process)
            self._outstanding.add(directory)
            worker = threading.Thread(
                target=self._run_directory,
                args=(generation, directory, process),
                name=f"lazynav-search-{generation}",
                daemon=True,
            )
            worker.start()
        if not self._outstanding:
            self._render()

    def _run_directory(self, generation: int, directory: str, process: SearchProcess) -> None:
        parse = parse_name_line if self.name_only else parse_content_line
        try:
            lines = list(process.stdout_lines())
            returncode, stderr_text = process.wait()
        except (OSError, ValueError) as exc:
            self._events.put(("failed", generation, directory, str(exc)))
            return
        stderr_text = stderr_text.strip()
        if stderr_text or returncode not in (0, 1):
            message = stderr_text or f"{self.deps.tool} failed with exit code {returncode}"
            self._events.put(("failed", generation, directory, message))
            return
        results = [result for result in (parse(line, directory) for line in lines if line) if result is not None]
        self._events.put(("done", generation, directory, results))

    def poll(self, timeout_seconds: float = 0.0) -> bool:
        """Run a settled debounced query and apply finished directories; return whether anything changed."""
        changed = False
        value = self.debouncer.poll()
        if value is not None:
            self.update_search(value)
            changed = True

        def consume_event(event: _SearchEvent) -> None:
            nonlocal changed
            kind, generation, directory, payload = event
            if generation != self.generation or directory not in self._outstanding:
                return
            self._outstanding.discard(directory)
            if kind == "done":
                self._results[directory] = payload  # type: ignore[assignment]
            else:
                self._errors[directory] = str(payload)
            if not self._outstanding:
                self._render()
                changed = True

        if timeout_seconds > 0 and self._outstanding:
            try:
                consume_event(self._events.get(timeout=timeout_seconds))
            except Empty:
                pass

        while True:
            try:
                event = self._events.get_nowait()
            except Empty:
                break
            consume_event(event)
        return changed

    def wait_until_settled(self, timeout: float = 5.0) -> bool:
        deadline = time.monotonic() + timeout
        while self._outstanding:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            self.poll(min(remaining, 0.05))
        return True

    def _render(self) -> None:
        items: list[SearchResult] = []
        for directory in self.dirs:
            items.extend(self._results.get(directory, ()))
        for directory in self.dirs:
            message = self._errors.get(directory)
            if message is not None:
                logger.warning("search failed in %s: %s", directory, message)
                self.workbench.show_error(message)
        self._results = {}
        self._errors = {}
        self.picker.set_items(items)
        self.picker.busy = False

    def cancel(self) -> None:
        """Terminate the in-flight generation; its late results are discarded."""
        processes, self._processes = self._processes, []
        for process in processes:
            process.terminate()
        if self._outstanding:
            self.generation += 1
        self._outstanding.clear()
        self._results = {}
        self._errors = {}
        self.picker.busy = False

    def on_accepted(self) -> None:
        active = self.picker.get_active_items()
        if not active:
            return
        item = active[0]
        if item.is_history:
            self.picker.set_value(item.label)
            self.update_search(item.label)
            return
        self.remember(self.query)
        self.workbench.open_file(item.detail, line=item.line)

    def remember(self, query: str) -> None:
        if not query:
            return
        self.scrollback.insert(0, history_entry(query))
        del self.scrollback[SCROLLBACK_LIMIT:]

    def on_button_triggered(self, button: PickerButton) -> None:
        if button.id == SEARCH_WORKSPACE_BUTTON.id:
            self.toggle_scope()
        elif button.id == SEARCH_CONTENT_BUTTON.id:
            self.toggle_mode()

    def _flip_button(self, button_id: str) -> bool:
        buttons = self.picker.get_buttons()
        checked = False
        for index, button in enumerate(buttons):
            if button.id == button_id:
                checked = not button.checked
                buttons[index] = replace(button, checked=checked)
        self.picker.set_buttons(buttons)
        return checked

    def toggle_scope(self) -> None:
        """Switch between the originating directory and every workspace root."""
        if self._flip_button(SEARCH_WORKSPACE_BUTTON.id):
            self.dirs = self.workbench.workspace_roots() or [self.original_directory]
        else:
            self.dirs = [self.original_directory]
        self.update_search(self.picker.get_value())

    def toggle_mode(self) -> None:
        self.name_only = not self._flip_button(SEARCH_CONTENT_BUTTON.id)
        self.update_search(self.picker.get_value())

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self.debouncer.cancel()
        self.cancel()
        self.picker.dispose()
        if self.deps.on_disposed is not None:
            self.deps.on_disposed()
