from __future__ import annotations

import time
from collections.abc import Callable


class Debouncer:
    """Coalesces values pushed within ``wait_seconds`` into the last one.

    Nothing runs on a timer: the owner calls ``poll`` from its event loop and
    receives the settled value once the window has elapsed.
    """

    def __init__(self, wait_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.wait_seconds = wait_seconds
        self.clock = clock
        self._value = ""
        self._deadline: float | None = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def push(self, value: str) -> None:
        self._value = value
        self._deadline = self.clock() + self.wait_seconds

    def time_remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self.clock())

    def poll(self) -> str | None:
        if self._deadline is None or self.clock() < self._deadline:
            return None
        self._deadline = None
        return self._value

    def cancel(self) -> None:
        self._deadline = None
