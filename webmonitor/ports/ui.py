from collections.abc import Callable
from typing import Protocol


class NavigatorPort(Protocol):
    def go(self, route: str) -> None: ...


class ClipboardPort(Protocol):
    def set_clipboard(self, text: str) -> None: ...


class SchedulerPort(Protocol):
    """Runs a callback once after a delay (transient UI flags)."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None: ...
