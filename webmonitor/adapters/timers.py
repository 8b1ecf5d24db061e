import threading
from collections.abc import Callable


class ThreadingScheduler:
    """SchedulerPort backed by daemon ``threading.Timer`` instances."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        timer = threading.Timer(delay_seconds, callback)
        timer.daemon = True
        timer.start()
