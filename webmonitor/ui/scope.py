import threading


class RequestScope:
    """
    Cancellation token tied to a view's lifetime.

    Requests already sent cannot be aborted; results that arrive after
    ``cancel()`` are dropped by the owner instead of being written to a
    discarded view.
    """

    def __init__(self) -> None:
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()
