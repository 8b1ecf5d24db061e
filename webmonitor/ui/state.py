import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from webmonitor.domain.entities import SessionPhase, User

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """
    Process-wide session snapshot shared by every view.

    Views read it and subscribe to changes; SessionStore is its only writer.
    """

    phase: SessionPhase = SessionPhase.UNINITIALIZED
    current_user: User | None = None
    _listeners: list[Callable[[], None]] = field(default_factory=list, repr=False)

    @property
    def loading(self) -> bool:
        return self.phase != SessionPhase.READY

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Session listener failed")
