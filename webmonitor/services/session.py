"""
Session store.

Owns the authentication lifecycle: the persisted credential token and the
in-memory user/phase held in AppState. It is the single writer of both.

Invariants:
- user is set only after the backend accepted a token in this process
- after the initial check, no user means there was no token or it was purged
- the phase only moves uninitialized -> loading -> ready
"""

import logging

from webmonitor.domain.entities import SessionPhase, User
from webmonitor.domain.state import transition
from webmonitor.ports.api import AlertsApiPort
from webmonitor.ports.storage import TokenStoragePort
from webmonitor.ports.ui import NavigatorPort
from webmonitor.ui.state import AppState

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/login"


class SessionStore:
    def __init__(
        self,
        state: AppState,
        api: AlertsApiPort,
        storage: TokenStoragePort,
        navigator: NavigatorPort | None = None,
        token_key: str = "token",
    ):
        self.state = state
        self.api = api
        self.storage = storage
        self.navigator = navigator
        self.token_key = token_key

    @property
    def user(self) -> User | None:
        return self.state.current_user

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def token(self) -> str | None:
        return self.storage.get(self.token_key)

    def _set_phase(self, phase: SessionPhase) -> None:
        self.state.phase = transition(self.state.phase, phase)

    def initialize(self) -> None:
        """
        Resolve the stored token into a user, once.
        Always finishes in the ready phase; never retries.
        """
        if self.state.phase != SessionPhase.UNINITIALIZED:
            return

        self._set_phase(SessionPhase.LOADING)
        self.state.notify()

        try:
            token = self.storage.get(self.token_key)
            if not token:
                logger.info("No stored credential; starting anonymous session.")
                return

            try:
                self.state.current_user = self.api.current_user()
                logger.info("Stored credential accepted.")
            except Exception as e:
                # Rejected, expired or unreachable: all downgrade to anonymous.
                logger.info(f"Stored credential rejected ({e}); purging it.")
                self.storage.remove(self.token_key)
                self.state.current_user = None
        finally:
            self._set_phase(SessionPhase.READY)
            self.state.notify()

    def login(self, identifier: str, password: str) -> User:
        """
        Authenticate and persist the returned token.
        Raises the API error unchanged on failure; state is left as it was.
        """
        result = self.api.login(identifier, password)
        self.storage.set(self.token_key, result.token)
        self.state.current_user = result.user
        logger.info(f"Logged in as {result.user.identifier or result.user.id}")
        self.state.notify()
        return result.user

    def signup(self, name: str, identifier: str, password: str) -> User | None:
        """Create an account. Does not sign the new account in."""
        return self.api.signup(name, identifier, password)

    def logout(self) -> None:
        self.storage.remove(self.token_key)
        self.state.current_user = None
        logger.info("Logged out.")
        self.state.notify()
        if self.navigator is not None:
            self.navigator.go(LOGIN_ROUTE)

