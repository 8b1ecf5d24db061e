"""
Project collection view model.

Loads the signed-in user's projects and refetches the whole list after a
project is created. Fetch failures are logged and never shown: the list
stays as it was (empty on first load).
"""

import logging
from collections.abc import Callable

from webmonitor.components.sync import ReconcileInput, SyncOperation, run_reconcile
from webmonitor.domain.entities import Project
from webmonitor.ports.api import AlertsApiPort
from webmonitor.ports.ui import NavigatorPort
from webmonitor.services.session import LOGIN_ROUTE
from webmonitor.ui.guard import Access, check_access
from webmonitor.ui.scope import RequestScope
from webmonitor.ui.state import AppState

logger = logging.getLogger(__name__)


class ProjectListModel:
    def __init__(self, state: AppState, api: AlertsApiPort, navigator: NavigatorPort):
        self.state = state
        self.api = api
        self.navigator = navigator
        self.scope = RequestScope()
        self.on_change: Callable[[], None] | None = None

        self.projects: list[Project] = []
        self.loading = True

    def _changed(self) -> None:
        if self.on_change is not None and not self.scope.cancelled:
            self.on_change()

    def mount(self) -> Access:
        access = check_access(self.state)
        if access == Access.DENIED:
            logger.info("No session user; redirecting to login.")
            self.navigator.go(LOGIN_ROUTE)
        elif access == Access.GRANTED:
            self.refresh(show_placeholder=True)
        return access

    def refresh(self, show_placeholder: bool = False) -> None:
        user = self.state.current_user
        if user is None:
            return

        if show_placeholder:
            self.loading = True
            self._changed()

        try:
            projects: list[Project] | None = self.api.list_projects(user.id)
        except Exception as e:
            logger.error(f"Failed to fetch projects: {e}")
            projects = None

        if self.scope.cancelled:
            logger.debug("Dropping project list response for a disposed view.")
            return

        if projects is not None:
            self.projects = projects
        self.loading = False
        self._changed()

    def on_project_created(self) -> None:
        outcome = run_reconcile(ReconcileInput(operation=SyncOperation.CREATE, current=None))
        if outcome.refetch:
            self.refresh()

    def dispose(self) -> None:
        self.scope.cancel()
