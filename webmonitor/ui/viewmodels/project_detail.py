"""
Project detail view model.

Holds the authoritative project (last server copy) and a separate draft
for the edit form. Every mutation goes through the sync policy table; the
view never computes count or key itself except for the optimistic +1 after
a test alert.

Each action has its own in-flight flag. Triggering an action while its flag
is set does nothing, the same as clicking a disabled button.
"""

import logging
from collections.abc import Callable

from webmonitor.components.drafts import (
    ChangesInput,
    LimitBounds,
    ValidateDraftInput,
    run_changes,
    run_validate,
)
from webmonitor.components.sync import ReconcileInput, SyncOperation, run_reconcile
from webmonitor.domain.entities import Project, ProjectDraft
from webmonitor.ports.api import AlertsApiPort, display_message
from webmonitor.ports.ui import ClipboardPort, NavigatorPort, SchedulerPort
from webmonitor.services.session import LOGIN_ROUTE
from webmonitor.ui.guard import Access, check_access
from webmonitor.ui.scope import RequestScope
from webmonitor.ui.state import AppState

logger = logging.getLogger(__name__)

UPDATE_FAILED = "Failed to update project."
DELETE_FAILED = "Failed to delete project."
REGENERATE_FAILED = "Failed to regenerate key."
TEST_ALERT_SENT = "Test alert sent!"
TEST_ALERT_FAILED = "Failed to send test alert."

COPY_KEY = "apiKey"
COPY_COMMAND = "curlCommand"

EDITABLE_FIELDS = ("name", "email", "limit")


class ProjectDetailModel:
    def __init__(
        self,
        state: AppState,
        api: AlertsApiPort,
        project_id: str,
        *,
        navigator: NavigatorPort,
        clipboard: ClipboardPort,
        scheduler: SchedulerPort,
        report_url: str,
        bounds: LimitBounds | None = None,
        copy_feedback_seconds: float = 2.0,
        on_deleted: Callable[[], None] | None = None,
    ):
        self.state = state
        self.api = api
        self.project_id = project_id
        self.navigator = navigator
        self.clipboard = clipboard
        self.scheduler = scheduler
        self.report_url = report_url.rstrip("/")
        self.bounds = bounds or LimitBounds()
        self.copy_feedback_seconds = copy_feedback_seconds
        self.on_deleted = on_deleted
        self.scope = RequestScope()
        self.on_change: Callable[[], None] | None = None

        self.project: Project | None = None
        self.draft: ProjectDraft | None = None
        self.loading = True
        self.not_found = False
        self.editing = False
        self.error = ""
        self.notice: str | None = None
        self.notice_is_error = False
        self.delete_dialog_open = False
        self.copied: dict[str, bool] = {}

        self.saving = False
        self.deleting = False
        self.regenerating_key = False
        self.sending_test_alert = False

    def _changed(self) -> None:
        if self.on_change is not None and not self.scope.cancelled:
            self.on_change()

    def _set_project(self, project: Project) -> None:
        self.project = project
        if not self.editing:
            self.draft = ProjectDraft.from_project(project)

    # --- Loading ---

    def mount(self) -> Access:
        access = check_access(self.state)
        if access == Access.DENIED:
            self.navigator.go(LOGIN_ROUTE)
        elif access == Access.GRANTED:
            self.load()
        return access

    def load(self) -> None:
        self.loading = True
        self._changed()
        try:
            project: Project | None = self.api.get_project(self.project_id)
        except Exception as e:
            # Missing or unreadable: shown as "not found", never as a redirect.
            logger.error(f"Failed to fetch project {self.project_id}: {e}")
            project = None

        if self.scope.cancelled:
            return

        if project is None:
            self.not_found = True
        else:
            self.not_found = False
            self._set_project(project)
        self.loading = False
        self._changed()

    # --- Derived state ---

    @property
    def changed(self) -> bool:
        if self.project is None or self.draft is None:
            return False
        return run_changes(ChangesInput(draft=self.draft, project=self.project)).changed

    @property
    def limit_exceeded(self) -> bool:
        return self.project is not None and self.project.limit_exceeded

    @property
    def sample_command(self) -> str:
        key = self.project.key if self.project else ""
        return f"curl -X POST {self.report_url}/alerts/report/{key}"

    # --- Editing ---

    def start_edit(self) -> None:
        if self.project is None:
            return
        self.draft = ProjectDraft.from_project(self.project)
        self.editing = True
        self.error = ""
        self._changed()

    def cancel_edit(self) -> None:
        self.editing = False
        if self.project is not None:
            self.draft = ProjectDraft.from_project(self.project)
        self.error = ""
        self._changed()

    def set_field(self, field: str, value: str, notify: bool = True) -> None:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown editable field: {field}")
        if self.draft is None:
            return
        self.draft = self.draft.model_copy(update={field: value})
        if notify:
            self._changed()

    def save(self) -> bool:
        """Send the changed fields. No-op (False) when nothing changed."""
        if self.project is None or self.draft is None or self.saving:
            return False
        if not self.changed:
            return False

        validation = run_validate(ValidateDraftInput(draft=self.draft, bounds=self.bounds))
        if not validation.success:
            self.error = validation.error or UPDATE_FAILED
            self._changed()
            return False

        changes = run_changes(ChangesInput(draft=self.draft, project=self.project)).changes
        if "limit" in changes:
            changes["limit"] = validation.limit

        self.saving = True
        self.error = ""
        self._changed()
        try:
            updated = self.api.update_project(self.project.id, changes)
        except Exception as e:
            if self.scope.cancelled:
                return False
            logger.warning(f"Update of project {self.project.id} failed: {e}")
            self.saving = False
            self.error = display_message(e, UPDATE_FAILED)
            self._changed()
            return False

        if self.scope.cancelled:
            return False

        outcome = run_reconcile(
            ReconcileInput(operation=SyncOperation.UPDATE, current=self.project, server=updated)
        )
        self.saving = False
        self.editing = False
        if outcome.project is not None:
            self._set_project(outcome.project)
        self._changed()
        return True

    # --- Delete (two-step) ---

    def request_delete(self) -> None:
        self.delete_dialog_open = True
        self._changed()

    def cancel_delete(self) -> None:
        self.delete_dialog_open = False
        self._changed()

    def confirm_delete(self) -> bool:
        """Delete the project. Only fires when the confirmation dialog is open."""
        if self.project is None or not self.delete_dialog_open or self.deleting:
            return False

        self.deleting = True
        self.error = ""
        self._changed()
        try:
            self.api.delete_project(self.project.id)
        except Exception as e:
            if self.scope.cancelled:
                return False
            logger.warning(f"Delete of project {self.project.id} failed: {e}")
            self.deleting = False
            self.error = display_message(e, DELETE_FAILED)
            self._changed()
            return False

        if self.scope.cancelled:
            return False

        logger.info(f"Deleted project {self.project.id}")
        outcome = run_reconcile(
            ReconcileInput(operation=SyncOperation.DELETE, current=self.project)
        )
        self.deleting = False
        self.delete_dialog_open = False
        if outcome.navigate_away:
            if self.on_deleted is not None:
                self.on_deleted()
            else:
                self.navigator.go("/")
        return True

    # --- Key & alerts ---

    def regenerate_key(self) -> bool:
        if self.project is None or self.regenerating_key:
            return False

        self.regenerating_key = True
        self.error = ""
        self._changed()
        try:
            updated = self.api.regenerate_key(self.project.id)
        except Exception as e:
            if self.scope.cancelled:
                return False
            logger.warning(f"Key regeneration for {self.project.id} failed: {e}")
            self.regenerating_key = False
            self.error = display_message(e, REGENERATE_FAILED)
            self._changed()
            return False

        if self.scope.cancelled:
            return False

        outcome = run_reconcile(
            ReconcileInput(
                operation=SyncOperation.REGENERATE_KEY, current=self.project, server=updated
            )
        )
        self.regenerating_key = False
        if outcome.project is not None:
            self.project = outcome.project
        self._changed()
        return True

    def send_test_alert(self) -> bool:
        if self.project is None or self.sending_test_alert:
            return False

        self.sending_test_alert = True
        self._changed()
        try:
            self.api.report_alert(self.project.key)
        except Exception as e:
            if self.scope.cancelled:
                return False
            logger.warning(f"Test alert for {self.project.id} failed: {e}")
            self.sending_test_alert = False
            self.notice = TEST_ALERT_FAILED
            self.notice_is_error = True
            self._changed()
            return False

        if self.scope.cancelled:
            return False

        outcome = run_reconcile(
            ReconcileInput(operation=SyncOperation.REPORT_ALERT, current=self.project)
        )
        self.sending_test_alert = False
        if outcome.project is not None:
            self.project = outcome.project
        self.notice = TEST_ALERT_SENT
        self.notice_is_error = False
        self._changed()
        return True

    def clear_notice(self) -> None:
        self.notice = None
        self.notice_is_error = False

    # --- Clipboard ---

    def copy(self, label: str, text: str) -> None:
        self.clipboard.set_clipboard(text)
        self.copied[label] = True
        self._changed()
        self.scheduler.call_later(self.copy_feedback_seconds, lambda: self._clear_copied(label))

    def copy_key(self) -> None:
        if self.project is not None:
            self.copy(COPY_KEY, self.project.key)

    def copy_command(self) -> None:
        self.copy(COPY_COMMAND, self.sample_command)

    def _clear_copied(self, label: str) -> None:
        if self.scope.cancelled:
            return
        self.copied[label] = False
        self._changed()

    def dispose(self) -> None:
        self.scope.cancel()
