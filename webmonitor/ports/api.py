"""
Alerts backend port.

Protocol for the remote crash-alerting API plus the error taxonomy every
implementation raises. Views and the session store depend on this port only.

Errors:
- ApiError: any failed call; ``message`` is safe to show to the user
- AuthenticationError: credentials or token rejected (401/403)
- NotFoundError: the requested resource does not exist (404)
- TransportError: the request never produced an HTTP response
"""

from __future__ import annotations

from typing import Any, Protocol

from webmonitor.domain.entities import LoginResult, Project, User


class ApiError(Exception):
    """A backend call failed.

    ``server_message`` is the backend's own ``message`` field, when it sent one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_message = server_message


class AuthenticationError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class TransportError(ApiError):
    pass


def display_message(err: Exception, fallback: str) -> str:
    """Text to show for a failed call: the backend's message, else the fallback."""
    if isinstance(err, ApiError) and err.server_message:
        return err.server_message
    return fallback


class AlertsApiPort(Protocol):
    """Thin typed wrapper over the backend endpoints."""

    def login(self, identifier: str, password: str) -> LoginResult: ...

    def signup(self, name: str, identifier: str, password: str) -> User | None: ...

    def current_user(self) -> User: ...

    def create_project(self, project_name: str, email: str, limit: int) -> Project: ...

    def list_projects(self, user_id: str) -> list[Project]: ...

    def get_project(self, project_id: str) -> Project: ...

    def update_project(self, project_id: str, changes: dict[str, Any]) -> Project:
        """Send a partial update; keys are wire names (projectName, email, limit)."""
        ...

    def delete_project(self, project_id: str) -> None: ...

    def regenerate_key(self, project_id: str) -> Project: ...

    def report_alert(self, key: str) -> None:
        """Report a crash for the project owning ``key``. Increments its count."""
        ...

    def close(self) -> None:
        """Release the underlying connection pool."""
        ...
