"""
HTTP adapter for the alerts backend.

Implements AlertsApiPort over httpx. The bearer token is read from token
storage on every request, so a login or logout takes effect immediately
without rebuilding the client.

No retries and no timeout policy beyond the httpx default: a failed call is
classified into the ApiError taxonomy and raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

import httpx

from webmonitor.domain.entities import LoginResult, Project, User
from webmonitor.ports.api import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    TransportError,
)
from webmonitor.ports.storage import TokenStoragePort

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class BearerTokenAuth(httpx.Auth):
    """Attach ``Authorization: Bearer <token>`` when a token is stored."""

    def __init__(self, storage: TokenStoragePort, token_key: str = TOKEN_KEY) -> None:
        self.storage = storage
        self.token_key = token_key

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self.storage.get(self.token_key)
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


def _server_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return

    status = response.status_code
    server_message = _server_message(response)
    message = server_message or f"Request failed with status {status}"
    if status in (401, 403):
        raise AuthenticationError(message, status, server_message)
    if status == 404:
        raise NotFoundError(message, status, server_message)
    raise ApiError(message, status, server_message)


def _unwrap_alert(data: Any) -> Project:
    # update and regenerate-key wrap the project as {"alert": {...}}
    if not isinstance(data, dict) or "alert" not in data:
        raise ApiError("Malformed response from server")
    return Project.model_validate(data["alert"])


class HttpAlertsApi:
    def __init__(
        self,
        base_url: str,
        storage: TokenStoragePort,
        *,
        token_key: str = TOKEN_KEY,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            auth=BearerTokenAuth(storage, token_key),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        try:
            response = self._client.request(method, path, json=json)
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise TransportError(f"Could not reach the server: {e}") from e

        _raise_for_status(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Malformed response from server", response.status_code) from e

    # --- Auth ---

    def login(self, identifier: str, password: str) -> LoginResult:
        data = self._request(
            "POST", "/auth/login", json={"identifier": identifier, "password": password}
        )
        return LoginResult.model_validate(data)

    def signup(self, name: str, identifier: str, password: str) -> User | None:
        data = self._request(
            "POST",
            "/auth/signup",
            json={"name": name, "identifier": identifier, "password": password},
        )
        if isinstance(data, dict) and data.get("user"):
            return User.model_validate(data["user"])
        return None

    def current_user(self) -> User:
        return User.model_validate(self._request("GET", "/auth/me"))

    # --- Projects ---

    def create_project(self, project_name: str, email: str, limit: int) -> Project:
        data = self._request(
            "POST",
            "/alerts/create",
            json={"projectName": project_name, "email": email, "limit": limit},
        )
        return Project.model_validate(data)

    def list_projects(self, user_id: str) -> list[Project]:
        data = self._request("GET", f"/alerts/get-all/{user_id}")
        return [Project.model_validate(item) for item in data or []]

    def get_project(self, project_id: str) -> Project:
        return Project.model_validate(self._request("GET", f"/alerts/{project_id}"))

    def update_project(self, project_id: str, changes: dict[str, Any]) -> Project:
        data = self._request("PUT", f"/alerts/{project_id}", json=changes)
        return _unwrap_alert(data)

    def delete_project(self, project_id: str) -> None:
        self._request("DELETE", f"/alerts/{project_id}")

    def regenerate_key(self, project_id: str) -> Project:
        data = self._request("PUT", f"/alerts/{project_id}/regenerate-key")
        return _unwrap_alert(data)

    def report_alert(self, key: str) -> None:
        self._request("POST", f"/alerts/report/{key}")
