from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from webmonitor.adapters.token_storage import InMemoryStorage
from webmonitor.domain.entities import LoginResult, Project, User
from webmonitor.ports.api import ApiError, AuthenticationError, NotFoundError
from webmonitor.rules.loader import load_rules
from webmonitor.ui.context import ServiceContext

TOKEN_KEY = "token"


class FakeAlertsApi:
    """
    In-memory alerts backend implementing AlertsApiPort.

    Every call is appended to ``calls``. ``failures`` maps a method name to
    the exception it raises next; ``before_call`` runs ahead of every call
    (used to dispose a view while its request is "in flight").
    """

    def __init__(self, storage: InMemoryStorage | None = None) -> None:
        self.storage = storage or InMemoryStorage()
        self.accounts: dict[str, tuple[str, User]] = {}
        self.tokens: dict[str, User] = {}
        self.projects: dict[str, Project] = {}
        self.owners: dict[str, str] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.failures: dict[str, Exception] = {}
        self.before_call: Callable[[str], None] | None = None
        self.closed = False
        self._seq = 0

    # --- helpers ---

    def _next_id(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}{self._seq}"

    def _enter(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.before_call is not None:
            self.before_call(name)
        if name in self.failures:
            raise self.failures.pop(name)

    def called(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    def add_account(self, identifier: str, password: str, name: str = "Tester") -> User:
        user = User(id=self._next_id("u"), identifier=identifier, email=identifier, name=name)
        self.accounts[identifier] = (password, user)
        return user

    def issue_token(self, user: User) -> str:
        token = f"tok-{user.id}-{self._next_id('t')}"
        self.tokens[token] = user
        return token

    def add_project(self, owner: User, name: str = "Site", limit: int = 10, count: int = 0) -> Project:
        project = Project(
            id=self._next_id("p"),
            project_name=name,
            email="alerts@example.com",
            limit=limit,
            count=count,
            key=self._next_id("key-"),
            created_at=datetime(2025, 1, 1, tzinfo=UTC),
        )
        self.projects[project.id] = project
        self.owners[project.id] = owner.id
        return project

    def _require(self, project_id: str) -> Project:
        if project_id not in self.projects:
            raise NotFoundError("Alert not found", 404, "Alert not found")
        return self.projects[project_id]

    # --- AlertsApiPort ---

    def login(self, identifier: str, password: str) -> LoginResult:
        self._enter("login", identifier)
        account = self.accounts.get(identifier)
        if account is None or account[0] != password:
            raise AuthenticationError("Invalid credentials", 401, "Invalid credentials")
        return LoginResult(token=self.issue_token(account[1]), user=account[1])

    def signup(self, name: str, identifier: str, password: str) -> User | None:
        self._enter("signup", name, identifier)
        if identifier in self.accounts:
            raise ApiError("User already exists", 400, "User already exists")
        return self.add_account(identifier, password, name=name)

    def current_user(self) -> User:
        self._enter("current_user")
        token = self.storage.get(TOKEN_KEY)
        if not token or token not in self.tokens:
            raise AuthenticationError("Unauthorized", 401, "Unauthorized")
        return self.tokens[token]

    def create_project(self, project_name: str, email: str, limit: int) -> Project:
        self._enter("create_project", project_name, email, limit)
        owner = self.current_user()
        project = self.add_project(owner, name=project_name, limit=limit)
        project = project.model_copy(update={"email": email})
        self.projects[project.id] = project
        return project

    def list_projects(self, user_id: str) -> list[Project]:
        self._enter("list_projects", user_id)
        return [p for pid, p in self.projects.items() if self.owners[pid] == user_id]

    def get_project(self, project_id: str) -> Project:
        self._enter("get_project", project_id)
        return self._require(project_id)

    def update_project(self, project_id: str, changes: dict[str, Any]) -> Project:
        self._enter("update_project", project_id, dict(changes))
        project = self._require(project_id)
        update: dict[str, Any] = {}
        if "projectName" in changes:
            update["project_name"] = changes["projectName"]
        if "email" in changes:
            update["email"] = changes["email"]
        if "limit" in changes:
            update["limit"] = changes["limit"]
        project = project.model_copy(update=update)
        self.projects[project_id] = project
        return project

    def delete_project(self, project_id: str) -> None:
        self._enter("delete_project", project_id)
        self._require(project_id)
        del self.projects[project_id]
        del self.owners[project_id]

    def regenerate_key(self, project_id: str) -> Project:
        self._enter("regenerate_key", project_id)
        project = self._require(project_id).model_copy(update={"key": self._next_id("key-")})
        self.projects[project_id] = project
        return project

    def report_alert(self, key: str) -> None:
        self._enter("report_alert", key)
        for pid, project in self.projects.items():
            if project.key == key:
                self.projects[pid] = project.model_copy(update={"count": project.count + 1})
                return
        raise NotFoundError("Invalid key", 404, "Invalid key")

    def close(self) -> None:
        self.closed = True


class ManualScheduler:
    """Collects delayed callbacks; tests fire them explicitly."""

    def __init__(self) -> None:
        self.pending: list[tuple[float, Callable[[], None]]] = []

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self.pending.append((delay_seconds, callback))

    def run_all(self) -> None:
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


class RecordingNavigator:
    def __init__(self) -> None:
        self.routes: list[str] = []

    def go(self, route: str) -> None:
        self.routes.append(route)

    @property
    def last(self) -> str | None:
        return self.routes[-1] if self.routes else None


class RecordingClipboard:
    def __init__(self) -> None:
        self.contents: list[str] = []

    def set_clipboard(self, text: str) -> None:
        self.contents.append(text)


@pytest.fixture
def rules():
    rules_path = Path(__file__).parent.parent / "rules.yaml"
    return load_rules(rules_path, env={})


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def api(storage):
    return FakeAlertsApi(storage)


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def clipboard():
    return RecordingClipboard()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def user(api):
    return api.add_account("dev@example.com", "secret", name="Dev")


@pytest.fixture
def ctx(rules, storage, api, navigator, scheduler):
    return ServiceContext.create(rules, storage, navigator, api=api, scheduler=scheduler)


@pytest.fixture
def signed_in_ctx(ctx, user):
    """Context whose session is ready with ``user`` signed in."""
    ctx.storage.set(TOKEN_KEY, ctx.api.issue_token(user))
    ctx.session.initialize()
    return ctx
