"""
End-to-end journey through the real HTTP adapter.

A small in-process backend stands in for the alerts service behind
httpx.MockTransport; everything above the transport is production code.
"""

import json
import re
from itertools import count

import httpx
import pytest

from webmonitor.adapters.http_api import HttpAlertsApi
from webmonitor.adapters.token_storage import JsonFileStorage
from webmonitor.ui.context import ServiceContext
from webmonitor.ui.viewmodels.auth_forms import LoginFormModel, SignupFormModel
from webmonitor.ui.viewmodels.create_project import CreateProjectModel
from webmonitor.ui.viewmodels.project_detail import ProjectDetailModel
from webmonitor.ui.viewmodels.project_list import ProjectListModel


class Backend:
    def __init__(self) -> None:
        self.users: dict[str, dict] = {}
        self.tokens: dict[str, str] = {}
        self.alerts: dict[str, dict] = {}
        self._ids = count(1)

    def _user_for(self, request: httpx.Request) -> dict | None:
        header = request.headers.get("Authorization", "")
        token = header.removeprefix("Bearer ")
        user_id = self.tokens.get(token)
        return next((u for u in self.users.values() if u["_id"] == user_id), None)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else {}

        if path == "/auth/signup":
            if body["identifier"] in self.users:
                return httpx.Response(400, json={"message": "User already exists"})
            user = {"_id": f"u{next(self._ids)}", "identifier": body["identifier"], "name": body["name"]}
            self.users[body["identifier"]] = {**user, "password": body["password"]}
            return httpx.Response(201, json={"message": "User created"})

        if path == "/auth/login":
            user = self.users.get(body["identifier"])
            if not user or user["password"] != body["password"]:
                return httpx.Response(401, json={"message": "Invalid credentials"})
            token = f"t{next(self._ids)}"
            self.tokens[token] = user["_id"]
            public = {k: v for k, v in user.items() if k != "password"}
            return httpx.Response(200, json={"token": token, "user": public})

        if path.startswith("/alerts/report/"):
            key = path.rsplit("/", 1)[-1]
            for alert in self.alerts.values():
                if alert["key"] == key:
                    alert["count"] += 1
                    return httpx.Response(200, json={"message": "Alert reported"})
            return httpx.Response(404, json={"message": "Invalid key"})

        user = self._user_for(request)
        if user is None:
            return httpx.Response(401, json={"message": "Unauthorized"})

        if path == "/auth/me":
            return httpx.Response(200, json={k: v for k, v in user.items() if k != "password"})

        if path == "/alerts/create":
            alert_id = f"a{next(self._ids)}"
            self.alerts[alert_id] = {
                "_id": alert_id,
                "owner": user["_id"],
                "projectName": body["projectName"],
                "email": body["email"],
                "limit": body["limit"],
                "count": 0,
                "key": f"key{next(self._ids)}",
                "createdAt": "2025-01-01T00:00:00.000Z",
            }
            return httpx.Response(201, json=self.alerts[alert_id])

        if match := re.fullmatch(r"/alerts/get-all/(\w+)", path):
            return httpx.Response(
                200, json=[a for a in self.alerts.values() if a["owner"] == match.group(1)]
            )

        if match := re.fullmatch(r"/alerts/(\w+)/regenerate-key", path):
            alert = self.alerts[match.group(1)]
            alert["key"] = f"key{next(self._ids)}"
            return httpx.Response(200, json={"alert": alert})

        if match := re.fullmatch(r"/alerts/(\w+)", path):
            alert = self.alerts.get(match.group(1))
            if alert is None:
                return httpx.Response(404, json={"message": "Alert not found"})
            if request.method == "GET":
                return httpx.Response(200, json=alert)
            if request.method == "PUT":
                alert.update(body)
                return httpx.Response(200, json={"alert": alert})
            if request.method == "DELETE":
                del self.alerts[match.group(1)]
                return httpx.Response(200, json={"message": "Deleted"})

        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def backend():
    return Backend()


@pytest.fixture
def make_ctx(rules, tmp_path, backend, navigator, scheduler):
    storage_path = tmp_path / "client_storage.json"

    def factory():
        storage = JsonFileStorage(storage_path)
        api = HttpAlertsApi(
            rules.api.base_url, storage, transport=httpx.MockTransport(backend)
        )
        return ServiceContext.create(rules, storage, navigator, api=api, scheduler=scheduler)

    return factory


def test_full_journey(make_ctx, backend, navigator, clipboard, scheduler):
    ctx = make_ctx()
    ctx.session.initialize()
    assert ctx.session.user is None

    # Sign up, then log in
    signup = SignupFormModel(ctx.session, navigator)
    signup.name, signup.identifier, signup.password = "Dev", "dev@example.com", "pw"
    assert signup.submit()
    assert navigator.last == "/login?registered=true"

    login = LoginFormModel(ctx.session, navigator, registered=True)
    login.identifier, login.password = "dev@example.com", "pw"
    assert login.submit()
    assert navigator.last == "/"

    # Create a project from the dashboard
    listing = ProjectListModel(ctx.state, ctx.api, navigator)
    listing.mount()
    assert listing.projects == []

    dialog = CreateProjectModel(ctx.api, on_created=listing.on_project_created)
    dialog.open()
    dialog.name, dialog.email, dialog.limit = "Shop", "ops@example.com", "2"
    assert dialog.submit()
    assert [p.project_name for p in listing.projects] == ["Shop"]
    project_id = listing.projects[0].id

    # Work with it on the detail view
    detail = ProjectDetailModel(
        ctx.state, ctx.api, project_id,
        navigator=navigator, clipboard=clipboard, scheduler=scheduler,
        report_url=ctx.rules.api.report_url,
    )
    detail.mount()
    detail.start_edit()
    detail.set_field("limit", "3")
    assert detail.save()
    assert backend.alerts[project_id]["limit"] == 3

    old_key = detail.project.key
    assert detail.regenerate_key()
    assert detail.project.key == backend.alerts[project_id]["key"] != old_key

    assert detail.send_test_alert()
    assert detail.project.count == backend.alerts[project_id]["count"] == 1

    detail.request_delete()
    assert detail.confirm_delete()
    assert project_id not in backend.alerts


def test_session_survives_restart(make_ctx, backend):
    backend.users["dev"] = {"_id": "u1", "identifier": "dev", "password": "pw"}
    first = make_ctx()
    first.session.initialize()
    first.session.login("dev", "pw")

    second = make_ctx()
    second.session.initialize()

    assert second.session.user is not None
    assert second.session.user.id == "u1"


def test_revoked_token_is_purged_on_restart(make_ctx, backend):
    backend.users["dev"] = {"_id": "u1", "identifier": "dev", "password": "pw"}
    first = make_ctx()
    first.session.initialize()
    first.session.login("dev", "pw")
    backend.tokens.clear()

    second = make_ctx()
    second.session.initialize()

    assert second.session.user is None
    assert second.storage.get("token") is None
