import json

import httpx
import pytest

from webmonitor.adapters.http_api import HttpAlertsApi
from webmonitor.adapters.token_storage import InMemoryStorage
from webmonitor.ports.api import (
    ApiError,
    AuthenticationError,
    NotFoundError,
    TransportError,
    display_message,
)
from webmonitor.ui.context import ServiceContext

PROJECT = {
    "_id": "p1",
    "projectName": "Shop",
    "email": "ops@example.com",
    "limit": 5,
    "count": 2,
    "key": "k-1",
    "createdAt": "2025-01-01T00:00:00.000Z",
}


def make_api(handler, token=None):
    storage = InMemoryStorage({"token": token} if token else None)
    return HttpAlertsApi(
        "http://backend.test/", storage, transport=httpx.MockTransport(handler)
    ), storage


class Recorder:
    def __init__(self, status=200, body=None):
        self.status = status
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status)
        return httpx.Response(self.status, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class TestAuthorizationHeader:
    def test_attached_when_token_stored(self):
        recorder = Recorder(body=[])
        api, _ = make_api(recorder, token="abc")

        api.list_projects("u1")

        assert recorder.last.headers["Authorization"] == "Bearer abc"

    def test_absent_without_token(self):
        recorder = Recorder(body=[])
        api, _ = make_api(recorder)

        api.list_projects("u1")

        assert "Authorization" not in recorder.last.headers

    def test_reads_token_per_request(self):
        recorder = Recorder(body=[])
        api, storage = make_api(recorder)

        api.list_projects("u1")
        storage.set("token", "later")
        api.list_projects("u1")

        assert "Authorization" not in recorder.requests[0].headers
        assert recorder.requests[1].headers["Authorization"] == "Bearer later"


class TestEndpoints:
    def test_login(self):
        recorder = Recorder(body={"token": "t", "user": {"_id": "u1", "identifier": "dev"}})
        api, _ = make_api(recorder)

        result = api.login("dev", "pw")

        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/auth/login"
        assert json.loads(recorder.last.content) == {"identifier": "dev", "password": "pw"}
        assert result.token == "t"
        assert result.user.id == "u1"

    def test_signup_without_user_in_response(self):
        recorder = Recorder(status=201, body={"message": "User created"})
        api, _ = make_api(recorder)

        assert api.signup("Dev", "dev", "pw") is None
        assert recorder.last.url.path == "/auth/signup"

    def test_current_user(self):
        recorder = Recorder(body={"_id": "u1", "identifier": "dev", "email": "d@example.com"})
        api, _ = make_api(recorder, token="abc")

        user = api.current_user()

        assert recorder.last.url.path == "/auth/me"
        assert user.email == "d@example.com"

    def test_create_sends_wire_names(self):
        recorder = Recorder(status=201, body=PROJECT)
        api, _ = make_api(recorder, token="abc")

        project = api.create_project("Shop", "ops@example.com", 5)

        assert recorder.last.url.path == "/alerts/create"
        assert json.loads(recorder.last.content) == {
            "projectName": "Shop",
            "email": "ops@example.com",
            "limit": 5,
        }
        assert project.project_name == "Shop"
        assert project.created_at is not None

    def test_list_and_get(self):
        recorder = Recorder(body=[PROJECT])
        api, _ = make_api(recorder, token="abc")

        projects = api.list_projects("u1")
        assert recorder.last.url.path == "/alerts/get-all/u1"
        assert [p.id for p in projects] == ["p1"]

        recorder.body = PROJECT
        assert api.get_project("p1").key == "k-1"
        assert recorder.last.url.path == "/alerts/p1"

    def test_update_unwraps_alert(self):
        recorder = Recorder(body={"alert": {**PROJECT, "limit": 50}})
        api, _ = make_api(recorder, token="abc")

        project = api.update_project("p1", {"limit": 50})

        assert recorder.last.method == "PUT"
        assert json.loads(recorder.last.content) == {"limit": 50}
        assert project.limit == 50

    def test_update_rejects_unwrapped_body(self):
        api, _ = make_api(Recorder(body=PROJECT), token="abc")

        with pytest.raises(ApiError, match="Malformed"):
            api.update_project("p1", {"limit": 50})

    def test_regenerate_key(self):
        recorder = Recorder(body={"alert": {**PROJECT, "key": "k-2"}})
        api, _ = make_api(recorder, token="abc")

        project = api.regenerate_key("p1")

        assert recorder.last.url.path == "/alerts/p1/regenerate-key"
        assert project.key == "k-2"

    def test_delete_and_report_accept_empty_bodies(self):
        recorder = Recorder(status=204)
        api, _ = make_api(recorder, token="abc")

        api.delete_project("p1")
        assert recorder.last.method == "DELETE"

        api.report_alert("k-1")
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/alerts/report/k-1"


class TestErrors:
    @pytest.mark.parametrize(
        "status,error_type",
        [(401, AuthenticationError), (403, AuthenticationError), (404, NotFoundError), (500, ApiError)],
    )
    def test_status_mapping(self, status, error_type):
        api, _ = make_api(Recorder(status=status, body={"message": "nope"}))

        with pytest.raises(error_type) as info:
            api.get_project("p1")

        assert info.value.status_code == status
        assert info.value.server_message == "nope"

    def test_server_message_is_shown(self):
        api, _ = make_api(Recorder(status=400, body={"message": "Limit too high"}))

        with pytest.raises(ApiError) as info:
            api.create_project("Shop", "ops@example.com", 5000)

        assert display_message(info.value, "Failed to create project.") == "Limit too high"

    def test_fallback_when_no_server_message(self):
        api, _ = make_api(Recorder(status=500))

        with pytest.raises(ApiError) as info:
            api.get_project("p1")

        assert info.value.server_message is None
        assert display_message(info.value, "fallback") == "fallback"

    def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        api, _ = make_api(handler)

        with pytest.raises(TransportError):
            api.current_user()


def test_context_close_releases_http_client(rules):
    api, storage = make_api(Recorder(body=[]))
    ctx = ServiceContext.create(rules, storage, api=api)

    ctx.close()

    assert api._client.is_closed
