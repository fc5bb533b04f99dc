import json

import httpx
import pytest

from .main import RegistryAPIClient, RegistryAPIError


@pytest.fixture
def client():
    with RegistryAPIClient(base_url="http://registry.test/") as client:
        yield client


def test_fetch_schema(httpx_mock, client):
    httpx_mock.add_response(
        method="GET",
        url="http://registry.test/outcome/definition/7",
        json={"id": 7, "fields": [{"id": "notes", "label": "Notes", "type": "textarea"}]},
    )

    schema = client.fetch_schema("/outcome/definition/7")
    assert schema["id"] == 7
    assert schema["fields"][0]["id"] == "notes"


def test_fetch_schema_absolute_url(httpx_mock, client):
    httpx_mock.add_response(url="http://schemas.test/s.json", json={"id": 1, "fields": []})
    assert client.fetch_schema("http://schemas.test/s.json") == {"id": 1, "fields": []}


def test_get_json_raises_on_error_status(httpx_mock, client):
    httpx_mock.add_response(status_code=500, json={"error": "boom"})
    with pytest.raises(RegistryAPIError):
        client.get_json("/broken")


def test_get_json_raises_on_invalid_body(httpx_mock, client):
    httpx_mock.add_response(text="<html>not json</html>")
    with pytest.raises(RegistryAPIError, match="Invalid JSON"):
        client.get_json("/html")


def test_validate_outcome(httpx_mock, client):
    httpx_mock.add_response(
        method="POST",
        url="http://registry.test/outcome/validate",
        match_json={"outcome_definition_id": 3, "data": {"name": "Ada"}},
        json={"valid": True, "errors": []},
    )
    assert client.validate_outcome(3, {"name": "Ada"}) == {"valid": True, "errors": []}


def test_post_json_decodes_error_status_body(httpx_mock, client):
    httpx_mock.add_response(method="POST", status_code=400, json={"valid": False, "errors": []})
    assert client.post_json("/outcome/validate", {}) == {"valid": False, "errors": []}


def test_post_json_transport_error(httpx_mock, client):
    httpx_mock.add_exception(httpx.ConnectError("connection refused"))
    with pytest.raises(RegistryAPIError) as exc_info:
        client.post_json("/outcome/validate", {})
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_submit_attendance(httpx_mock, client, settings):
    settings.REGISTRY_ATTENDANCE_BASE = "/staff/"
    httpx_mock.add_response(
        method="POST",
        url="http://registry.test/staff/attendance/ev-1",
        json={"success": True, "total_marked": 2},
    )

    result = client.submit_attendance("ev-1", {"s1": "present", "s2": "absent"})
    assert result == {"success": True, "total_marked": 2}

    request = httpx_mock.get_requests()[0]
    assert json.loads(request.content) == {"s1": "present", "s2": "absent"}


@pytest.mark.parametrize(
    "event_id,path",
    [
        ("a/b", b"/teacher/attendance/a%2Fb"),
        ("ev?x=1", b"/teacher/attendance/ev%3Fx%3D1"),
        ("ev#2", b"/teacher/attendance/ev%232"),
        (42, b"/teacher/attendance/42"),
    ],
)
def test_submit_attendance_quotes_event_id(httpx_mock, client, event_id, path):
    httpx_mock.add_response(method="POST", json={"success": True, "total_marked": 0})

    client.submit_attendance(event_id, {})

    request = httpx_mock.get_requests()[0]
    assert request.url.raw_path == path
    assert request.url.query == b""


def test_post_form(httpx_mock, client):
    httpx_mock.add_response(method="POST", url="http://registry.test/event/1", text="<html>ok</html>")
    response = client.post_form("/event/1", {"name": "Ada", "agree": "1"})
    assert response.text == "<html>ok</html>"

    request = httpx_mock.get_requests()[0]
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert dict(httpx.QueryParams(request.content.decode())) == {"name": "Ada", "agree": "1"}
