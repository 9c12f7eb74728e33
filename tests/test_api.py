"""
Tests for TgsClient
"""

import pytest
import requests

from tgsctl.core.api import API_HEADER, USER_AGENT, TgsClient
from tgsctl.core.errors import ApiError

from tests.conftest import FakeResponse


@pytest.fixture
def client(http):
    return TgsClient(http.base_url, token="secret", timeout=12, session=http)


def test_default_headers(http):
    """Test the API and user agent headers are set on the session"""
    TgsClient(http.base_url + "/", session=http, verify_tls=False)

    assert http.headers["Api"] == API_HEADER
    assert http.headers["User-Agent"] == USER_AGENT
    assert http.verify is False


def test_login_uses_basic_auth(http):
    """Test login posts credentials and keeps the token"""
    http.add("POST", "/api", FakeResponse(json_data={"bearer": "tok", "expiresAt": "2099-01-01T00:00:00Z"}))
    client = TgsClient(http.base_url, session=http)

    token = client.login("admin", "hunter2")

    assert token.bearer == "tok"
    assert token.expires_at.year == 2099
    assert client.token == "tok"
    call = http.calls[0]
    assert call["auth"] == ("admin", "hunter2")
    assert "Authorization" not in call["headers"]


def test_bearer_token_and_timeout(client, http):
    """Test authenticated requests carry the token"""
    http.add("GET", "/api/Instance/List", FakeResponse(json_data={"content": [], "totalPages": 1}))

    client.list_instances()

    call = http.calls[0]
    assert call["headers"]["Authorization"] == "Bearer secret"
    assert call["timeout"] == 12


def test_list_instances_pages(client, http):
    """Test all pages are fetched"""
    http.add(
        "GET",
        "/api/Instance/List",
        [
            FakeResponse(json_data={"content": [{"id": 1, "name": "Main", "online": True}], "totalPages": 2}),
            FakeResponse(json_data={"content": [{"id": 2, "name": "Test"}], "totalPages": 2}),
        ],
    )

    instances = client.list_instances()

    assert [i.id for i in instances] == [1, 2]
    assert instances[0].online is True
    assert [c["params"]["page"] for c in http.calls] == [1, 2]


def test_dream_daemon_start(client, http):
    """Test starting the daemon targets the instance"""
    http.add("PUT", "/api/DreamDaemon", FakeResponse(202, {"id": 44, "description": "Launch", "instanceId": 3}))

    job = client.instance(3).dream_daemon.start()

    assert job.id == 44
    assert job.instance_id == 3
    assert http.calls[0]["headers"]["Instance"] == "3"


def test_dream_daemon_stop_and_restart(client, http):
    """Test stop and restart use DELETE and PATCH"""
    http.add("DELETE", "/api/DreamDaemon", FakeResponse(204))
    http.add("PATCH", "/api/DreamDaemon", FakeResponse(202, {"id": 5}))

    daemon = client.instance(1).dream_daemon
    daemon.stop()
    job = daemon.restart()

    assert job.id == 5
    assert [c["method"] for c in http.calls] == ["DELETE", "PATCH"]


def test_error_response_message(client, http):
    """Test server error messages reach the ApiError"""
    http.add("PUT", "/api/DreamDaemon", FakeResponse(409, {"message": "Watchdog already running"}, reason="Conflict"))

    with pytest.raises(ApiError) as excinfo:
        client.instance(1).dream_daemon.start()

    assert excinfo.value.status_code == 409
    assert "Watchdog already running" in str(excinfo.value)


def test_error_response_without_body(client, http):
    """Test errors with no JSON body fall back to the reason"""
    http.add("GET", "/api/Instance/List", FakeResponse(401, reason="Unauthorized"))

    with pytest.raises(ApiError) as excinfo:
        client.list_instances()

    assert excinfo.value.status_code == 401
    assert "Unauthorized" in str(excinfo.value)


def test_connection_error(client, http):
    """Test transport failures become ApiError"""
    http.add("GET", "/api/Instance/List", requests.ConnectionError("refused"))

    with pytest.raises(ApiError) as excinfo:
        client.list_instances()

    assert excinfo.value.status_code is None


def test_unexpected_body(client, http):
    """Test a success response that cannot be parsed"""
    http.add("PUT", "/api/DreamDaemon", FakeResponse(200, {"unexpected": True}))

    with pytest.raises(ApiError):
        client.instance(1).dream_daemon.start()
