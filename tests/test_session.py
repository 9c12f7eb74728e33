"""
Tests for SessionManager
"""

from datetime import datetime, timezone

import pytest

from tgsctl.core.errors import NotLoggedInError, SessionExpiredError
from tgsctl.core.schema import Preferences, SessionData
from tgsctl.core.session import SessionManager

from tests.conftest import FakeResponse


@pytest.fixture
def sessions(persistence, http):
    return SessionManager(persistence, http_session=http)


def test_login_caches_session(sessions, persistence, http):
    """Test login stores the token through the registry"""
    http.add("POST", "/api", FakeResponse(json_data={"bearer": "tok", "expiresAt": "2099-01-01T00:00:00Z"}))

    session = sessions.login(http.base_url + "/", "admin", "pw")

    assert session.server_url == http.base_url
    stored = persistence.read(SessionData)
    assert stored == session
    assert stored.token == "tok"


def test_login_uses_preferences(sessions, persistence, http):
    """Test timeout and TLS settings come from preferences"""
    persistence.write(Preferences(timeout=5, verify_tls=False))
    http.add("POST", "/api", FakeResponse(json_data={"bearer": "tok"}))

    sessions.login(http.base_url, "admin", "pw")

    assert http.calls[0]["timeout"] == 5
    assert http.verify is False


def test_not_logged_in(sessions):
    """Test a missing session is reported"""
    with pytest.raises(NotLoggedInError):
        sessions.client()


def test_expired_session(sessions, persistence):
    """Test an expired token is reported"""
    persistence.write(
        SessionData(
            server_url="https://tgs.example.org",
            token="old",
            expires_at=datetime(2000, 1, 1, tzinfo=timezone.utc),
        )
    )

    with pytest.raises(SessionExpiredError):
        sessions.client()


def test_client_uses_cached_token(sessions, persistence, http):
    """Test the client is built from the cached session"""
    persistence.write(SessionData(server_url=http.base_url, username="admin", token="tok"))

    client = sessions.client()

    assert client.token == "tok"
    assert client.server_url == http.base_url


def test_logout_clears_session(sessions, persistence):
    """Test logout writes an empty session"""
    persistence.write(SessionData(server_url="https://tgs.example.org", token="tok"))

    sessions.logout()

    assert persistence.read(SessionData) == SessionData()
    with pytest.raises(NotLoggedInError):
        sessions.client()


def test_naive_expiry_is_utc():
    """Test expiry without a timezone is compared as UTC"""
    session = SessionData(token="t", server_url="x", expires_at=datetime(2000, 1, 1))

    assert session.is_expired() is True
    assert SessionData(token="t", server_url="x").is_expired() is False
