"""
Pytest configuration and fixtures
"""

import pytest
from requests.structures import CaseInsensitiveDict

from tgsctl.core import ApplicationInfo, PersistenceManager


class FakeResponse:
    """Minimal stand-in for requests.Response"""

    def __init__(self, status_code=200, json_data=None, reason="OK", url=""):
        self.status_code = status_code
        self._json_data = json_data
        self.reason = reason
        self.url = url

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json_data is None:
            raise ValueError("No JSON body")
        return self._json_data


class FakeHttpSession:
    """
    Records requests and answers them from a routing table

    Routes map (method, path) to a FakeResponse, a list of responses
    (served in order), or an exception to raise.
    """

    def __init__(self, base_url="https://tgs.example.org"):
        self.base_url = base_url
        self.headers = CaseInsensitiveDict()
        self.verify = True
        self.routes = {}
        self.calls = []

    def add(self, method, path, response):
        self.routes[(method, path)] = response

    def request(self, method, url, headers=None, timeout=None, **kwargs):
        path = url[len(self.base_url):]
        self.calls.append(
            {"method": method, "path": path, "headers": dict(headers or {}), "timeout": timeout, **kwargs}
        )
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(404, {"message": "Not found"}, reason="Not Found", url=url)
        if isinstance(route, list):
            route = route.pop(0)
        if isinstance(route, Exception):
            raise route
        route.url = url
        return route


@pytest.fixture
def app_info(tmp_path):
    """Application info rooted in a temporary directory"""
    base_path = tmp_path / "tgsctl"
    base_path.mkdir()
    return ApplicationInfo(base_path)


@pytest.fixture
def persistence(app_info):
    """Persistence registry writing under the temporary base path"""
    return PersistenceManager(app_info)


@pytest.fixture
def http():
    """Fake HTTP session for the API client"""
    return FakeHttpSession()
