"""
Thin client for the tgstation-server REST API

Only the calls the CLI commands need are implemented. Each method maps to
a single HTTP request.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from tgsctl import __version__

from .errors import ApiError
from .schema import ErrorMessage, InstanceInfo, InstancePage, JobInfo, TokenResponse

logger = logging.getLogger(__name__)

API_VERSION = "10.0.0"
API_HEADER = f"Tgstation.Server.Api/{API_VERSION}"
USER_AGENT = f"tgsctl/{__version__}"
DEFAULT_TIMEOUT = 30.0
PAGE_SIZE = 100


class TgsClient:
    """
    Client for one tgstation-server

    Features:
    - Basic-auth login returning a bearer token
    - Instance listing with paging
    - Dream Daemon control through InstanceClient
    """

    def __init__(
        self,
        server_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        verify_tls: bool = True,
        session: Optional[requests.Session] = None,
    ):
        self.server_url = str(server_url).rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify_tls
        self.session.headers.update(
            {
                "Api": API_HEADER,
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            }
        )

    def request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> requests.Response:
        """Send a request and raise ApiError on failure"""
        url = f"{self.server_url}{path}"
        request_headers = dict(headers or {})
        if self.token and "Authorization" not in request_headers and "auth" not in kwargs:
            request_headers["Authorization"] = f"Bearer {self.token}"

        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method, url, headers=request_headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise ApiError(f"Could not reach {self.server_url}: {e}") from e

        if not response.ok:
            raise ApiError(_error_message(response), status_code=response.status_code)
        return response

    # ===== Authentication =====

    def login(self, username: str, password: str) -> TokenResponse:
        """Exchange credentials for a bearer token"""
        response = self.request("POST", "/api", auth=(username, password))
        token = _parse(TokenResponse, response)
        self.token = token.bearer
        return token

    # ===== Instances =====

    def list_instances(self) -> List[InstanceInfo]:
        """Get all instances visible to the current user"""
        instances: List[InstanceInfo] = []
        page = 1
        while True:
            response = self.request(
                "GET",
                "/api/Instance/List",
                params={"page": page, "pageSize": PAGE_SIZE},
            )
            result = _parse(InstancePage, response)
            instances.extend(result.content)
            if page >= result.total_pages:
                return instances
            page += 1

    def instance(self, instance_id: int) -> "InstanceClient":
        return InstanceClient(self, instance_id)


class InstanceClient:
    """API calls scoped to one instance"""

    def __init__(self, api: TgsClient, instance_id: int):
        self.api = api
        self.instance_id = instance_id
        self.dream_daemon = DreamDaemonClient(self)

    def request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        headers = {"Instance": str(self.instance_id)}
        return self.api.request(method, path, headers=headers, **kwargs)


class DreamDaemonClient:
    """Game server (Dream Daemon) control"""

    def __init__(self, instance: InstanceClient):
        self.instance = instance

    def start(self) -> JobInfo:
        response = self.instance.request("PUT", "/api/DreamDaemon")
        return _parse(JobInfo, response)

    def stop(self) -> None:
        self.instance.request("DELETE", "/api/DreamDaemon")

    def restart(self) -> JobInfo:
        response = self.instance.request("PATCH", "/api/DreamDaemon")
        return _parse(JobInfo, response)


def _error_message(response: requests.Response) -> str:
    """Build a readable message from an error response"""
    try:
        body = ErrorMessage.model_validate(response.json())
    except (ValueError, ValidationError):
        body = ErrorMessage()

    if body.message:
        return f"{response.status_code}: {body.message}"
    return f"{response.status_code}: {response.reason or 'request failed'}"


def _parse(model, response: requests.Response):
    """Validate a JSON response body into a model"""
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise ApiError(
            f"Unexpected response from {response.url}: {e}",
            status_code=response.status_code,
        ) from e
