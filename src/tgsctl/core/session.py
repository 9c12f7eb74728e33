"""
Session handling - cached login tokens
"""

import logging
from typing import Optional

import requests

from .api import TgsClient
from .errors import NotLoggedInError, SessionExpiredError
from .persistence import PersistenceManager
from .schema import Preferences, SessionData

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Stores the login for the current server and builds authenticated clients

    The token is kept in session.json through the persistence registry.
    """

    def __init__(
        self,
        persistence: PersistenceManager,
        http_session: Optional[requests.Session] = None,
    ):
        self.persistence = persistence
        self._http_session = http_session

    def _new_client(self, server_url: str, token: Optional[str] = None) -> TgsClient:
        prefs = self.persistence.read(Preferences)
        return TgsClient(
            server_url,
            token=token,
            timeout=prefs.timeout,
            verify_tls=prefs.verify_tls,
            session=self._http_session,
        )

    def login(self, server_url: str, username: str, password: str) -> SessionData:
        """Log in and cache the token"""
        client = self._new_client(server_url)
        token = client.login(username, password)

        session = SessionData(
            server_url=client.server_url,
            username=username,
            token=token.bearer,
            expires_at=token.expires_at,
        )
        self.persistence.write(session)
        logger.debug(f"Logged in to {client.server_url} as {username}")
        return session

    def logout(self) -> None:
        """Forget the cached token"""
        self.persistence.write(SessionData())

    def current(self) -> SessionData:
        """Get the cached session, failing if it cannot be used"""
        session = self.persistence.read(SessionData)
        if not session.is_logged_in:
            raise NotLoggedInError("Not logged in. Run 'tgsctl login' first.")
        if session.is_expired():
            raise SessionExpiredError(
                f"Session for {session.server_url} has expired. Run 'tgsctl login' again."
            )
        return session

    def client(self) -> TgsClient:
        """Get an authenticated client for the cached session"""
        session = self.current()
        return self._new_client(session.server_url, token=session.token)
