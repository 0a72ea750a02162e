"""Session management for the Ariston NET API."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime

import httpx

from . import api
from .const import DEFAULT_REQUEST_TIMEOUT
from .models import Session

_LOGGER = logging.getLogger(__name__)


class AristonSessionManager:
    """Own the authentication token of one device instance.

    The remote side is authoritative about token validity: a session is kept
    until a request made with it is refused, after which the next call to
    ``async_ensure_session`` logs in again.
    """

    def __init__(
        self,
        session: httpx.AsyncClient,
        username: str,
        password: str,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the session manager."""
        self._http = session
        self._username = username
        self._password = password
        self._request_timeout = request_timeout
        self._session: Session | None = None
        self._lock = asyncio.Lock()

    @property
    def session(self) -> Session | None:
        """Return the live session, if any."""
        if self._session is not None and self._session.valid:
            return self._session
        return None

    @property
    def has_session(self) -> bool:
        """Return True if a valid session exists."""
        return self.session is not None

    async def async_ensure_session(self) -> Session:
        """Return a valid session, logging in if none exists.

        Concurrent callers share a single login.

        Raises:
            AristonApiAuthError: If login fails. A previous session is left
                untouched.

        """
        if (session := self.session) is not None:
            return session

        async with self._lock:
            if (session := self.session) is not None:
                return session
            return await self._async_login()

    async def _async_login(self) -> Session:
        try:
            async with asyncio.timeout(self._request_timeout):
                token = await api.async_login(
                    self._http, self._username, self._password
                )
        except api.AristonApiAuthError:
            _LOGGER.warning("Login to Ariston NET refused")
            raise
        except api.AristonApiClientError as err:
            error_msg = f"Login failed: {err}"
            _LOGGER.warning("Login to Ariston NET failed: %s", err)
            raise api.AristonApiAuthError(error_msg) from err
        except (TimeoutError, httpx.RequestError) as err:
            error_msg = f"Connection error during login: {err}"
            _LOGGER.warning("Connection error during login: %s", err)
            raise api.AristonApiAuthError(error_msg) from err

        self._session = Session(token=token, obtained_at=datetime.now(UTC))
        _LOGGER.info("Logged in to Ariston NET")
        return self._session

    def invalidate(self, session: Session) -> None:
        """Mark ``session`` as refused by the API.

        Nothing happens if a newer session has replaced it meanwhile.
        """
        session.valid = False
        if self._session is session:
            self._session = None
            _LOGGER.info("Session token refused, a new login will be performed")
