"""Octant API Client - Main client implementation."""

from typing import Any, Dict, Optional

import aiohttp
from loguru import logger

from ...constants import BrowserHeaders, Endpoints, Timeouts
from ...core.config import AfkSettings, get_settings
from ...core.exceptions import ApiResponseError


class OctantClient:
    """
    Direct API client for the Octant gateway and hosting dashboard.

    Each account gets its own client so cookies and connections are never
    shared between accounts.
    """

    def __init__(self, settings: Optional[AfkSettings] = None):
        """
        Initialize Octant API client.

        Args:
            settings: Application settings (defaults to the global settings)
        """
        self.settings = settings or get_settings()
        self.gateway_base = self.settings.gateway_base
        self.hosting_base = self.settings.hosting_base
        self._http_session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self._init_http_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _init_http_session(self) -> None:
        """Initialize HTTP session."""
        if self._http_session is None:
            timeout = aiohttp.ClientTimeout(
                total=self.settings.request_timeout,
                connect=Timeouts.HTTP_CONNECT_SECONDS,
            )
            self._http_session = aiohttp.ClientSession(
                headers={"User-Agent": self.settings.user_agent},
                timeout=timeout,
            )
            logger.debug("HTTP session initialized")

    async def close(self) -> None:
        """Close HTTP session."""
        if self._http_session:
            await self._http_session.close()
            self._http_session = None

    @property
    def closed(self) -> bool:
        return self._http_session is None

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Get HTTP session, raising error if not initialized."""
        if self._http_session is None:
            raise RuntimeError("HTTP session not initialized. Call _init_http_session() first.")
        return self._http_session

    def _hosting_headers(self, token: str) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Cookie": f"{Endpoints.TOKEN_COOKIE}={token}",
            "Origin": self.hosting_base,
            "Referer": f"{self.hosting_base}{Endpoints.AFK_DASHBOARD}",
            "sec-fetch-dest": "empty",
            **BrowserHeaders.CLIENT_HINTS,
        }

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Any:
        """Decode a response body as JSON, falling back to plain text."""
        try:
            return await response.json(content_type=None)
        except ValueError:
            return await response.text(errors="replace")

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        """Raise ApiResponseError carrying the decoded body on non-2xx status."""
        if not 200 <= response.status < 300:
            raise ApiResponseError(
                status=response.status,
                url=str(response.url),
                headers=response.headers,
                body=await self._read_body(response),
            )

    async def _check(self, response: aiohttp.ClientResponse) -> Any:
        """Return the decoded body, raising ApiResponseError on non-2xx status."""
        await self._raise_for_status(response)
        return await self._read_body(response)

    async def login(self, email: str, password: str) -> Any:
        """
        Login to the Octant gateway.

        Args:
            email: Account email
            password: Account password

        Returns:
            Decoded login response (expected to carry a ``token`` field)

        Raises:
            ApiResponseError: On non-2xx status
            aiohttp.ClientError: On transport errors
        """
        await self._init_http_session()
        async with self._session.post(
            f"{self.gateway_base}{Endpoints.LOGIN}",
            json={"email": email, "password": password},
            headers={
                "Content-Type": "application/json",
                "Origin": self.gateway_base,
                "Referer": f"{self.gateway_base}{Endpoints.LOGIN_PAGE}",
                **BrowserHeaders.CLIENT_HINTS,
            },
        ) as response:
            return await self._check(response)

    async def auth_callback(self, token: str) -> None:
        """
        Hand the gateway token to the hosting dashboard.

        Only the status matters; a successful reply body is never decoded.

        Args:
            token: Token returned by login
        """
        await self._init_http_session()
        async with self._session.get(
            f"{self.hosting_base}{Endpoints.AUTH_CALLBACK}",
            params={"token": token},
            headers={"Referer": f"{self.gateway_base}/", **BrowserHeaders.CLIENT_HINTS},
            allow_redirects=True,
            max_redirects=self.settings.max_redirects,
        ) as response:
            await self._raise_for_status(response)

    async def start_afk(self, token: str) -> Any:
        """
        Start an AFK session.

        Args:
            token: Token returned by login

        Returns:
            Decoded response (expected to carry a ``sessionId`` field)
        """
        await self._init_http_session()
        async with self._session.post(
            f"{self.hosting_base}{Endpoints.AFK_START}",
            json={},
            headers=self._hosting_headers(token),
        ) as response:
            return await self._check(response)

    async def ping_afk(self, token: str, session_id: str) -> Any:
        """
        Ping an AFK session.

        Args:
            token: Token returned by login
            session_id: Session id returned by start_afk

        Returns:
            Decoded response, unclassified
        """
        await self._init_http_session()
        async with self._session.post(
            f"{self.hosting_base}{Endpoints.AFK_PING}",
            json={"sessionId": session_id},
            headers=self._hosting_headers(token),
        ) as response:
            return await self._check(response)
