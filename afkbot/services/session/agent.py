"""Per-account session agent: login handshake and fixed-rate ping loop."""

import asyncio
from enum import Enum
from typing import Any, Mapping, Optional, Set

import aiohttp
from loguru import logger

from ...constants import Intervals
from ...core.config import AfkSettings, get_settings
from ...core.error_handler import log_api_error
from ...core.exceptions import (
    ApiResponseError,
    AuthenticationError,
    CallbackError,
    HandshakeError,
    InvalidStateError,
    SessionOpenError,
)
from ...core.logger import STATUS, colorize_json, escape_markup
from ...core.result import Result, err, ok
from ..octant.client import OctantClient
from ..octant.models import UNEXPECTED, Credential, PingOutcome, PingStatus, classify_ping_payload

# Errors raised by the client for a failed request
TRANSPORT_ERRORS = (ApiResponseError, aiohttp.ClientError, asyncio.TimeoutError)


class AgentState(str, Enum):
    """Lifecycle of a session agent."""

    FRESH = "fresh"
    AUTHENTICATED = "authenticated"
    CALLBACK_CONFIRMED = "callback_confirmed"
    SESSION_OPEN = "session_open"
    PINGING = "pinging"
    STOPPED = "stopped"


def _field(data: Any, name: str) -> Optional[str]:
    """Read a non-empty string field from a decoded response."""
    if not isinstance(data, Mapping):
        return None
    value = data.get(name)
    if value is None or value == "":
        return None
    return str(value)


class SessionAgent:
    """
    Owns one account: its token, its AFK session and its ping schedule.

    The handshake runs ``authenticate -> confirm_callback -> open_session``;
    each step only runs from the state the previous one leaves behind.
    ``start_pinging`` then fires ``ping`` at a fixed rate until
    ``stop_pinging`` is called.
    """

    def __init__(
        self,
        credential: Credential,
        client: Optional[OctantClient] = None,
        settings: Optional[AfkSettings] = None,
    ):
        """
        Initialize session agent.

        Args:
            credential: Account this agent logs in with
            client: Octant client (a dedicated one is created if omitted)
            settings: Application settings
        """
        self.credential = credential
        self.settings = settings or get_settings()
        self.client = client or OctantClient(self.settings)

        self.state = AgentState.FRESH
        self.token: Optional[str] = None
        self.session_id: Optional[str] = None
        self.ping_count = 0
        self.interval_ms = Intervals.PING_DEFAULT_MS

        self._ping_task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

    @property
    def account_id(self) -> str:
        return self.credential.email

    @property
    def is_pinging(self) -> bool:
        return self._ping_task is not None and not self._ping_task.done()

    def __repr__(self) -> str:
        return f"SessionAgent({self.account_id!r}, state={self.state.value})"

    def _require(self, operation: str, *states: AgentState) -> None:
        if self.state not in states:
            raise InvalidStateError(operation, self.state.value)

    # ------------------------------------------------------------------
    # Handshake
    # ------------------------------------------------------------------

    async def authenticate(self) -> str:
        """
        Log in and store the token.

        Returns:
            The authentication token

        Raises:
            AuthenticationError: On request failure or missing token
        """
        self._require("authenticate", AgentState.FRESH)
        try:
            data = await self.client.login(self.credential.email, self.credential.password)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Login failed for {self.account_id}!")
            log_api_error(e, self.account_id)
            raise AuthenticationError(f"Login request failed: {e}", self.account_id) from e

        token = _field(data, "token")
        if token is None:
            logger.error(f"Login failed for {self.account_id}!")
            raise AuthenticationError("No token received from login response", self.account_id)

        self.token = token
        self.state = AgentState.AUTHENTICATED
        return token

    async def confirm_callback(self) -> None:
        """
        Complete the two-step login on the hosting side.

        Raises:
            CallbackError: On any request failure
        """
        self._require("confirm callback", AgentState.AUTHENTICATED)
        try:
            await self.client.auth_callback(self.token)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Authentication callback failed for {self.account_id}!")
            log_api_error(e, self.account_id)
            raise CallbackError(f"Authentication callback failed: {e}", self.account_id) from e

        self.state = AgentState.CALLBACK_CONFIRMED

    async def open_session(self) -> str:
        """
        Start an AFK session and store its id.

        Returns:
            The session id

        Raises:
            SessionOpenError: On request failure or missing session id
        """
        self._require("open session", AgentState.CALLBACK_CONFIRMED)
        try:
            data = await self.client.start_afk(self.token)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Failed to start AFK session for {self.account_id}!")
            log_api_error(e, self.account_id)
            raise SessionOpenError(f"AFK start request failed: {e}", self.account_id) from e

        session_id = _field(data, "sessionId")
        if session_id is None:
            logger.error(f"Failed to start AFK session for {self.account_id}!")
            raise SessionOpenError("No sessionId received from AFK start response", self.account_id)

        self.session_id = session_id
        self.state = AgentState.SESSION_OPEN
        return session_id

    async def initialize(self) -> Result:
        """
        Run the whole handshake. No step is retried.

        Never raises: any error from a step fails this agent only.

        Returns:
            Success(session_id), or Failure carrying the HandshakeError
        """
        logger.info(f"Initializing bot for {self.account_id}...")
        try:
            await self.authenticate()
            await self.confirm_callback()
            await self.open_session()
        except HandshakeError as e:
            logger.error(f"Failed to initialize bot for {self.account_id}!")
            return err(e.message, e)
        except Exception as e:
            log_api_error(e, self.account_id)
            logger.error(f"Failed to initialize bot for {self.account_id}!")
            error = HandshakeError(f"Unexpected error during handshake: {e}", self.account_id)
            error.__cause__ = e
            return err(error.message, error)

        logger.success(f"Bot ready for {self.account_id} (Session: {self.session_id[:8]}...)")
        return ok(self.session_id)

    # ------------------------------------------------------------------
    # Pinging
    # ------------------------------------------------------------------

    async def ping(self) -> PingOutcome:
        """
        Ping the AFK session once.

        Never raises for request failures: every outcome is classified and
        logged, and the count goes up whatever happens.

        Returns:
            PingOutcome
        """
        self._require("ping", AgentState.SESSION_OPEN, AgentState.PINGING, AgentState.STOPPED)
        self.ping_count += 1
        count = self.ping_count
        prefix = f"[{self.account_id}] Ping #{count}"

        try:
            payload = await self.client.ping_afk(self.token, self.session_id)
        except TRANSPORT_ERRORS as e:
            logger.error(f"{prefix} failed!")
            log_api_error(e, self.account_id)
            return PingOutcome.transport_failure(str(e) or type(e).__name__)

        if self.settings.show_raw_responses:
            logger.opt(colors=True).info(
                f"{escape_markup(prefix)} raw response: {colorize_json(payload)}"
            )

        outcome = classify_ping_payload(payload)
        if outcome.status is PingStatus.SUCCESS:
            logger.log(STATUS, f"{prefix} successful")
        elif outcome.reason == UNEXPECTED:
            logger.warning(f"{prefix} unexpected: {payload!r}")
        else:
            logger.warning(f"{prefix} failed: {outcome.reason}")
        return outcome

    async def _run_ping(self) -> None:
        try:
            await self.ping()
        except Exception as e:
            logger.opt(exception=e).error(
                f"[{self.account_id}] Ping #{self.ping_count} crashed: {e}"
            )

    async def _ping_loop(self, interval: float) -> None:
        """Fire a ping every ``interval`` seconds without waiting for the last one."""
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + interval
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            task = loop.create_task(self._run_ping())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)

            now = loop.time()
            next_tick += interval
            if next_tick <= now:
                next_tick = now + interval

    def start_pinging(self, interval_ms: Optional[int] = None) -> None:
        """
        Start (or restart) the fixed-rate ping schedule.

        Resets ``ping_count`` and replaces any schedule already running.
        Must be called from inside the event loop.

        Args:
            interval_ms: Ping interval in milliseconds (default 1000)
        """
        self._require("start pinging", AgentState.SESSION_OPEN, AgentState.PINGING)
        if interval_ms is None:
            interval_ms = Intervals.PING_DEFAULT_MS
        if interval_ms < Intervals.PING_MIN_MS:
            raise ValueError(f"interval_ms must be >= {Intervals.PING_MIN_MS}, got {interval_ms}")

        self._cancel_schedule()
        self.interval_ms = interval_ms
        self.ping_count = 0
        self._ping_task = asyncio.get_running_loop().create_task(
            self._ping_loop(interval_ms / 1000), name=f"ping:{self.account_id}"
        )
        self.state = AgentState.PINGING

    def _cancel_schedule(self) -> bool:
        if self._ping_task is None:
            return False
        self._ping_task.cancel()
        self._ping_task = None
        return True

    def stop_pinging(self) -> None:
        """
        Cancel the ping schedule. Safe to call at any time.

        Pings already in flight are left to finish on their own.
        """
        if self._cancel_schedule():
            self.state = AgentState.STOPPED

    async def close(self) -> None:
        """
        Stop pinging and release the HTTP client.

        Pings still in flight are abandoned rather than left to fail against
        a closed session.
        """
        self.stop_pinging()
        for task in list(self._inflight):
            task.cancel()
        await self.client.close()
