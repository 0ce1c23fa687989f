"""Custom exception classes for the AFK bot."""

from typing import Any, Mapping, Optional


class AfkBotError(Exception):
    """Base exception for the AFK bot."""

    def __init__(self, message: str):
        """
        Initialize AFK bot error.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(self.message)


class FileAccessError(AfkBotError):
    """Accounts file could not be read or written."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"Cannot access accounts file: {path}")


class InvalidStateError(AfkBotError):
    """A session agent operation was called in the wrong state."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while agent is {state}")


class HandshakeError(AfkBotError):
    """One of the login handshake steps failed.

    Fatal for the agent that raised it, never for the process.
    """

    step = "handshake"

    def __init__(self, message: str, account: str = ""):
        self.account = account
        super().__init__(message)


class AuthenticationError(HandshakeError):
    """Login failed or returned no token."""

    step = "authenticate"


class CallbackError(HandshakeError):
    """Authentication callback was rejected."""

    step = "confirm_callback"


class SessionOpenError(HandshakeError):
    """AFK session could not be started."""

    step = "open_session"


class ApiResponseError(AfkBotError):
    """Octant answered with a non-2xx status."""

    def __init__(
        self,
        status: int,
        url: str = "",
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ):
        """
        Initialize API response error.

        Args:
            status: HTTP status code
            url: Requested URL
            headers: Response headers
            body: Decoded response body (JSON or text)
        """
        self.status = status
        self.url = url
        self.headers = dict(headers or {})
        self.body = body
        super().__init__(f"Request to {url or 'Octant'} failed with status {status}")
