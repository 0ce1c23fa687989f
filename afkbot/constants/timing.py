"""Timing-related constants (timeouts, intervals)."""

from typing import Final


class Timeouts:
    """Timeout values in SECONDS."""

    HTTP_REQUEST_SECONDS: Final[float] = 30.0
    HTTP_CONNECT_SECONDS: Final[float] = 10.0


class Intervals:
    """Interval values - MILLISECONDS for the ping cadence."""

    PING_DEFAULT_MS: Final[int] = 1000
    PING_MIN_MS: Final[int] = 1
