"""Octant endpoint paths and browser header values."""

from typing import Dict, Final


class Endpoints:
    """Octant API endpoints, relative to the configured base URLs."""

    GATEWAY_BASE: Final[str] = "https://gateway.octant.sh"
    HOSTING_BASE: Final[str] = "https://hosting.octant.sh"

    # gateway
    LOGIN: Final[str] = "/api/auth/login"
    LOGIN_PAGE: Final[str] = "/auth/login?intent=auth&target=Octant%2FHosting"

    # hosting
    AUTH_CALLBACK: Final[str] = "/auth/callback"
    AFK_START: Final[str] = "/api/afk/start"
    AFK_PING: Final[str] = "/api/afk/ping"
    AFK_DASHBOARD: Final[str] = "/dashboard/afk"

    TOKEN_COOKIE: Final[str] = "octant_token"


class BrowserHeaders:
    """Headers that make requests look like the mobile web dashboard."""

    USER_AGENT: Final[str] = (
        "Mozilla/5.0 (Linux; Android 10; RMX2151) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Version/4.0 Chrome/134.0.6998.39 "
        "Webvium Dev/2.9-dev Mobile Safari/537.36"
    )

    CLIENT_HINTS: Final[Dict[str, str]] = {
        "sec-ch-ua": 'Not A;Brand";v="99", "Chromium";v="101"',
        "sec-ch-ua-mobile": "?1",
        "sec-ch-ua-platform": '"Android"',
    }
