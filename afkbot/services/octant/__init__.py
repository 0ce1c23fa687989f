"""Octant API client - login handshake and AFK session endpoints."""

from afkbot.services.octant.client import OctantClient
from afkbot.services.octant.models import (
    Credential,
    PingOutcome,
    PingStatus,
    classify_ping_payload,
)

__all__ = [
    "OctantClient",
    "Credential",
    "PingOutcome",
    "PingStatus",
    "classify_ping_payload",
]
