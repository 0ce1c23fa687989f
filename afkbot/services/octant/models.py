"""Octant data models."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Credential:
    """An email/password pair from the accounts file."""

    email: str
    password: str = field(repr=False)


class PingStatus(str, Enum):
    """Classification of a single ping."""

    SUCCESS = "success"
    LOGICAL_FAILURE = "logical_failure"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class PingOutcome:
    """Result of one ping. Only ever logged, never stored."""

    status: PingStatus
    reason: Optional[str] = None
    payload: Any = None

    @property
    def ok(self) -> bool:
        return self.status is PingStatus.SUCCESS

    @classmethod
    def success(cls, payload: Any = None) -> "PingOutcome":
        return cls(PingStatus.SUCCESS, None, payload)

    @classmethod
    def logical_failure(cls, reason: str, payload: Any = None) -> "PingOutcome":
        return cls(PingStatus.LOGICAL_FAILURE, reason, payload)

    @classmethod
    def transport_failure(cls, reason: str) -> "PingOutcome":
        return cls(PingStatus.TRANSPORT_FAILURE, reason)


UNEXPECTED = "unexpected"


def _failure_reason(payload: Mapping[str, Any]) -> str:
    for key in ("reason", "message", "error"):
        value = payload.get(key)
        if value:
            return str(value)
    return json.dumps(payload, default=str)


def classify_ping_payload(payload: Any) -> PingOutcome:
    """
    Classify the decoded body of a ping response.

    - a mapping with a truthy ``success`` field is a success
    - a mapping without one is a logical failure
    - the literal ``true`` is a success
    - anything else is a logical failure with reason ``"unexpected"``

    Args:
        payload: Decoded JSON (or raw text) of the response

    Returns:
        PingOutcome
    """
    if isinstance(payload, Mapping):
        if payload.get("success"):
            return PingOutcome.success(payload)
        return PingOutcome.logical_failure(_failure_reason(payload), payload)
    if payload is True:
        return PingOutcome.success(payload)
    return PingOutcome.logical_failure(UNEXPECTED, payload)
