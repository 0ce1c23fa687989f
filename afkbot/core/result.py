"""Result pattern for the handshake state machine.

Provides a type-safe way to report success and failure without letting
exceptions unwind through the orchestrator.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass
class Success(Generic[T]):
    """Represents a successful result."""

    value: T

    def is_success(self) -> bool:
        """Check if result is successful."""
        return True

    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return False

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass
class Failure(Generic[E]):
    """Represents a failed result."""

    error: str
    exception: Optional[Exception] = None

    def is_success(self) -> bool:
        """Check if result is successful."""
        return False

    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return True

    def __repr__(self) -> str:
        if self.exception:
            return f"Failure(error={self.error!r}, exception={type(self.exception).__name__})"
        return f"Failure(error={self.error!r})"


# Type alias for Result
Result = Union[Success[T], Failure[E]]


def ok(value: T) -> Success[T]:
    """Create a successful result."""
    return Success(value)


def err(error: str, exception: Optional[Exception] = None) -> Failure[str]:
    """
    Create a failed result.

    Args:
        error: Error message
        exception: Optional exception object

    Returns:
        Failure result
    """
    return Failure(error, exception)
