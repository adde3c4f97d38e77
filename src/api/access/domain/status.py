"""Status taxonomy for access reconciliation outcomes.

Outcomes are returned as data instead of raised, so the webhook boundary can
always serialize a response body, even when reconciliation fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class StatusCode(IntEnum):
    """Closed set of outcome codes, mirroring the generic RPC status codes.

    OK is zero so that a falsy code means success.
    """

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


@dataclass(frozen=True)
class Outcome:
    """Result of an apply-update operation.

    Attributes:
        code: Status code, or None for success
        error_data: Human readable failure detail, only set on failure
    """

    code: StatusCode | None = None
    error_data: str | None = None

    def __post_init__(self) -> None:
        if not self.code and self.error_data is not None:
            raise ValueError("A successful outcome cannot carry error details")

    @classmethod
    def success(cls) -> Outcome:
        """Create a successful outcome with no code."""
        return cls()

    @classmethod
    def failure(cls, code: StatusCode, error_data: str) -> Outcome:
        """Create a failed outcome.

        Args:
            code: Non-OK status code
            error_data: Failure detail reported back to the caller

        Raises:
            ValueError: If code is OK
        """
        if code == StatusCode.OK:
            raise ValueError("Failure outcomes require a non-OK status code")
        return cls(code=code, error_data=error_data)

    @property
    def is_success(self) -> bool:
        """True when the outcome has no code or the OK code."""
        return not self.code
