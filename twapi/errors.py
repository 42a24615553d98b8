"""Error types raised by the Teamwork API engine and the parameter toolkit.

Every error carries a ``kind`` so callers can branch on the failure class
without importing each subclass.
"""
from enum import Enum
from typing import List, Optional


# Using (str, Enum) so kinds compare equal to their plain string values.
class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    NOT_FOUND = "not_found"
    DECODE = "decode"
    CANCELLED = "cancelled"


class TWAPIError(Exception):
    """Base class for every error surfaced by the engine or the toolkit."""

    kind: ErrorKind

    def __str__(self) -> str:
        return f"{self.kind.value} error: {super().__str__()}"


class InvalidArgumentError(TWAPIError):
    """Tool arguments failed validation; no upstream call was attempted."""

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))

    def __str__(self) -> str:
        return f"invalid parameters: {'; '.join(self.problems)}"


class TransportError(TWAPIError):
    """Network or TLS failure talking to the upstream."""

    kind = ErrorKind.TRANSPORT


class UpstreamError(TWAPIError):
    """The upstream answered with an HTTP status of 400 or above."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, status_code: int, messages: Optional[List[str]] = None):
        self.status_code = status_code
        self.messages = list(messages or [])
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return "; ".join(self.messages)

    def __str__(self) -> str:
        if self.messages:
            return f"upstream error: {self.status_code} {self.message}"
        return f"upstream error: {self.status_code}"


class NotFoundError(UpstreamError):
    kind = ErrorKind.NOT_FOUND


class DecodeError(TWAPIError):
    kind = ErrorKind.DECODE


class RequestCancelledError(TWAPIError):
    """The caller cancelled the request or its deadline elapsed."""

    kind = ErrorKind.CANCELLED
