"""Custom exception hierarchy for pyisstrack."""

from __future__ import annotations

from enum import StrEnum


class TrackerError(Exception):
    """Base exception for all pyisstrack errors."""


class TrackerConfigError(TrackerError):
    """Invalid or missing configuration.

    This is the only startup-fatal error; it is raised before the poll loop
    is entered.
    """


class FetchErrorKind(StrEnum):
    UNREACHABLE = "unreachable"
    MALFORMED = "malformed"


class FetchError(TrackerError):
    """A single feed request/response cycle failed.

    Fetch errors are never fatal: the poller reports them and carries on
    with the next scheduled tick.
    """

    kind: FetchErrorKind

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class FeedUnreachableError(FetchError):
    """Network-level failure (connection, timeout, non-200 status)."""

    kind = FetchErrorKind.UNREACHABLE

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        super().__init__(message, endpoint=endpoint)


class FeedMalformedError(FetchError):
    """The feed answered, but the body could not be decoded into a position."""

    kind = FetchErrorKind.MALFORMED
