# Errors - exception hierarchy for auth and calendar calls.
# Created: 2026-10-18

from __future__ import annotations

import httpx

UNREADABLE_BODY = "Unable to read error body"


def read_error_body(resp: httpx.Response) -> str:
    """Best-effort response text for error reporting."""
    try:
        return resp.text
    except (httpx.ResponseNotRead, httpx.StreamError, UnicodeDecodeError):
        return UNREADABLE_BODY


class PocketCalError(Exception):
    """Base exception for all pocketcal errors."""


class AuthError(PocketCalError):
    """Authorization-code exchange or token refresh failed.

    ``status`` and ``body`` carry the provider response when there was one.
    For transport failures they are unset and the original exception is
    chained as ``__cause__``.
    """

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        self.status = status
        self.body = body
        if status is not None:
            message = f"{message}: {status} - {body}"
        super().__init__(message)


class RefreshCallbackError(PocketCalError):
    """The ``on_refresh`` callback failed after a successful token refresh.

    The refreshed token and any rotated refresh token are already installed on
    the client; the callback exception is chained as ``__cause__``.
    """


class CalendarAPIError(PocketCalError):
    """Base exception for calendar resource calls."""


class RequestError(CalendarAPIError):
    """A resource call returned a non-2xx status."""

    def __init__(self, status: int, body: str, method: str = "", url: str = ""):
        self.status = status
        self.body = body
        self.method = method
        self.url = url
        prefix = f"{method} request" if method else "Request"
        super().__init__(f"{prefix} failed with status {status}: {body}")


class TransportError(CalendarAPIError):
    """The host could not be reached or the connection failed/timed out."""


class ResponseDecodeError(CalendarAPIError):
    """A 2xx response body could not be decoded into the expected type."""

    def __init__(self, status: int, body: str, reason: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"Could not decode {status} response: {reason or body[:200]}")


class UnsupportedOperation(CalendarAPIError):
    """Raised when a request carries an HTTP method the dispatcher does not handle."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unsupported HTTP method: {method}")
