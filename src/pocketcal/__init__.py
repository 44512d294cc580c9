"""pocketcal - async Google Calendar client with OAuth 2.0 token refresh.

Usage:
    from pocketcal import ClientCredentials, EventRequestBuilder, GoogleClient

    client = await GoogleClient.from_authorization_code(code, client_id, secret, redirect_uri)
    page = await EventRequestBuilder(client).get_events("primary").max_results(10).request()
"""

from pocketcal.auth import AccessToken, ClientCredentials, GoogleClient, OAuthManager, Scope
from pocketcal.calendar import EventDateTime, EventOrderBy, EventRequestBuilder, EventType
from pocketcal.errors import (
    AuthError,
    CalendarAPIError,
    PocketCalError,
    RefreshCallbackError,
    RequestError,
    ResponseDecodeError,
    TransportError,
    UnsupportedOperation,
)

__version__ = "0.1.0"

__all__ = [
    "AccessToken",
    "AuthError",
    "CalendarAPIError",
    "ClientCredentials",
    "EventDateTime",
    "EventOrderBy",
    "EventRequestBuilder",
    "EventType",
    "GoogleClient",
    "OAuthManager",
    "PocketCalError",
    "RefreshCallbackError",
    "RequestError",
    "ResponseDecodeError",
    "Scope",
    "TransportError",
    "UnsupportedOperation",
]
