# Credentials - OAuth client credentials and access token data.
# Created: 2026-10-18

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from pocketcal.config import Settings, get_settings


@dataclass(frozen=True)
class ClientCredentials:
    """OAuth client registration plus the current refresh token.

    Frozen: refresh-token rotation produces a new instance via
    ``dataclasses.replace``.
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    refresh_token: str

    @classmethod
    def from_settings(
        cls, refresh_token: str, settings: Settings | None = None
    ) -> ClientCredentials:
        settings = settings or get_settings()
        return cls(
            client_id=settings.google_oauth_client_id or "",
            client_secret=settings.google_oauth_client_secret or "",
            redirect_uri=settings.google_oauth_redirect_uri,
            refresh_token=refresh_token,
        )


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return 0


@dataclass
class AccessToken:
    """OAuth 2.0 token response.

    ``expires_in`` is relative to issuance. ``expires_at`` is the absolute Unix
    timestamp and is stamped once, when the token is stored on a client.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 0
    refresh_token: str = ""
    refresh_token_expires_in: int = 0
    scope: str = ""
    expires_at: float | None = None

    @classmethod
    def from_response(
        cls, data: dict[str, Any], fallback_refresh_token: str = ""
    ) -> AccessToken:
        """Build a token from a provider response, field by field.

        Missing or mistyped fields fall back to empty values instead of
        failing, so partial responses still yield a usable token.
        """
        return cls(
            access_token=_str(data, "access_token"),
            token_type=_str(data, "token_type"),
            expires_in=_int(data, "expires_in"),
            refresh_token=_str(data, "refresh_token") or fallback_refresh_token,
            refresh_token_expires_in=_int(data, "x_refresh_token_expires_in")
            or _int(data, "refresh_token_expires_in"),
            scope=_str(data, "scope"),
        )

    def stamp(self, issued_at: float | None = None) -> None:
        """Set ``expires_at`` from ``expires_in`` unless already set."""
        if self.expires_at is None:
            now = time.time() if issued_at is None else issued_at
            self.expires_at = now + self.expires_in

    def is_expired(self, skew: float = 0.0, now: float | None = None) -> bool:
        if self.expires_at is None:
            return True
        now = time.time() if now is None else now
        return self.expires_at <= now + skew

    @property
    def authorization(self) -> str:
        """Value for the ``Authorization`` header."""
        return f"{self.token_type or 'Bearer'} {self.access_token}"

    @property
    def scopes(self) -> list[str]:
        return self.scope.split() if self.scope else []
