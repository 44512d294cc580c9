# OAuth Manager - Google OAuth 2.0 auth code flow + token refresh.
# Created: 2026-10-18

from __future__ import annotations

import logging
import urllib.parse
from collections.abc import Iterable

import httpx

from pocketcal.auth.credentials import AccessToken, ClientCredentials
from pocketcal.auth.scopes import Scope
from pocketcal.config import Settings, get_settings
from pocketcal.errors import AuthError, read_error_body

logger = logging.getLogger(__name__)


class OAuthManager:
    """Google OAuth 2.0 authorization code flow + token refresh.

    Supports:
    - Authorization URL generation
    - Code exchange for tokens
    - Token refresh with refresh-token rotation

    Pass ``http`` to reuse an existing ``httpx.AsyncClient``; otherwise a
    short-lived client is opened per call.
    """

    def __init__(self, settings: Settings | None = None, http: httpx.AsyncClient | None = None):
        self.settings = settings or get_settings()
        self._http = http

    def get_auth_url(
        self,
        client_id: str,
        redirect_uri: str,
        scopes: Iterable[Scope | str],
        state: str = "",
    ) -> str:
        """Generate the consent-screen URL.

        Args:
            client_id: OAuth client ID.
            redirect_uri: Where Google sends the user back with ``code``.
            scopes: Scopes to request.
            state: Optional state parameter for CSRF protection.

        Returns:
            Authorization URL to redirect the user to.
        """
        params = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(s.value if isinstance(s, Scope) else s for s in scopes),
            "access_type": "offline",
            "prompt": "consent",
        }
        if state:
            params["state"] = state

        query = urllib.parse.urlencode(params, quote_via=urllib.parse.quote)
        return f"{self.settings.oauth_auth_url}?{query}"

    async def exchange_code(
        self,
        code: str,
        client_secret: str,
        client_id: str,
        redirect_uri: str,
    ) -> AccessToken:
        """Exchange an authorization code for access + refresh tokens.

        Raises:
            AuthError: non-2xx response or transport failure.
        """
        data = await self._post_token_form(
            {
                "code": code,
                "client_id": client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
            failure="Failed to retrieve access token",
        )
        token = AccessToken.from_response(data)
        logger.info("OAuth tokens obtained for client %s", client_id)
        return token

    async def refresh_token(self, credentials: ClientCredentials) -> AccessToken:
        """Exchange the refresh token for a new access token.

        The returned token's ``refresh_token`` is the rotated one when the
        provider sent it, otherwise the one from ``credentials``.

        Raises:
            AuthError: non-2xx response or transport failure.
        """
        data = await self._post_token_form(
            {
                "client_id": credentials.client_id,
                "client_secret": credentials.client_secret,
                "refresh_token": credentials.refresh_token,
                "grant_type": "refresh_token",
            },
            failure="Failed to refresh token",
        )
        token = AccessToken.from_response(data, fallback_refresh_token=credentials.refresh_token)
        token.refresh_token_expires_in = 0
        if token.refresh_token != credentials.refresh_token:
            logger.info("Refresh token rotated for client %s", credentials.client_id)
        logger.info("Refreshed OAuth token for client %s", credentials.client_id)
        return token

    async def _post_token_form(self, form: dict[str, str], failure: str) -> dict:
        url = self.settings.oauth_token_url
        try:
            if self._http is not None:
                resp = await self._http.post(url, data=form)
            else:
                async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
                    resp = await client.post(url, data=form)
        except httpx.HTTPError as e:
            logger.warning("%s: %s", failure, e)
            raise AuthError(f"{failure}: request error: {e}") from e

        if not resp.is_success:
            body = read_error_body(resp)
            logger.warning("%s: HTTP %s", failure, resp.status_code)
            raise AuthError(failure, status=resp.status_code, body=body)

        try:
            data = resp.json()
        except ValueError as e:
            raise AuthError(
                f"{failure}: invalid JSON", status=resp.status_code, body=read_error_body(resp)
            ) from e
        if not isinstance(data, dict):
            raise AuthError(
                f"{failure}: unexpected payload", status=resp.status_code, body=read_error_body(resp)
            )
        return data
