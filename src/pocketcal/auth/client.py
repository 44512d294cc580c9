# Google Client - credentials, current token and transport for API calls.
# Created: 2026-10-18

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Awaitable, Callable

import httpx

from pocketcal.auth.credentials import AccessToken, ClientCredentials
from pocketcal.auth.oauth import OAuthManager
from pocketcal.config import Settings, get_settings
from pocketcal.errors import RefreshCallbackError

logger = logging.getLogger(__name__)

RefreshCallback = Callable[["GoogleClient"], Awaitable[None] | None]


class GoogleClient:
    """Authenticated session against Google APIs.

    Holds one set of client credentials, the current access token and an
    ``httpx.AsyncClient``. The token is refreshed in place by
    :meth:`ensure_fresh`, which every calendar request calls first.

    The client is not internally synchronized. When several tasks share one
    client, hold ``client.lock`` around the whole build-and-request chain::

        async with client.lock:
            events = await EventRequestBuilder(client).get_events("primary").request()

    Otherwise two tasks can refresh the same stale token concurrently and one
    of them may overwrite a rotated refresh token with the old one.
    """

    def __init__(
        self,
        credentials: ClientCredentials,
        token: AccessToken,
        http: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
        on_refresh: RefreshCallback | None = None,
    ):
        self.settings = settings or get_settings()
        self.credentials = credentials
        self.http = http or httpx.AsyncClient(timeout=self.settings.http_timeout)
        self.expiry_skew = self.settings.token_expiry_skew
        self.lock = asyncio.Lock()
        self._oauth = OAuthManager(self.settings, http=self.http)
        self._on_refresh = on_refresh

        # Stamp a copy; the caller's token object is left as given.
        token = dataclasses.replace(token)
        token.stamp()
        self.token = token

    @classmethod
    async def from_authorization_code(
        cls,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        http: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
        on_refresh: RefreshCallback | None = None,
    ) -> GoogleClient:
        """Run the code exchange and build a client from the issued tokens.

        An ``http`` client created here is closed again if the exchange fails.
        """
        settings = settings or get_settings()
        owns_http = http is None
        if http is None:
            http = httpx.AsyncClient(timeout=settings.http_timeout)
        try:
            token = await OAuthManager(settings, http=http).exchange_code(
                code, client_secret, client_id, redirect_uri
            )
        except BaseException:
            if owns_http:
                await http.aclose()
            raise
        credentials = ClientCredentials(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            refresh_token=token.refresh_token,
        )
        return cls(credentials, token, http=http, settings=settings, on_refresh=on_refresh)

    @property
    def token_expired(self) -> bool:
        return self.token.is_expired(self.expiry_skew)

    async def ensure_fresh(self) -> None:
        """Refresh the access token if it is expired or about to expire.

        No-op while the token is valid. On failure the current token and
        credentials are kept and :class:`~pocketcal.errors.AuthError`
        propagates; nothing is retried.

        If the ``on_refresh`` callback raises, the new token stays installed
        and :class:`~pocketcal.errors.RefreshCallbackError` is raised.
        """
        if not self.token_expired:
            return

        logger.debug("Access token expired, refreshing")
        token = await self._oauth.refresh_token(self.credentials)
        token.stamp()
        self.token = token
        if token.refresh_token and token.refresh_token != self.credentials.refresh_token:
            self.credentials = dataclasses.replace(
                self.credentials, refresh_token=token.refresh_token
            )

        if self._on_refresh is not None:
            try:
                result = self._on_refresh(self)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.warning("on_refresh callback failed: %s", e)
                raise RefreshCallbackError(f"on_refresh callback failed: {e}") from e

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": self.token.authorization}

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> GoogleClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
