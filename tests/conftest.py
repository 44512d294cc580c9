# Shared fixtures: isolated settings and a GoogleClient on a mock transport.
# Created: 2026-10-18

import time

import httpx
import pytest

from pocketcal.auth.client import GoogleClient
from pocketcal.auth.credentials import AccessToken, ClientCredentials
from pocketcal.config import Settings

TOKEN_HOST = "oauth2.googleapis.com"


class RecordingTransport:
    """Callable for ``httpx.MockTransport`` that records every request."""

    def __init__(self, handler):
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == TOKEN_HOST]

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host != TOKEN_HOST]


def unexpected(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected request: {request.method} {request.url}")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        google_oauth_client_id="client-id",
        google_oauth_client_secret="client-secret",
        config_dir=tmp_path,
    )


@pytest.fixture
def credentials():
    return ClientCredentials(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://localhost:8888/oauth/callback",
        refresh_token="refresh-original",
    )


@pytest.fixture
def fresh_token():
    return AccessToken(access_token="access-live", token_type="Bearer", expires_in=3600)


@pytest.fixture
def expired_token():
    return AccessToken(
        access_token="access-stale",
        token_type="Bearer",
        expires_in=3600,
        refresh_token="refresh-original",
        expires_at=time.time() - 10,
    )


@pytest.fixture
def make_client(settings, credentials, fresh_token):
    """Build a GoogleClient whose HTTP calls go to ``handler``.

    Returns ``(client, transport)``; ``transport.requests`` lists what was sent.
    """

    def _make(handler=unexpected, token=None, **kwargs):
        transport = RecordingTransport(handler)
        http = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        client = GoogleClient(
            credentials,
            token or fresh_token,
            http=http,
            settings=settings,
            **kwargs,
        )
        return client, transport

    return _make
