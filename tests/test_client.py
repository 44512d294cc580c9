# Tests for auth/client.py - token freshness checks and refresh rotation
# Created: 2026-10-18

import time
import urllib.parse
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from pocketcal.auth.client import GoogleClient
from pocketcal.auth.credentials import AccessToken, ClientCredentials
from pocketcal.config import Settings
from pocketcal.errors import AuthError, PocketCalError, RefreshCallbackError


def _token_response(**extra):
    def handler(request):
        assert request.url.host == "oauth2.googleapis.com"
        payload = {"access_token": "access-new", "token_type": "Bearer", "expires_in": 1800}
        payload.update(extra)
        return httpx.Response(200, json=payload)

    return handler


class TestEnsureFresh:
    async def test_valid_token_makes_no_network_calls(self, make_client):
        client, transport = make_client()
        before = client.token

        await client.ensure_fresh()
        await client.ensure_fresh()

        assert transport.requests == []
        assert client.token is before
        assert client.token.access_token == "access-live"

    async def test_expired_token_refreshes_once(self, make_client, expired_token):
        client, transport = make_client(_token_response(), token=expired_token)

        started = time.time()
        await client.ensure_fresh()
        finished = time.time()

        assert len(transport.token_requests) == 1
        assert client.token.access_token == "access-new"
        assert started + 1800 <= client.token.expires_at <= finished + 1800
        assert not client.token_expired

        await client.ensure_fresh()
        assert len(transport.token_requests) == 1

    async def test_token_inside_skew_window_is_refreshed(self, make_client):
        nearly_expired = AccessToken(access_token="old", expires_at=time.time() + 30)
        client, transport = make_client(_token_response(), token=nearly_expired)

        await client.ensure_fresh()

        assert len(transport.requests) == 1
        assert client.token.access_token == "access-new"

    async def test_rotated_refresh_token_replaces_stored_one(self, make_client, expired_token):
        client, _ = make_client(_token_response(refresh_token="refresh-rotated"), token=expired_token)

        await client.ensure_fresh()

        assert client.credentials.refresh_token == "refresh-rotated"
        assert client.token.refresh_token == "refresh-rotated"
        assert client.credentials.client_id == "client-id"

    async def test_missing_refresh_token_keeps_original(self, make_client, expired_token):
        client, transport = make_client(_token_response(), token=expired_token)

        await client.ensure_fresh()

        assert client.credentials.refresh_token == "refresh-original"
        form = urllib.parse.parse_qs(transport.requests[0].content.decode())
        assert form["refresh_token"] == ["refresh-original"]

    async def test_refresh_failure_keeps_previous_state(self, make_client, expired_token):
        client, transport = make_client(
            lambda request: httpx.Response(401, text="unauthorized_client"),
            token=expired_token,
        )
        token_before = client.token
        credentials_before = client.credentials

        with pytest.raises(AuthError) as exc_info:
            await client.ensure_fresh()

        assert exc_info.value.status == 401
        assert exc_info.value.body == "unauthorized_client"
        assert client.token is token_before
        assert client.credentials is credentials_before
        assert len(transport.requests) == 1

    async def test_transport_failure_is_auth_error(self, make_client, expired_token):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client, _ = make_client(handler, token=expired_token)

        with pytest.raises(AuthError) as exc_info:
            await client.ensure_fresh()
        assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)

    async def test_on_refresh_callback(self, make_client, expired_token):
        sync_cb = MagicMock()
        client, _ = make_client(_token_response(), token=expired_token, on_refresh=sync_cb)
        await client.ensure_fresh()
        sync_cb.assert_called_once_with(client)

    async def test_async_on_refresh_callback(self, make_client, expired_token):
        async_cb = AsyncMock()
        client, _ = make_client(_token_response(), token=expired_token, on_refresh=async_cb)
        await client.ensure_fresh()
        async_cb.assert_awaited_once_with(client)

    async def test_callback_not_called_when_fresh(self, make_client):
        cb = MagicMock()
        client, _ = make_client(on_refresh=cb)
        await client.ensure_fresh()
        cb.assert_not_called()


class TestClientSetup:
    def test_token_stamped_on_store(self, make_client):
        client, _ = make_client()
        assert client.token.expires_at is not None
        assert client.token.expires_at > time.time() + 3000

    def test_restored_expiry_is_kept(self, make_client):
        restored = AccessToken(access_token="a", expires_in=3600, expires_at=1234.0)
        client, _ = make_client(token=restored)
        assert client.token.expires_at == 1234.0

    def test_auth_headers(self, make_client):
        client, _ = make_client()
        assert client.auth_headers() == {"Authorization": "Bearer access-live"}

    async def test_from_authorization_code(self, settings):
        def handler(request):
            form = urllib.parse.parse_qs(request.content.decode())
            assert form["grant_type"] == ["authorization_code"]
            assert form["code"] == ["the-code"]
            return httpx.Response(
                200,
                json={"access_token": "a", "expires_in": 3600, "refresh_token": "r"},
            )

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with await GoogleClient.from_authorization_code(
            "the-code", "cid", "secret", "http://localhost/cb", http=http, settings=settings
        ) as client:
            assert client.credentials.refresh_token == "r"
            assert client.credentials.redirect_uri == "http://localhost/cb"
            assert not client.token_expired
        assert http.is_closed

    async def test_from_authorization_code_closes_own_client_on_failure(
        self, settings, monkeypatch
    ):
        created = []
        real_async_client = httpx.AsyncClient

        def build_client(**kwargs):
            http = real_async_client(
                transport=httpx.MockTransport(
                    lambda request: httpx.Response(400, json={"error": "invalid_grant"})
                )
            )
            created.append(http)
            return http

        monkeypatch.setattr(httpx, "AsyncClient", build_client)

        with pytest.raises(AuthError):
            await GoogleClient.from_authorization_code(
                "bad-code", "cid", "secret", "http://localhost/cb", settings=settings
            )

        assert len(created) == 1
        assert created[0].is_closed

    async def test_from_authorization_code_leaves_caller_client_open(self, settings):
        http = httpx.AsyncClient(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(400, json={"error": "invalid_grant"})
            )
        )

        with pytest.raises(AuthError):
            await GoogleClient.from_authorization_code(
                "bad-code", "cid", "secret", "http://localhost/cb", http=http, settings=settings
            )

        assert not http.is_closed
        await http.aclose()

    def test_caller_token_is_not_mutated(self, make_client):
        token = AccessToken(access_token="a", expires_in=3600)
        client, _ = make_client(token=token)

        assert token.expires_at is None
        assert client.token.expires_at is not None
        assert client.token is not token


class TestRefreshCallbackFailure:
    async def test_callback_error_is_typed(self, make_client, expired_token):
        failing_cb = MagicMock(side_effect=OSError("disk full"))
        client, transport = make_client(
            _token_response(refresh_token="refresh-rotated"),
            token=expired_token,
            on_refresh=failing_cb,
        )

        with pytest.raises(RefreshCallbackError) as exc_info:
            await client.ensure_fresh()

        assert isinstance(exc_info.value, PocketCalError)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert client.token.access_token == "access-new"
        assert client.credentials.refresh_token == "refresh-rotated"
        assert len(transport.token_requests) == 1

    async def test_async_callback_error_is_typed(self, make_client, expired_token):
        async_cb = AsyncMock(side_effect=RuntimeError("store offline"))
        client, _ = make_client(_token_response(), token=expired_token, on_refresh=async_cb)

        with pytest.raises(RefreshCallbackError) as exc_info:
            await client.ensure_fresh()
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    async def test_next_call_uses_installed_token(self, make_client, expired_token):
        failing_cb = MagicMock(side_effect=OSError("disk full"))
        client, transport = make_client(
            _token_response(), token=expired_token, on_refresh=failing_cb
        )

        with pytest.raises(RefreshCallbackError):
            await client.ensure_fresh()
        await client.ensure_fresh()

        assert len(transport.token_requests) == 1
        failing_cb.assert_called_once_with(client)


class TestCredentialsFromSettings:
    def test_uses_settings_fields(self, settings):
        creds = ClientCredentials.from_settings("refresh-x", settings=settings)

        assert creds.client_id == "client-id"
        assert creds.client_secret == "client-secret"
        assert creds.redirect_uri == "http://localhost:8888/oauth/callback"
        assert creds.refresh_token == "refresh-x"

    def test_unset_client_falls_back_to_empty(self, tmp_path, monkeypatch):
        monkeypatch.delenv("POCKETCAL_GOOGLE_OAUTH_CLIENT_ID", raising=False)
        monkeypatch.delenv("POCKETCAL_GOOGLE_OAUTH_CLIENT_SECRET", raising=False)
        bare = Settings(
            google_oauth_redirect_uri="https://app.example.com/cb",
            config_dir=tmp_path,
            _env_file=None,
        )

        creds = ClientCredentials.from_settings("refresh-y", settings=bare)

        assert creds.client_id == ""
        assert creds.client_secret == ""
        assert creds.redirect_uri == "https://app.example.com/cb"

    def test_reads_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("POCKETCAL_GOOGLE_OAUTH_CLIENT_ID", "env-id")
        monkeypatch.setenv("POCKETCAL_GOOGLE_OAUTH_CLIENT_SECRET", "env-secret")
        monkeypatch.setenv("POCKETCAL_GOOGLE_OAUTH_REDIRECT_URI", "http://localhost:9000/cb")

        creds = ClientCredentials.from_settings(
            "refresh-z", settings=Settings(config_dir=tmp_path, _env_file=None)
        )

        assert creds.client_id == "env-id"
        assert creds.client_secret == "env-secret"
        assert creds.redirect_uri == "http://localhost:9000/cb"
