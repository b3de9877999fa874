"""Tests for the Google OAuth client, using httpx.MockTransport."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from modules.auth.exceptions import OAuthExchangeError
from modules.auth.oauth import (
    GOOGLE_TOKEN_URL,
    GOOGLE_USERINFO_URL,
    GoogleOAuthClient,
)


def make_client(handler) -> GoogleOAuthClient:
    return GoogleOAuthClient(
        client_id="client-id",
        client_secret="client-secret",
        callback_url="https://api.example.com/auth/google/secrets",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def google_handler(token_status=200, token_body=None, userinfo_status=200, userinfo_body=None):
    """Build a handler that imitates Google's token and userinfo endpoints."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if str(request.url) == GOOGLE_TOKEN_URL:
            body = token_body if token_body is not None else {"access_token": "at-123"}
            return httpx.Response(token_status, json=body)
        if str(request.url) == GOOGLE_USERINFO_URL:
            body = userinfo_body if userinfo_body is not None else {
                "sub": "1234",
                "email": "g@example.com",
                "email_verified": True,
                "name": "G",
            }
            return httpx.Response(userinfo_status, json=body)
        return httpx.Response(404)

    handler.calls = calls
    return handler


class TestAuthorizationUrl:
    def test_contains_client_and_state(self):
        client = make_client(google_handler())
        url = urlparse(client.authorization_url("state-xyz"))
        params = parse_qs(url.query)

        assert url.netloc == "accounts.google.com"
        assert params["client_id"] == ["client-id"]
        assert params["redirect_uri"] == ["https://api.example.com/auth/google/secrets"]
        assert params["response_type"] == ["code"]
        assert params["state"] == ["state-xyz"]
        assert "email" in params["scope"][0].split()

    def test_configured(self):
        assert make_client(google_handler()).configured is True
        assert GoogleOAuthClient("", "", "cb").configured is False


class TestFetchProfile:
    @pytest.mark.asyncio
    async def test_success(self):
        handler = google_handler()
        profile = await make_client(handler).fetch_profile("auth-code")

        assert profile.email == "g@example.com"
        assert profile.email_verified is True
        assert profile.sub == "1234"

        token_request, userinfo_request = handler.calls
        form = parse_qs(token_request.content.decode())
        assert form["code"] == ["auth-code"]
        assert form["grant_type"] == ["authorization_code"]
        assert userinfo_request.headers["Authorization"] == "Bearer at-123"

    @pytest.mark.asyncio
    async def test_token_endpoint_error(self):
        handler = google_handler(token_status=400, token_body={"error": "invalid_grant"})
        with pytest.raises(OAuthExchangeError):
            await make_client(handler).fetch_profile("bad")

    @pytest.mark.asyncio
    async def test_missing_access_token(self):
        handler = google_handler(token_body={"token_type": "Bearer"})
        with pytest.raises(OAuthExchangeError):
            await make_client(handler).fetch_profile("code")

    @pytest.mark.asyncio
    async def test_userinfo_error(self):
        handler = google_handler(userinfo_status=401, userinfo_body={"error": "unauthorized"})
        with pytest.raises(OAuthExchangeError):
            await make_client(handler).fetch_profile("code")

    @pytest.mark.asyncio
    async def test_malformed_userinfo(self):
        handler = google_handler(userinfo_body={"email": "no-sub@example.com"})
        with pytest.raises(OAuthExchangeError):
            await make_client(handler).fetch_profile("code")

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(OAuthExchangeError):
            await make_client(handler).fetch_profile("code")

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(OAuthExchangeError):
            await make_client(handler).fetch_profile("code")
