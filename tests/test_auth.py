"""Unit tests for auth providers and dependencies."""

import pytest
import httpx
from unittest.mock import MagicMock

from common.auth import (
    JWTAuth,
    StackAuth,
    create_auth_dependency,
    extract_token,
)
from common.utils.exceptions import UnauthorizedException


def fake_request(headers=None, cookies=None):
    request = MagicMock()
    request.headers = headers or {}
    request.cookies = cookies or {}
    return request


# ─────────────────────────────────────────────────────────────────
# extract_token
# ─────────────────────────────────────────────────────────────────


class TestExtractToken:
    def test_header_wins_over_cookie(self):
        assert extract_token("Bearer abc", "cookie-token") == "abc"

    def test_cookie_used_without_header(self):
        assert extract_token(None, "cookie-token") == "cookie-token"

    def test_other_scheme_ignored(self):
        assert extract_token("Basic abc") is None

    def test_empty_bearer_falls_back_to_cookie(self):
        assert extract_token("Bearer   ", "cookie-token") == "cookie-token"


# ─────────────────────────────────────────────────────────────────
# StackAuth
# ─────────────────────────────────────────────────────────────────


class TestStackAuth:
    @pytest.mark.asyncio
    async def test_verify_token_maps_user(self):
        def handler(request):
            assert request.url.path == "/api/v1/users/me"
            assert request.headers["x-stack-access-type"] == "server"
            assert request.headers["x-stack-project-id"] == "proj"
            assert request.headers["x-stack-access-token"] == "tok"
            return httpx.Response(200, json={
                "id": "stack-1",
                "primary_email": "ana@example.com",
                "display_name": "Ana",
                "profile_image_url": "https://img/ana.png",
            })

        auth = StackAuth("proj", "secret", transport=httpx.MockTransport(handler))

        claims = await auth.verify_token("tok")

        assert claims == {
            "sub": "stack-1",
            "email": "ana@example.com",
            "name": "Ana",
            "avatarUrl": "https://img/ana.png",
        }

    @pytest.mark.asyncio
    async def test_rejected_token(self):
        auth = StackAuth(
            "proj", "secret",
            transport=httpx.MockTransport(lambda request: httpx.Response(401, json={})),
        )
        with pytest.raises(ValueError, match="Invalid or expired session"):
            await auth.verify_token("tok")

    @pytest.mark.asyncio
    async def test_provider_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        auth = StackAuth("proj", "secret", transport=httpx.MockTransport(handler))
        with pytest.raises(ValueError, match="unavailable"):
            await auth.verify_token("tok")


# ─────────────────────────────────────────────────────────────────
# JWTAuth
# ─────────────────────────────────────────────────────────────────


class TestJWTAuth:
    @pytest.mark.asyncio
    async def test_round_trip_claims(self):
        auth = JWTAuth(secret="test-secret")
        token = await auth.create_token("user-1", email="ana@example.com")

        claims = await auth.verify_token(token)

        assert claims["sub"] == "user-1"
        assert claims["email"] == "ana@example.com"

    @pytest.mark.asyncio
    async def test_wrong_secret_rejected(self):
        token = await JWTAuth(secret="one").create_token("user-1")

        with pytest.raises(ValueError):
            await JWTAuth(secret="two").verify_token(token)


# ─────────────────────────────────────────────────────────────────
# Dependencies
# ─────────────────────────────────────────────────────────────────


class TestAuthDependencies:
    @pytest.mark.asyncio
    async def test_missing_token_is_401(self):
        dependency = create_auth_dependency(lambda: JWTAuth(secret="s"))

        with pytest.raises(UnauthorizedException) as exc_info:
            await dependency(fake_request())

        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "AUTH_REQUIRED"

    @pytest.mark.asyncio
    async def test_invalid_token_is_401(self):
        dependency = create_auth_dependency(lambda: JWTAuth(secret="s"))

        with pytest.raises(UnauthorizedException) as exc_info:
            await dependency(fake_request(headers={"Authorization": "Bearer nonsense"}))

        assert exc_info.value.code == "INVALID_SESSION"

    @pytest.mark.asyncio
    async def test_cookie_session_accepted(self):
        auth = JWTAuth(secret="s")
        token = await auth.create_token("user-1", name="Ana")
        dependency = create_auth_dependency(lambda: auth, cookie_name="stack-access")

        identity = await dependency(fake_request(cookies={"stack-access": token}))

        assert identity["id"] == "user-1"
        assert identity["name"] == "Ana"
