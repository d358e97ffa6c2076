"""Tests for TokenManager."""

import json

import httpx
import pytest

from smogmap.auth import Session, TokenManager
from smogmap.exceptions import AuthenticationError
from tests.shared.fakes import API_BASE_URL


class TestAuthenticate:
    """Tests for logging in."""

    @pytest.mark.asyncio
    async def test_stores_both_tokens(self, token_manager, pollution_api):
        """Test that a successful login stores the token pair."""
        token = await token_manager.authenticate()

        assert token == "login-1"
        assert token_manager.session.access_token == "login-1"
        assert token_manager.session.refresh_token == "refresh-token"
        assert pollution_api.login_count == 1

    @pytest.mark.asyncio
    async def test_posts_credentials(self, token_manager, pollution_api):
        """Test that username and password are sent as JSON."""
        await token_manager.authenticate()

        request = pollution_api.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/auth/login"
        assert json.loads(request.content) == {"username": "tester", "password": "secret"}

    @pytest.mark.asyncio
    async def test_rejected_credentials_raise(self, token_manager, pollution_api):
        """Test that a rejected login raises AuthenticationError."""
        pollution_api.login_status = 401

        with pytest.raises(AuthenticationError):
            await token_manager.authenticate()

        assert token_manager.session.access_token is None

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        """Test that an unreachable provider raises AuthenticationError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(
            base_url=API_BASE_URL,
            transport=httpx.MockTransport(handler),
        ) as client:
            manager = TokenManager(client=client, username="u", password="p")

            with pytest.raises(AuthenticationError) as exc_info:
                await manager.authenticate()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_response_without_token_raises(self):
        """Test that a 200 without a token is treated as a failed login."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))

        async with httpx.AsyncClient(base_url=API_BASE_URL, transport=transport) as client:
            manager = TokenManager(client=client, username="u", password="p")

            with pytest.raises(AuthenticationError):
                await manager.authenticate()

    @pytest.mark.asyncio
    async def test_missing_refresh_token_is_kept_empty(self, token_manager, pollution_api):
        """Test login responses without a refresh token."""
        pollution_api.issue_refresh_token = False

        await token_manager.authenticate()

        assert token_manager.session.access_token == "login-1"
        assert token_manager.session.refresh_token is None


class TestRefresh:
    """Tests for token renewal."""

    @pytest.mark.asyncio
    async def test_replaces_access_token_only(self, token_manager, pollution_api):
        """Test that refresh keeps the refresh token."""
        await token_manager.authenticate()

        token = await token_manager.refresh()

        assert token == "refreshed-1"
        assert token_manager.session.access_token == "refreshed-1"
        assert token_manager.session.refresh_token == "refresh-token"
        assert pollution_api.login_count == 1
        assert pollution_api.refresh_count == 1

    @pytest.mark.asyncio
    async def test_sends_refresh_token(self, token_manager, pollution_api):
        """Test the refresh request body."""
        await token_manager.authenticate()
        await token_manager.refresh()

        request = pollution_api.requests[-1]
        assert request.url.path == "/auth/refresh"
        assert json.loads(request.content) == {"refreshToken": "refresh-token"}

    @pytest.mark.asyncio
    async def test_without_refresh_token_logs_in(self, token_manager, pollution_api):
        """Test that refresh delegates to login when no refresh token is held."""
        token = await token_manager.refresh()

        assert token == "login-1"
        assert pollution_api.login_count == 1
        assert pollution_api.refresh_count == 0

    @pytest.mark.asyncio
    async def test_rejected_refresh_falls_back_to_login(self, token_manager, pollution_api):
        """Test that a failed refresh triggers a full login."""
        await token_manager.authenticate()
        pollution_api.refresh_status = 401

        token = await token_manager.refresh()

        assert token == "login-2"
        assert pollution_api.login_count == 2

    @pytest.mark.asyncio
    async def test_fails_only_when_login_fails(self, token_manager, pollution_api):
        """Test that refresh surfaces the login's own error."""
        await token_manager.authenticate()
        pollution_api.refresh_status = 500
        pollution_api.login_status = 403

        with pytest.raises(AuthenticationError):
            await token_manager.refresh()


class TestGetToken:
    """Tests for handing out bearer tokens."""

    @pytest.mark.asyncio
    async def test_logs_in_lazily_once(self, token_manager, pollution_api):
        """Test that the first call logs in and later calls reuse the token."""
        first = await token_manager.get_token()
        second = await token_manager.get_token()

        assert first == second == "login-1"
        assert pollution_api.login_count == 1

    @pytest.mark.asyncio
    async def test_invalidate_forces_new_login(self, token_manager, pollution_api):
        """Test that invalidate() drops the token pair."""
        await token_manager.get_token()
        token_manager.invalidate()

        assert token_manager.session == Session()
        assert await token_manager.get_token() == "login-2"

    @pytest.mark.asyncio
    async def test_uses_provided_session(self, pollution_client):
        """Test that an existing session is used as-is."""
        session = Session(access_token="preset", refresh_token="r")
        manager = TokenManager(
            client=pollution_client,
            username="u",
            password="p",
            session=session,
        )

        assert await manager.get_token() == "preset"

