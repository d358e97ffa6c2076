"""Bearer token lifecycle for the pollution provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from smogmap.auth.session import Session
from smogmap.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class TokenManager:
    """Owns the access/refresh token pair and hands out bearer tokens.

    The manager is shared by all requests of one process. Token mutations
    run under an asyncio lock so concurrent refreshes do not interleave.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        username: str,
        password: str,
        session: Session | None = None,
    ):
        self._client = client
        self._username = username
        self._password = password
        self._session = session or Session()
        self._lock = asyncio.Lock()

    @property
    def session(self) -> Session:
        return self._session

    async def get_token(self) -> str:
        """Return the current access token, logging in first if none is held."""
        async with self._lock:
            if self._session.access_token is None:
                return await self._login()
            return self._session.access_token

    async def authenticate(self) -> str:
        """Log in with the configured credentials and store both tokens.

        Raises
        ------
        AuthenticationError
            If the provider is unreachable or rejects the credentials.
        """
        async with self._lock:
            return await self._login()

    async def refresh(self) -> str:
        """Obtain a new access token.

        Uses the refresh token when one is held and falls back to a full
        login when there is none or the refresh is rejected. Only fails with
        the login's own AuthenticationError.
        """
        async with self._lock:
            if not self._session.refresh_token:
                logger.debug("No refresh token held, logging in")
                return await self._login()

            try:
                token = await self._request_refresh(self._session.refresh_token)
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("Token refresh failed, logging in again: %s", e)
                return await self._login()

            self._session.access_token = token
            logger.debug("Access token refreshed")
            return token

    def invalidate(self) -> None:
        """Forget both tokens; the next get_token() logs in again."""
        self._session.clear()

    async def _login(self) -> str:
        try:
            response = await self._client.post(
                "/auth/login",
                json={"username": self._username, "password": self._password},
            )
            response.raise_for_status()
            data = response.json()
            token = _extract_token(data)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Authentication error: %s", e)
            raise AuthenticationError() from e

        self._session.access_token = token
        refresh_token = data.get("refreshToken")
        self._session.refresh_token = refresh_token if isinstance(refresh_token, str) else None
        logger.info(
            "Authenticated with pollution API (refresh token: %s)",
            "yes" if self._session.refresh_token else "no",
        )
        return token

    async def _request_refresh(self, refresh_token: str) -> str:
        response = await self._client.post(
            "/auth/refresh",
            json={"refreshToken": refresh_token},
        )
        response.raise_for_status()
        return _extract_token(response.json())


def _extract_token(data: Any) -> str:
    """Pull the access token out of an auth response body."""
    token = data.get("token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise ValueError("auth response carried no token")
    return token
