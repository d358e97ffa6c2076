"""Test fixtures for smogmap."""

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from smogmap.auth import TokenManager
from smogmap.pollution import PollutionFetcher
from smogmap_config import Settings, clear_settings_cache
from tests.shared.fakes import (
    API_BASE_URL,
    LOOKUP_BASE_URL,
    FakeLookup,
    FakePollutionApi,
)


@pytest.fixture(autouse=True)
def _isolated_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the fake upstream services."""
    return Settings(
        api_base_url=API_BASE_URL,
        api_username="tester",
        api_password="secret",
        lookup_base_url=LOOKUP_BASE_URL,
        _env_file=None,
    )


@pytest.fixture
def pollution_api() -> FakePollutionApi:
    return FakePollutionApi()


@pytest_asyncio.fixture
async def pollution_client(
    pollution_api: FakePollutionApi,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    client = httpx.AsyncClient(
        base_url=API_BASE_URL,
        transport=httpx.MockTransport(pollution_api.handler),
    )
    yield client
    await client.aclose()


@pytest.fixture
def token_manager(pollution_client: httpx.AsyncClient) -> TokenManager:
    return TokenManager(client=pollution_client, username="tester", password="secret")


@pytest.fixture
def fetcher(
    pollution_client: httpx.AsyncClient,
    token_manager: TokenManager,
) -> PollutionFetcher:
    return PollutionFetcher(client=pollution_client, tokens=token_manager)


@pytest.fixture
def lookup() -> FakeLookup:
    return FakeLookup()
