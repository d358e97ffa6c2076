"""Fixtures for API tests."""

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from smogmap.api import create_app
from smogmap.api.dependencies import get_pipeline
from smogmap.enrichment import CitiesEnvelope, CityResult, EnrichmentPipeline
from smogmap_config import Settings


@pytest.fixture
def envelope() -> CitiesEnvelope:
    return CitiesEnvelope(
        page=1,
        limit=100,
        total=3,
        valid_city_count=1,
        total_pages=1,
        cities=[
            CityResult(
                name="Kraków",
                country="PL",
                pollution=61.0,
                description="Kraków is a city in southern Poland.",
                thumbnail="https://upload.test/krakow.jpg",
            )
        ],
    )


@pytest.fixture
def pipeline(envelope: CitiesEnvelope) -> AsyncMock:
    pipeline = AsyncMock(spec=EnrichmentPipeline)
    pipeline.enrich.return_value = envelope
    return pipeline


@pytest.fixture
def app(settings: Settings, pipeline: AsyncMock) -> FastAPI:
    """Application with the pipeline replaced (lifespan is not run)."""
    app = create_app(settings)
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    yield TestClient(app, raise_server_exceptions=False)
