"""Shared infrastructure for the enrichment pipeline.

Holds the resources that live as long as the hosting process (the FastAPI
lifespan or one CLI run): HTTP clients, the token session and the
description cache. All requests of the process share them.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from smogmap.auth import TokenManager
from smogmap.enrichment import (
    DescriptionCache,
    EnrichmentPipeline,
    WikipediaSummaryAdapter,
)
from smogmap.pollution import PollutionFetcher
from smogmap_config import Settings


@dataclass
class SharedInfrastructure:
    """Process-wide resources (singleton in app lifespan)."""

    settings: Settings
    pollution_client: httpx.AsyncClient
    tokens: TokenManager
    lookup: WikipediaSummaryAdapter
    cache: DescriptionCache
    pipeline: EnrichmentPipeline

    @classmethod
    def create(
        cls,
        settings: Settings,
        pollution_client: httpx.AsyncClient | None = None,
        lookup_client: httpx.AsyncClient | None = None,
    ) -> SharedInfrastructure:
        """Create shared infrastructure from settings."""
        if pollution_client is None:
            pollution_client = httpx.AsyncClient(
                base_url=settings.api_base_url,
                timeout=settings.http_timeout,
                headers={"Accept": "application/json"},
            )

        tokens = TokenManager(
            client=pollution_client,
            username=settings.api_username,
            password=settings.api_password.get_secret_value(),
        )
        fetcher = PollutionFetcher(client=pollution_client, tokens=tokens)
        lookup = WikipediaSummaryAdapter(
            base_url=settings.lookup_base_url,
            user_agent=settings.lookup_user_agent,
            client=lookup_client,
            timeout=settings.http_timeout,
        )
        cache = DescriptionCache(
            ttl_seconds=settings.cache_ttl,
            max_size=settings.cache_max_size,
        )
        pipeline = EnrichmentPipeline(
            fetcher=fetcher,
            lookup=lookup,
            cache=cache,
            batch_size=settings.enrichment_batch_size,
        )
        return cls(
            settings=settings,
            pollution_client=pollution_client,
            tokens=tokens,
            lookup=lookup,
            cache=cache,
            pipeline=pipeline,
        )

    async def aclose(self) -> None:
        await self.pollution_client.aclose()
        await self.lookup.close()
