"""Enriched city listing endpoint."""

import logging
import time
from typing import Annotated

from fastapi import APIRouter, Query

from smogmap.api.dependencies import PipelineDep, SettingsDep
from smogmap.enrichment import CitiesEnvelope

logger = logging.getLogger(__name__)

router = APIRouter()

CountryParam = Annotated[
    str | None,
    Query(max_length=64, description="Country code, defaults to PL"),
]
PageParam = Annotated[int, Query(ge=1, description="Pollution API page")]
LimitParam = Annotated[int, Query(ge=1, description="Records per page")]


@router.get(
    "/cities",
    response_model=CitiesEnvelope,
    summary="List pollution-monitored cities with descriptions",
)
async def list_cities(
    pipeline: PipelineDep,
    settings: SettingsDep,
    country: CountryParam = None,
    page: PageParam = 1,
    limit: LimitParam = 100,
) -> CitiesEnvelope:
    """List the cities of one pollution page with Wikipedia summaries."""
    country = country or settings.default_country
    start_time = time.perf_counter()
    logger.info("GET /cities: country=%s, page=%d, limit=%d", country, page, limit)

    envelope = await pipeline.enrich(country=country, page=page, limit=limit)

    elapsed_ms = int((time.perf_counter() - start_time) * 1000)
    logger.info(
        "Listed %d cities for %s in %dms",
        envelope.valid_city_count,
        country,
        elapsed_ms,
    )
    return envelope
