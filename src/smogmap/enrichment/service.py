"""Enrichment pipeline joining pollution records with city descriptions."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from smogmap.cities import dedupe, normalize
from smogmap.exceptions import LookupServiceError

from .cache import DescriptionCache
from .models import CitiesEnvelope, CityResult
from .port import EnrichmentEntry, LookupPort

if TYPE_CHECKING:
    from smogmap.pollution import PollutionFetcher, PollutionRecord

logger = logging.getLogger(__name__)

# Simultaneous lookups per batch (the lookup service rate limits clients)
DEFAULT_BATCH_SIZE = 5


def batched(items: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    """Yield consecutive slices of at most ``size`` items."""
    for start in range(0, len(items), size):
        yield items[start : start + size]


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def _index_records(records: Sequence[PollutionRecord]) -> dict[str, PollutionRecord]:
    """Map each trimmed, lower-cased name to its first record."""
    index: dict[str, PollutionRecord] = {}
    for record in records:
        key = record.match_key
        if key is not None:
            index.setdefault(key, record)
    return index


class EnrichmentPipeline:
    """Lists the cities of a pollution page with their descriptions.

    Lookups run in batches: the names of one batch are resolved
    concurrently, and the next batch starts once all of them settled.
    """

    def __init__(
        self,
        fetcher: PollutionFetcher,
        lookup: LookupPort,
        cache: DescriptionCache,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.fetcher = fetcher
        self.lookup = lookup
        self.cache = cache
        self.batch_size = batch_size

    async def describe(self, name: str) -> EnrichmentEntry:
        """Return the cached description of a city, fetching it on a miss.

        Lookup failures yield the fallback entry, which is not cached.
        """
        key = normalize(name) or name
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("  Cache hit for %r", key)
            return cached

        try:
            entry = await self.lookup.summary(key)
        except LookupServiceError as e:
            logger.warning("  %s", e.message)
            return EnrichmentEntry.fallback()
        except Exception as e:
            logger.warning(
                "  Lookup for %r failed (%s): %s",
                key,
                type(e).__name__,
                e,
            )
            return EnrichmentEntry.fallback()

        self.cache.set(key, entry)
        return entry

    async def describe_all(self, names: Sequence[str]) -> list[EnrichmentEntry]:
        """Describe names batch by batch, preserving their order."""
        entries: list[EnrichmentEntry] = []
        for i, batch in enumerate(batched(names, self.batch_size), start=1):
            logger.debug("Describing batch %d: %s", i, ", ".join(batch))
            entries.extend(await asyncio.gather(*(self.describe(name) for name in batch)))
        return entries

    async def enrich(
        self,
        country: str = "PL",
        page: int = 1,
        limit: int = 100,
    ) -> CitiesEnvelope:
        if limit <= 0:
            raise ValueError("limit must be positive")

        records = await self.fetcher.fetch(country, page, limit)
        logger.debug("Pollution records for %s page %d: %s", country, page, records)

        names = dedupe(record.name for record in records)
        entries = await self.describe_all(names)

        index = _index_records(records)
        cities: list[CityResult] = []
        for name, entry in zip(names, entries):
            record = index.get(name.lower())
            cities.append(
                CityResult(
                    name=name,
                    country=country,
                    pollution=record.pollution if record is not None else None,
                    description=entry.description,
                    thumbnail=entry.thumbnail,
                )
            )

        logger.info(
            "Enriched %s page %d: %d records, %d unique cities",
            country,
            page,
            len(records),
            len(names),
        )
        return CitiesEnvelope(
            page=page,
            limit=limit,
            total=len(records),
            valid_city_count=len(names),
            total_pages=total_pages(len(records), limit),
            cities=cities,
        )
