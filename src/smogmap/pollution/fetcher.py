"""Paginated pollution data retrieval with one re-authentication retry."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from smogmap.auth import TokenManager
from smogmap.pollution.models import PollutionRecord

logger = logging.getLogger(__name__)

# One initial request plus one retry after a forced token refresh
MAX_ATTEMPTS = 2


class PollutionFetcher:
    """Fetches pollution records for a country.

    Never raises for upstream data failures; those are logged and yield an
    empty list. Only an AuthenticationError from the token manager escapes.
    """

    def __init__(self, client: httpx.AsyncClient, tokens: TokenManager):
        self._client = client
        self._tokens = tokens

    async def fetch(
        self,
        country: str = "PL",
        page: int = 1,
        limit: int = 100,
    ) -> list[PollutionRecord]:
        params = {"country": country, "page": page, "limit": limit}

        for attempt in range(1, MAX_ATTEMPTS + 1):
            token = await self._tokens.get_token()
            try:
                response = await self._client.get(
                    "/pollution",
                    params=params,
                    headers={"Authorization": f"Bearer {token}"},
                )
            except httpx.HTTPError as e:
                logger.error("Pollution API error (%s): %s", type(e).__name__, e)
                return []

            if response.status_code == httpx.codes.UNAUTHORIZED:
                if attempt < MAX_ATTEMPTS:
                    logger.info("Pollution API rejected token, refreshing")
                    await self._tokens.refresh()
                    continue
                logger.error(
                    "Pollution API still unauthorized after token refresh "
                    "(country=%s, page=%d)",
                    country,
                    page,
                )
                return []

            try:
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPStatusError as e:
                logger.error(
                    "Pollution API returned error %d: %s",
                    e.response.status_code,
                    e.response.text[:200] if e.response.text else "no body",
                )
                return []
            except ValueError as e:
                logger.error("Pollution API returned invalid JSON: %s", e)
                return []

            return _parse_results(payload)

        return []


def _parse_results(payload: Any) -> list[PollutionRecord]:
    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        return []

    # One record per upstream item; malformed items have no name
    records: list[PollutionRecord] = []
    for item in results:
        if not isinstance(item, dict):
            logger.warning("Malformed pollution record: %r", item)
            records.append(PollutionRecord())
            continue
        try:
            records.append(PollutionRecord.model_validate(item))
        except ValidationError as e:
            logger.warning("Invalid pollution record %r: %s", item, e)
            records.append(PollutionRecord())
    return records
