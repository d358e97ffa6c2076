from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from smogmap.exceptions import LookupServiceError

from .port import FALLBACK_DESCRIPTION, EnrichmentEntry, LookupPort

logger = logging.getLogger(__name__)


class WikipediaSummaryAdapter(LookupPort):
    """Wikipedia REST page summary adapter."""

    def __init__(
        self,
        base_url: str = "https://en.wikipedia.org/api/rest_v1",
        user_agent: str = "smogmap",
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def summary_url(self, title: str) -> str:
        return f"{self.base_url}/page/summary/{quote(title, safe='')}"

    def _parse_response(self, data: Any) -> EnrichmentEntry:
        if not isinstance(data, dict):
            return EnrichmentEntry.fallback()

        extract = data.get("extract")
        description = extract if isinstance(extract, str) and extract else FALLBACK_DESCRIPTION

        thumbnail = data.get("thumbnail")
        source = thumbnail.get("source") if isinstance(thumbnail, dict) else None

        return EnrichmentEntry(
            description=description,
            thumbnail=source if isinstance(source, str) and source else None,
        )

    async def summary(self, title: str) -> EnrichmentEntry:
        client = self._get_client()
        try:
            resp = await client.get(self.summary_url(title))
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LookupServiceError(title, f"Lookup failed for {title!r}: {e}") from e

        entry = self._parse_response(data)
        logger.debug("Fetched summary for %r (thumbnail: %s)", title, entry.thumbnail is not None)
        return entry
