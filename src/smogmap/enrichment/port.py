from dataclasses import dataclass
from typing import Protocol

FALLBACK_DESCRIPTION = "No description available"


@dataclass(frozen=True)
class EnrichmentEntry:
    """Description and thumbnail for one city."""

    description: str
    thumbnail: str | None = None

    @classmethod
    def fallback(cls) -> "EnrichmentEntry":
        return cls(description=FALLBACK_DESCRIPTION, thumbnail=None)


class LookupPort(Protocol):
    """Port for free-text lookup backends."""

    async def summary(self, title: str) -> EnrichmentEntry:
        """Describe a title; raise LookupServiceError on failure."""
        ...
