"""City description enrichment."""

from .cache import DescriptionCache
from .models import CitiesEnvelope, CityResult
from .port import FALLBACK_DESCRIPTION, EnrichmentEntry, LookupPort
from .service import DEFAULT_BATCH_SIZE, EnrichmentPipeline, batched, total_pages
from .wikipedia import WikipediaSummaryAdapter

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "FALLBACK_DESCRIPTION",
    "CitiesEnvelope",
    "CityResult",
    "DescriptionCache",
    "EnrichmentEntry",
    "EnrichmentPipeline",
    "LookupPort",
    "WikipediaSummaryAdapter",
    "batched",
    "total_pages",
]
