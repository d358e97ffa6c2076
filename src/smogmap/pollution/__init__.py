"""Pollution provider access."""

from .fetcher import MAX_ATTEMPTS, PollutionFetcher
from .models import PollutionRecord

__all__ = [
    "MAX_ATTEMPTS",
    "PollutionFetcher",
    "PollutionRecord",
]
