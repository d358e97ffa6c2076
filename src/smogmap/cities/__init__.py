"""City name handling."""

from .normalizer import (
    EXCLUDED_TERMS,
    canonicalize,
    dedupe,
    is_excluded,
    is_valid_city,
    normalize,
)

__all__ = [
    "EXCLUDED_TERMS",
    "canonicalize",
    "dedupe",
    "is_excluded",
    "is_valid_city",
    "normalize",
]
