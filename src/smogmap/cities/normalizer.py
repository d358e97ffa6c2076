"""City name validation, canonicalization and deduplication.

Upstream pollution records name their measuring points rather loosely
("Warsaw Station", "kraków District", "123"). Only plain city names survive,
in one canonical spelling, so that cache keys and lookups are stable.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

# Substrings that mark a measuring point rather than a city
EXCLUDED_TERMS = ("district", "station", "powerplant")

_BLANK = re.compile(r"^\s*$")


def _is_name_character(char: str) -> bool:
    """Letters of any script, whitespace and hyphens; no numerals of any kind."""
    return char.isalpha() or char.isspace() or char == "-"


def is_valid_city(raw: object) -> bool:
    """Check that a raw value can be a city name at all."""
    if not raw or not isinstance(raw, str):
        return False
    if _BLANK.match(raw):
        return False
    return all(_is_name_character(char) for char in raw)


def is_excluded(name: str) -> bool:
    lowered = name.lower()
    return any(term in lowered for term in EXCLUDED_TERMS)


def canonicalize(name: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    return name[:1].upper() + name[1:].lower()


def normalize(raw: object) -> str | None:
    """Return the canonical city name, or None if the value is not a city."""
    if not isinstance(raw, str):
        return None

    name = raw.strip()
    if not is_valid_city(name) or is_excluded(name):
        return None
    return canonicalize(name)


def dedupe(raw_names: Iterable[object]) -> list[str]:
    """Normalize names and drop duplicates, keeping first-occurrence order."""
    unique: dict[str, None] = {}
    for raw in raw_names:
        name = normalize(raw)
        if name is not None:
            unique.setdefault(name, None)
    return list(unique)
