"""Response models for enriched city listings."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CityResult(_CamelModel):
    """One pollution-monitored city with its description."""

    name: str
    country: str
    pollution: Any = None
    description: str
    thumbnail: str | None = None


class CitiesEnvelope(_CamelModel):
    """Paginated listing of enriched cities.

    ``total`` counts the raw pollution records of the page, while
    ``valid_city_count`` counts the unique city names that survived
    normalization.
    """

    page: int
    limit: int
    total: int
    valid_city_count: int
    total_pages: int
    cities: list[CityResult]
