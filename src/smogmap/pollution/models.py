"""Pollution provider record model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class PollutionRecord(BaseModel):
    """Raw upstream record; unknown fields are kept as-is."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str | None = None
    pollution: Any = None

    @field_validator("name", mode="before")
    @classmethod
    def _non_string_name_is_none(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @property
    def match_key(self) -> str | None:
        """Trimmed, lower-cased name used to join records to cities."""
        return self.name.strip().lower() if self.name is not None else None
