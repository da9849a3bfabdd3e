"""Base model for Tronity API responses.

Every Tronity response model inherits from :class:`TronityBaseModel`
which provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``null`` and empty
  string values so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1_000_000_000_000


def parse_epoch(value: Any) -> datetime | None:
    """Convert an epoch timestamp (seconds **or** milliseconds) to a UTC datetime.

    ISO-8601 strings are passed through for pydantic to parse.
    """
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return value  # type: ignore[return-value]
    ts = int(value)
    if ts >= _MS_THRESHOLD:
        ts = ts // 1000
    return datetime.fromtimestamp(ts, tz=UTC)


EpochTimestamp = Annotated[datetime | None, BeforeValidator(parse_epoch)]
"""Annotated type that coerces epoch ints (seconds or ms) to UTC datetimes."""


class TronityBaseModel(BaseModel):
    """Base for Tronity API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop empty values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        # Keep an explicitly passed raw= (construction from kwargs).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
