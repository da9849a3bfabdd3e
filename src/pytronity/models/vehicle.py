"""Vehicle list models."""

from __future__ import annotations

from pydantic import Field, field_validator

from pytronity.models._base import TronityBaseModel


class Vehicle(TronityBaseModel):
    """A vehicle visible to the configured credentials.

    Mapped from the ``/v1/vehicles`` response.
    """

    id: str
    """Tronity vehicle ID used in per-vehicle endpoints."""
    vin: str = ""
    """Vehicle Identification Number."""
    display_name: str = ""
    """User-defined vehicle name."""
    model: str = ""
    """Model name."""
    manufacturer: str = ""
    """Manufacturer name."""

    @field_validator("id", "vin", mode="before")
    @classmethod
    def _coerce_str(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


class VehicleList(TronityBaseModel):
    """Envelope of the ``/v1/vehicles`` response."""

    data: list[Vehicle] = Field(default_factory=list)
