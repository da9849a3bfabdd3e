"""Bulk vehicle status model.

Mapped from the ``/v1/vehicles/{id}/bulk`` response, which carries every
value the adapter reads in one call.
"""

from __future__ import annotations

from pytronity.models._base import EpochTimestamp, TronityBaseModel


class BulkSnapshot(TronityBaseModel):
    """One bulk status response.

    Immutable; a later fetch produces a new snapshot that replaces this
    one entirely.
    """

    odometer: float | None = None
    """Odometer reading in km."""
    range: float | None = None
    """Remaining range in km."""
    level: float | None = None
    """Battery state of charge in percent."""
    charging: str | None = None
    """Charging state string (e.g. ``"Charging"``, ``"Idle"``)."""
    charge_remaining_time: int | None = None
    """Minutes until charging completes, if charging."""
    latitude: float | None = None
    longitude: float | None = None
    timestamp: EpochTimestamp = None
    """Time the vehicle reported these values."""
