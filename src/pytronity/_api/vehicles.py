"""Vehicle list endpoint: /v1/vehicles, and vehicle selection by VIN."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from pytronity._constants import VEHICLES_ENDPOINT
from pytronity._transport import Transport
from pytronity.exceptions import TronityApiError, TronityConfigError, TronityVehicleNotFoundError
from pytronity.models.vehicle import Vehicle, VehicleList

_logger = logging.getLogger(__name__)


async def fetch_vehicle_list(transport: Transport) -> list[Vehicle]:
    """Fetch all vehicles visible to the credentials."""
    body = await transport.request_json("GET", VEHICLES_ENDPOINT)
    if body is None:
        return []
    try:
        return VehicleList.model_validate(body).data
    except ValidationError as exc:
        raise TronityApiError(
            f"Unexpected vehicle list from {VEHICLES_ENDPOINT}: {exc.error_count()} validation errors",
            endpoint=VEHICLES_ENDPOINT,
        ) from exc


def select_vehicle(vehicles: Sequence[Vehicle], vin: str | None) -> Vehicle:
    """Pick the configured vehicle.

    Without a VIN the only visible vehicle is used.  With a VIN, the
    vehicle whose VIN matches case-insensitively is used.

    Raises
    ------
    TronityVehicleNotFoundError
        No vehicles are visible, or none matches *vin*.
    TronityConfigError
        The choice is ambiguous: several vehicles and no VIN, or
        several vehicles sharing *vin*.
    """
    if not vehicles:
        raise TronityVehicleNotFoundError("no vehicles visible to the configured credentials", vin=vin)

    wanted = (vin or "").strip().upper()
    if not wanted:
        if len(vehicles) == 1:
            return vehicles[0]
        raise TronityConfigError(f"{len(vehicles)} vehicles found; set a vin to choose one")

    matches = [v for v in vehicles if v.vin.strip().upper() == wanted]
    if not matches:
        _logger.debug("Known VINs: %s", [v.vin for v in vehicles])
        raise TronityVehicleNotFoundError(f"vin not found: {wanted}", vin=wanted)
    if len(matches) > 1:
        raise TronityConfigError(f"vin {wanted} matches {len(matches)} vehicles")
    return matches[0]
