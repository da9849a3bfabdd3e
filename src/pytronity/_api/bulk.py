"""Bulk status endpoint: /v1/vehicles/{id}/bulk."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pytronity._constants import bulk_endpoint
from pytronity._transport import Transport
from pytronity.exceptions import TronityApiError
from pytronity.models.bulk import BulkSnapshot

_logger = logging.getLogger(__name__)


async def fetch_bulk(transport: Transport, vehicle_id: str) -> BulkSnapshot:
    """Fetch everything the API reports about one vehicle."""
    endpoint = bulk_endpoint(vehicle_id)
    body = await transport.request_json("GET", endpoint)
    if not isinstance(body, dict):
        raise TronityApiError(f"{endpoint} did not return an object", endpoint=endpoint)
    try:
        snapshot = BulkSnapshot.model_validate(body)
    except ValidationError as exc:
        raise TronityApiError(
            f"Unexpected bulk response from {endpoint}: {exc.error_count()} validation errors",
            endpoint=endpoint,
        ) from exc
    _logger.debug("Bulk decoded vehicle=%s keys=%s", vehicle_id, sorted(body))
    return snapshot
