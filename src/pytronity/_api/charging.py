"""Charge control endpoints.

Endpoints:
  - /v1/vehicles/{id}/charge_start
  - /v1/vehicles/{id}/charge_stop
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from pytronity._constants import charge_start_endpoint, charge_stop_endpoint
from pytronity._transport import Transport
from pytronity.exceptions import TronityTransportError

_logger = logging.getLogger(__name__)


async def _post_action(transport: Transport, endpoint: str) -> None:
    try:
        await transport.request_json("POST", endpoint)
    except TronityTransportError as exc:
        # 405: vehicle is already in the requested state.
        if exc.has_status(HTTPStatus.METHOD_NOT_ALLOWED):
            _logger.debug("%s answered 405; treating as no-op", endpoint)
            return
        raise


async def start_charge(transport: Transport, vehicle_id: str) -> None:
    await _post_action(transport, charge_start_endpoint(vehicle_id))


async def stop_charge(transport: Transport, vehicle_id: str) -> None:
    await _post_action(transport, charge_stop_endpoint(vehicle_id))
