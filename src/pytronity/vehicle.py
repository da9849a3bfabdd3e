"""Tronity vehicle adapter for the energy-management controller."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, ClassVar

import aiohttp

from pytronity._api import charging as _charging_api
from pytronity._api.bulk import fetch_bulk
from pytronity._api.vehicles import fetch_vehicle_list, select_vehicle
from pytronity._cache import CachedBulkAccessor
from pytronity._transport import OAuthTransport
from pytronity.auth import RefreshingTokenSource, build_token_source
from pytronity.config import TronityConfig
from pytronity.exceptions import TronityApiError, TronityError
from pytronity.models.bulk import BulkSnapshot
from pytronity.models.capability import Capability
from pytronity.models.charge import ChargeStatus
from pytronity.models.reading import Reading
from pytronity.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)


class TronityVehicle:
    """A single vehicle read and controlled through the Tronity API.

    Usage::

        async with TronityVehicle(config) as vehicle:
            soc = await vehicle.soc()
            if soc.ok:
                print(soc.value)

    Opening the adapter authenticates, lists the vehicles visible to the
    credentials and picks the configured one.  If any of that fails the
    adapter is closed again and the error is raised.

    Reads (:meth:`soc`, :meth:`range`, :meth:`status`) share one cached
    bulk status call per ``config.cache_ttl`` window and return a
    :class:`Reading` instead of raising on upstream failures.
    """

    CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset(
        {
            Capability.SOC,
            Capability.RANGE,
            Capability.CHARGE_STATUS,
            Capability.CHARGE_CONTROL,
        }
    )

    def __init__(
        self,
        config: TronityConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._clock = clock
        self._tokens: RefreshingTokenSource | None = None
        self._transport: OAuthTransport | None = None
        self._vehicle: Vehicle | None = None
        self._bulk: CachedBulkAccessor[BulkSnapshot] | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TronityVehicle:
        await self.open()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def open(self) -> None:
        """Authenticate and resolve the configured vehicle."""
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        try:
            self._tokens = build_token_source(self._config, self._http_session)
            self._transport = OAuthTransport(
                self._config.base_url,
                self._tokens,
                self._http_session,
                timeout=self._config.request_timeout,
            )
            vehicles = await fetch_vehicle_list(self._transport)
            self._vehicle = select_vehicle(vehicles, self._config.vin)
        except BaseException:
            await self.close()
            raise

        _logger.info(
            "Using Tronity vehicle id=%s vin=%s (%d visible)",
            self._vehicle.id,
            self._vehicle.vin,
            len(vehicles),
        )
        self._bulk = CachedBulkAccessor(self._fetch_bulk, self._config.cache_ttl, clock=self._clock)

    async def close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._tokens = None
        self._transport = None
        self._vehicle = None
        self._bulk = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> OAuthTransport:
        if self._transport is None:
            raise TronityError("Vehicle not opened. Use 'async with TronityVehicle(...) as vehicle:'")
        return self._transport

    def _require_bulk(self) -> CachedBulkAccessor[BulkSnapshot]:
        if self._bulk is None:
            raise TronityError("Vehicle not opened. Use 'async with TronityVehicle(...) as vehicle:'")
        return self._bulk

    async def _fetch_bulk(self) -> BulkSnapshot:
        return await fetch_bulk(self._require_transport(), self.vehicle.id)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def vehicle(self) -> Vehicle:
        """The vehicle resolved when the adapter was opened."""
        if self._vehicle is None:
            raise TronityError("Vehicle not opened. Use 'async with TronityVehicle(...) as vehicle:'")
        return self._vehicle

    @property
    def capabilities(self) -> frozenset[Capability]:
        return self.CAPABILITIES

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def snapshot(self) -> BulkSnapshot:
        """Return the current bulk status, fetching it if the cache is stale."""
        return await self._require_bulk().get()

    async def soc(self) -> Reading[float]:
        """Battery state of charge in percent."""
        try:
            snapshot = await self.snapshot()
        except TronityError as exc:
            return Reading(0.0, exc)
        if snapshot.level is None:
            return Reading(0.0, TronityApiError("bulk response has no level"))
        return Reading(snapshot.level)

    async def range(self) -> Reading[int]:
        """Remaining range in km."""
        try:
            snapshot = await self.snapshot()
        except TronityError as exc:
            return Reading(0, exc)
        if snapshot.range is None:
            return Reading(0, TronityApiError("bulk response has no range"))
        return Reading(int(snapshot.range))

    async def status(self) -> Reading[ChargeStatus]:
        """Charge status.

        Reports :attr:`ChargeStatus.DISCONNECTED` whenever the status
        cannot be determined, including failed fetches.  The fetch error
        is still attached to the reading.
        """
        try:
            snapshot = await self.snapshot()
        except TronityError as exc:
            return Reading(ChargeStatus.DISCONNECTED, exc)
        return Reading(ChargeStatus.from_charging_state(snapshot.charging))

    # ------------------------------------------------------------------
    # Charge control
    # ------------------------------------------------------------------

    async def start_charge(self) -> None:
        """Ask the vehicle to start charging.  No-op if already charging."""
        await _charging_api.start_charge(self._require_transport(), self.vehicle.id)

    async def stop_charge(self) -> None:
        """Ask the vehicle to stop charging.  No-op if not charging."""
        await _charging_api.stop_charge(self._require_transport(), self.vehicle.id)
