"""Vehicle adapter registry.

The controller builds its vehicle list from configuration entries such
as ``{"type": "tronity", ...}``.  :func:`default_registry` returns the
mapping from type name to adapter; it is built on each call and passed
explicitly to :func:`create_vehicle`, so there is no import-time
registration.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pytronity.config import TronityConfig
from pytronity.exceptions import TronityConfigError
from pytronity.models.capability import CAPABILITY_METHODS, Capability
from pytronity.vehicle import TronityVehicle

_logger = logging.getLogger(__name__)


class VehicleAdapter(Protocol):
    """What every adapter exposes regardless of its capabilities."""

    CAPABILITIES: frozenset[Capability]

    async def close(self) -> None:
        ...


VehicleFactory = Callable[[Mapping[str, Any], aiohttp.ClientSession | None], Awaitable[VehicleAdapter]]


@dataclass(frozen=True, slots=True)
class VehicleRegistration:
    """One adapter type known to the controller.

    Creation fails with :class:`TypeError` when the adapter declares a
    capability it has no method for.
    """

    name: str
    adapter: type
    factory: VehicleFactory

    def __post_init__(self) -> None:
        declared = getattr(self.adapter, "CAPABILITIES", None)
        if not isinstance(declared, frozenset):
            raise TypeError(f"{self.adapter.__name__} does not declare CAPABILITIES")
        for capability in declared:
            for method in CAPABILITY_METHODS[capability]:
                if not callable(getattr(self.adapter, method, None)):
                    raise TypeError(
                        f"{self.adapter.__name__} declares {capability.value} but has no {method}()"
                    )

    @property
    def capabilities(self) -> frozenset[Capability]:
        caps: frozenset[Capability] = self.adapter.CAPABILITIES  # type: ignore[attr-defined]
        return caps


async def _open_tronity(options: Mapping[str, Any], session: aiohttp.ClientSession | None) -> TronityVehicle:
    vehicle = TronityVehicle(TronityConfig.from_mapping(options), session=session)
    await vehicle.open()
    return vehicle


def default_registry() -> dict[str, VehicleRegistration]:
    """Adapter types shipped with pytronity, keyed by lower-case type name."""
    registrations = [
        VehicleRegistration("tronity", TronityVehicle, _open_tronity),
    ]
    return {r.name: r for r in registrations}


async def create_vehicle(
    registry: Mapping[str, VehicleRegistration],
    type_name: str,
    options: Mapping[str, Any],
    *,
    required: frozenset[Capability] = frozenset(),
    session: aiohttp.ClientSession | None = None,
) -> VehicleAdapter:
    """Create and open the adapter registered as *type_name*.

    Parameters
    ----------
    registry
        Mapping returned by :func:`default_registry` (or an extension of it).
    type_name
        Adapter type, matched case-insensitively.
    options
        Adapter-specific option block.
    required
        Capabilities the caller needs; checked before any network call.
    session
        Optional shared ``aiohttp`` session.

    Raises
    ------
    TronityConfigError
        Unknown type, missing capabilities, or invalid options.
    """
    registration = registry.get(type_name.strip().lower())
    if registration is None:
        known = ", ".join(sorted(registry)) or "none"
        raise TronityConfigError(f"unknown vehicle type {type_name!r} (known: {known})")

    missing = required - registration.capabilities
    if missing:
        names = ", ".join(sorted(c.value for c in missing))
        raise TronityConfigError(f"vehicle type {registration.name!r} lacks required capabilities: {names}")

    _logger.debug("Creating %s vehicle", registration.name)
    return await registration.factory(options, session)
