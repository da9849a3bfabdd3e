from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

import pytest

from fakes import BULK_PATH, VEHICLE_ID, FakeTronityBackend
from pytronity.exceptions import TronityConfigError
from pytronity.models.capability import Capability
from pytronity.registry import VehicleRegistration, create_vehicle, default_registry
from pytronity.vehicle import TronityVehicle

OPTIONS: dict[str, Any] = {"credentials": {"id": "cid", "secret": "csecret"}, "cache": "1m"}


async def _never_called(options: Mapping[str, Any], session: Any) -> Any:
    raise AssertionError("factory should not be called")


def test_default_registry_contains_tronity() -> None:
    registry = default_registry()

    assert list(registry) == ["tronity"]
    assert registry["tronity"].adapter is TronityVehicle
    assert registry["tronity"].capabilities == frozenset(Capability)


def test_default_registry_returns_fresh_mapping() -> None:
    first = default_registry()
    first.pop("tronity")

    assert "tronity" in default_registry()


def test_registration_requires_declared_capabilities() -> None:
    class NoCapabilities:
        pass

    with pytest.raises(TypeError, match="does not declare CAPABILITIES"):
        VehicleRegistration("broken", NoCapabilities, _never_called)


def test_registration_requires_methods_for_each_capability() -> None:
    class HalfCharger:
        CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.SOC, Capability.CHARGE_CONTROL})

        async def soc(self) -> None: ...

        async def start_charge(self) -> None: ...

    with pytest.raises(TypeError, match="has no stop_charge"):
        VehicleRegistration("half", HalfCharger, _never_called)


@pytest.mark.asyncio
async def test_create_vehicle_opens_tronity_adapter() -> None:
    backend = FakeTronityBackend()

    vehicle = await create_vehicle(default_registry(), "Tronity", OPTIONS, session=backend)  # type: ignore[arg-type]
    try:
        assert isinstance(vehicle, TronityVehicle)
        assert vehicle.vehicle.id == VEHICLE_ID
        assert (await vehicle.soc()).value == 72.5
        assert backend.count("GET", BULK_PATH) == 1
    finally:
        await vehicle.close()


@pytest.mark.asyncio
async def test_create_vehicle_unknown_type() -> None:
    with pytest.raises(TronityConfigError, match="unknown vehicle type 'tesla'"):
        await create_vehicle(default_registry(), "tesla", OPTIONS)


@pytest.mark.asyncio
async def test_create_vehicle_checks_required_capabilities_before_opening() -> None:
    class SocOnly:
        CAPABILITIES: ClassVar[frozenset[Capability]] = frozenset({Capability.SOC})

        async def soc(self) -> None: ...

    registry = {"soconly": VehicleRegistration("soconly", SocOnly, _never_called)}

    with pytest.raises(TronityConfigError, match="charge_control"):
        await create_vehicle(registry, "soconly", {}, required=frozenset({Capability.CHARGE_CONTROL}))


@pytest.mark.asyncio
async def test_create_vehicle_rejects_bad_options_before_network() -> None:
    backend = FakeTronityBackend()

    with pytest.raises(TronityConfigError):
        await create_vehicle(default_registry(), "tronity", {"credentials": {}}, session=backend)  # type: ignore[arg-type]
    assert backend.requests == []
