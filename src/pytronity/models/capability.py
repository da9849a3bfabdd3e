"""Capabilities a vehicle adapter can offer to the controller."""

from __future__ import annotations

import enum


class Capability(enum.Enum):
    SOC = "soc"
    RANGE = "range"
    CHARGE_STATUS = "charge_status"
    CHARGE_CONTROL = "charge_control"


#: Adapter methods that must exist for each capability.
CAPABILITY_METHODS: dict[Capability, tuple[str, ...]] = {
    Capability.SOC: ("soc",),
    Capability.RANGE: ("range",),
    Capability.CHARGE_STATUS: ("status",),
    Capability.CHARGE_CONTROL: ("start_charge", "stop_charge"),
}
