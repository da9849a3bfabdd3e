"""Charge status enumeration and mapping from Tronity charging strings."""

from __future__ import annotations

import enum


class ChargeStatus(enum.Enum):
    """Connection and charging state of a vehicle.

    Values follow the IEC 61851 pilot states the controller uses.
    """

    DISCONNECTED = "A"
    CONNECTED = "B"
    CHARGING = "C"

    @classmethod
    def from_charging_state(cls, value: str | None) -> ChargeStatus:
        """Map a Tronity charging string.

        Unknown and missing values map to :attr:`DISCONNECTED`.
        """
        if not value:
            return cls.DISCONNECTED
        return _CHARGING_STATES.get(value.strip().lower(), cls.DISCONNECTED)


_CHARGING_STATES: dict[str, ChargeStatus] = {
    "charging": ChargeStatus.CHARGING,
    "idle": ChargeStatus.CONNECTED,
    "stopped": ChargeStatus.CONNECTED,
    "complete": ChargeStatus.CONNECTED,
}
