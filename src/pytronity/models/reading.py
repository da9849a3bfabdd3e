"""Result type for polled vehicle values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from pytronity.exceptions import TronityError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Reading(Generic[T]):
    """A polled value together with the error that produced it, if any.

    Reads never raise for upstream failures.  On failure ``value`` holds a
    placeholder (``0``, or :attr:`ChargeStatus.DISCONNECTED` for status)
    and ``error`` holds the cause, so a caller can treat a failed poll as
    transient and try again on its own schedule.
    """

    value: T
    error: TronityError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return ``value`` or raise ``error``."""
        if self.error is not None:
            raise self.error
        return self.value
