"""Custom exception hierarchy for pytronity."""

from __future__ import annotations


class TronityError(Exception):
    """Base exception for all pytronity errors."""


class TronityConfigError(TronityError):
    """Invalid or missing configuration.

    Also raised when the configured credentials see several vehicles and
    no VIN was given to pick one.
    """


class TronityVehicleNotFoundError(TronityError):
    """No vehicle matching the configured VIN is visible to the credentials."""

    def __init__(self, message: str, *, vin: str | None = None) -> None:
        self.vin = vin
        super().__init__(message)


class TronityTransportError(TronityError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)

    def has_status(self, *codes: int) -> bool:
        """Whether the failing response carried one of *codes*."""
        return self.status_code is not None and self.status_code in codes


class TronityApiError(TronityError):
    """Response arrived but does not have the expected shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class TronityAuthenticationError(TronityError):
    """Token exchange failed.

    Raised for both grant modes when the token endpoint cannot be reached,
    answers with a non-2xx status, or returns a body without an access
    token.  Surfaces to whichever read or action needed the token.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)
