"""pytronity - Async Python adapter for the Tronity vehicle telematics API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytronity")
except PackageNotFoundError:
    __version__ = "0+local"
from pytronity._cache import CachedBulkAccessor
from pytronity.auth import AppGrant, RefreshingTokenSource, RefreshTokenGrant, build_token_source
from pytronity.config import TronityConfig
from pytronity.exceptions import (
    TronityApiError,
    TronityAuthenticationError,
    TronityConfigError,
    TronityError,
    TronityTransportError,
    TronityVehicleNotFoundError,
)
from pytronity.models import (
    BulkSnapshot,
    Capability,
    ChargeStatus,
    OAuthToken,
    Reading,
    Vehicle,
)
from pytronity.registry import VehicleRegistration, create_vehicle, default_registry
from pytronity.vehicle import TronityVehicle

__all__ = [
    "__version__",
    "AppGrant",
    "BulkSnapshot",
    "CachedBulkAccessor",
    "Capability",
    "ChargeStatus",
    "OAuthToken",
    "Reading",
    "RefreshTokenGrant",
    "RefreshingTokenSource",
    "TronityApiError",
    "TronityAuthenticationError",
    "TronityConfig",
    "TronityConfigError",
    "TronityError",
    "TronityTransportError",
    "TronityVehicle",
    "TronityVehicleNotFoundError",
    "Vehicle",
    "VehicleRegistration",
    "build_token_source",
    "create_vehicle",
    "default_registry",
]
