"""Data models for Tronity API responses."""

from pytronity.models._base import EpochTimestamp, TronityBaseModel, parse_epoch
from pytronity.models.bulk import BulkSnapshot
from pytronity.models.capability import CAPABILITY_METHODS, Capability
from pytronity.models.charge import ChargeStatus
from pytronity.models.reading import Reading
from pytronity.models.token import OAuthToken
from pytronity.models.vehicle import Vehicle, VehicleList

__all__ = [
    "BulkSnapshot",
    "CAPABILITY_METHODS",
    "Capability",
    "ChargeStatus",
    "EpochTimestamp",
    "OAuthToken",
    "Reading",
    "TronityBaseModel",
    "Vehicle",
    "VehicleList",
    "parse_epoch",
]
