"""Client configuration for pytronity."""

from __future__ import annotations

import dataclasses
import os
import re
from collections.abc import Mapping
from typing import Any

from pytronity._constants import BASE_URL, DEFAULT_CACHE_TTL, DEFAULT_REQUEST_TIMEOUT, TOKEN_PATH
from pytronity.exceptions import TronityConfigError

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_DURATION_UNITS: dict[str, float] = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: Any) -> float:
    """Convert a duration to seconds.

    Accepts plain numbers (seconds) and strings such as ``"90s"``,
    ``"15m"`` or ``"1h30m"``.  Raises :class:`TronityConfigError` for
    anything else.
    """
    if isinstance(value, bool):
        raise TronityConfigError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise TronityConfigError(f"invalid duration: {value!r}")

    text = value.strip().lower()
    try:
        return float(text)
    except ValueError:
        pass

    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos == 0 or pos != len(text):
        raise TronityConfigError(f"invalid duration: {value!r}")
    return total


@dataclasses.dataclass(frozen=True)
class TronityConfig:
    """Adapter configuration.

    Parameters
    ----------
    client_id : str
        Tronity platform client ID.
    client_secret : str
        Tronity platform client secret.
    access_token : str or None
        Access token obtained through the authorization-code flow.  Only
        used together with ``refresh_token``.
    refresh_token : str or None
        Refresh token matching ``access_token``.  When both tokens are
        set the adapter refreshes them with the standard refresh-token
        grant; otherwise it authenticates with the ``app`` grant.
    vin : str or None
        VIN of the vehicle to use.  May be omitted when the credentials
        see exactly one vehicle.  Matched case-insensitively.
    cache_ttl : float
        Seconds a bulk status response is reused before the API is
        called again.  ``0`` disables caching between calls.
    base_url : str
        API base URL.
    token_url : str or None
        OAuth token endpoint.  Defaults to ``base_url`` +
        ``/oauth/authentication``.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    """

    client_id: str
    client_secret: str
    access_token: str | None = None
    refresh_token: str | None = None
    vin: str | None = None
    cache_ttl: float = DEFAULT_CACHE_TTL
    base_url: str = BASE_URL
    token_url: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        if not self.client_id or not self.client_secret:
            raise TronityConfigError("missing credentials: client_id and client_secret are required")
        if self.cache_ttl < 0:
            raise TronityConfigError(f"cache_ttl must not be negative, got {self.cache_ttl}")
        if self.request_timeout <= 0:
            raise TronityConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @property
    def has_tokens(self) -> bool:
        """Whether a complete access/refresh token pair is configured."""
        return bool(self.access_token) and bool(self.refresh_token)

    @property
    def resolved_token_url(self) -> str:
        return self.token_url or f"{self.base_url.rstrip('/')}{TOKEN_PATH}"

    @classmethod
    def from_env(cls, **overrides: Any) -> TronityConfig:
        """Create configuration from environment variables.

        Reads ``TRONITY_CLIENT_ID``, ``TRONITY_CLIENT_SECRET`` and the
        optional ``TRONITY_*`` variables below.  Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TronityConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TRONITY_CLIENT_ID": "client_id",
            "TRONITY_CLIENT_SECRET": "client_secret",
            "TRONITY_ACCESS_TOKEN": "access_token",
            "TRONITY_REFRESH_TOKEN": "refresh_token",
            "TRONITY_VIN": "vin",
            "TRONITY_BASE_URL": "base_url",
            "TRONITY_TOKEN_URL": "token_url",
        }
        config_kwargs: dict[str, Any] = {"client_id": "", "client_secret": ""}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        # numeric fields, handled separately
        ttl_env = env.get("TRONITY_CACHE_TTL")
        if ttl_env and "cache_ttl" not in overrides:
            config_kwargs["cache_ttl"] = parse_duration(ttl_env)

        timeout_env = env.get("TRONITY_REQUEST_TIMEOUT")
        if timeout_env and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = parse_duration(timeout_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> TronityConfig:
        """Decode the controller's nested vehicle option block.

        Expected shape::

            {
                "credentials": {"id": "...", "secret": "..."},
                "tokens": {"access": "...", "refresh": "..."},  # optional
                "vin": "...",                                   # optional
                "cache": "15m",                                 # optional
            }

        Keys are matched case-insensitively.  Unknown keys raise
        :class:`TronityConfigError`.
        """
        top = _lower_keys(options, "options")
        unknown = set(top) - {"credentials", "tokens", "vin", "cache", "baseurl", "timeout"}
        if unknown:
            raise TronityConfigError(f"unknown configuration keys: {', '.join(sorted(unknown))}")

        credentials = _lower_keys(top.get("credentials") or {}, "credentials")
        tokens = _lower_keys(top.get("tokens") or {}, "tokens")

        kwargs: dict[str, Any] = {
            "client_id": str(credentials.get("id") or ""),
            "client_secret": str(credentials.get("secret") or ""),
            "access_token": tokens.get("access") or None,
            "refresh_token": tokens.get("refresh") or None,
            "vin": top.get("vin") or None,
        }
        if top.get("cache") is not None:
            kwargs["cache_ttl"] = parse_duration(top["cache"])
        if top.get("timeout") is not None:
            kwargs["request_timeout"] = parse_duration(top["timeout"])
        if top.get("baseurl"):
            kwargs["base_url"] = str(top["baseurl"])

        return cls(**kwargs)


def _lower_keys(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise TronityConfigError(f"{name} must be a mapping, got {type(value).__name__}")
    return {str(k).lower(): v for k, v in value.items()}
