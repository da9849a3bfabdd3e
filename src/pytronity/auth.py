"""Bearer token acquisition and refresh.

Two grant strategies exist and exactly one is used per adapter:

* :class:`AppGrant` logs in with the client credentials alone
  (``grant_type=app``).  Used when no tokens are configured.
* :class:`RefreshTokenGrant` refreshes a stored access/refresh token pair
  with the standard refresh-token exchange.

:class:`RefreshingTokenSource` holds the current token and asks the grant
for a new one when the token expires or the API rejects it.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import Any, Protocol

import aiohttp

from pytronity._api.token import build_app_grant, build_refresh_grant, exchange_token
from pytronity.config import TronityConfig
from pytronity.exceptions import TronityAuthenticationError
from pytronity.models.token import OAuthToken

_logger = logging.getLogger(__name__)


class TokenGrant(Protocol):
    """Obtains a new token given the previous one (possibly ``None``)."""

    name: str

    async def refresh(self, previous: OAuthToken | None) -> OAuthToken:
        ...


class TokenSource(Protocol):
    """Structural token source used by the transport."""

    async def token(self) -> OAuthToken:
        ...

    def invalidate(self, rejected: OAuthToken | None = None) -> None:
        ...


class AppGrant:
    """``grant_type=app`` login with client ID and secret."""

    name = "app"

    def __init__(
        self,
        http: aiohttp.ClientSession,
        *,
        client_id: str,
        client_secret: str,
        token_url: str,
        timeout: float | None = None,
    ) -> None:
        self._http = http
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._timeout = timeout

    async def refresh(self, previous: OAuthToken | None) -> OAuthToken:
        return await exchange_token(
            self._http,
            self._token_url,
            json_body=build_app_grant(self._client_id, self._client_secret),
            timeout=self._timeout,
        )


class RefreshTokenGrant:
    """Standard OAuth2 refresh-token exchange."""

    name = "refresh_token"

    def __init__(
        self,
        http: aiohttp.ClientSession,
        *,
        client_id: str,
        client_secret: str,
        token_url: str,
        timeout: float | None = None,
    ) -> None:
        self._http = http
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._timeout = timeout

    async def refresh(self, previous: OAuthToken | None) -> OAuthToken:
        if previous is None or not previous.refresh_token:
            raise TronityAuthenticationError(
                "No refresh token available",
                endpoint=self._token_url,
            )
        token = await exchange_token(
            self._http,
            self._token_url,
            form=build_refresh_grant(self._client_id, self._client_secret, previous.refresh_token),
            timeout=self._timeout,
        )
        # Servers may omit the refresh token when it is not rotated.
        if not token.refresh_token:
            token = token.model_copy(update={"refresh_token": previous.refresh_token})
        return token


class RefreshingTokenSource:
    """Reuse a token while valid, refresh it through a grant otherwise.

    Overlapping callers needing a refresh wait for the same grant call.
    """

    def __init__(self, grant: TokenGrant, initial: OAuthToken | None = None) -> None:
        self._grant = grant
        self._token = initial
        self._rejected = False
        self._lock = asyncio.Lock()

    @property
    def grant(self) -> TokenGrant:
        return self._grant

    @property
    def current(self) -> OAuthToken | None:
        return self._token

    def _usable(self) -> OAuthToken | None:
        token = self._token
        if token is None or self._rejected or not token.is_valid():
            return None
        return token

    async def token(self) -> OAuthToken:
        """Return a valid token, refreshing first if needed."""
        token = self._usable()
        if token is not None:
            return token

        async with self._lock:
            # Another caller may have refreshed while we waited.
            token = self._usable()
            if token is not None:
                return token

            _logger.info("Refreshing access token via %s grant", self._grant.name)
            token = await self._grant.refresh(self._token)
            self._token = token
            self._rejected = False
            return token

    def invalidate(self, rejected: OAuthToken | None = None) -> None:
        """Mark the current token as rejected so the next call refreshes.

        When *rejected* is given and a newer token has replaced it in the
        meantime, the newer token is kept.
        """
        if rejected is not None and rejected is not self._token:
            return
        self._rejected = True


def build_token_source(config: TronityConfig, http: aiohttp.ClientSession) -> RefreshingTokenSource:
    """Pick the grant mode for *config*.

    With a complete stored token pair the refresh-token grant is used and
    the pair is seeded as already expired, so the first request verifies
    it with an immediate refresh.  Otherwise the ``app`` grant is used,
    starting without a token.
    """
    kwargs: dict[str, Any] = {
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "token_url": config.resolved_token_url,
        "timeout": config.request_timeout,
    }

    if config.has_tokens:
        assert config.access_token is not None  # noqa: S101
        seed = OAuthToken(
            access_token=config.access_token,
            refresh_token=config.refresh_token,
            expiry=datetime.now(UTC),
        )
        return RefreshingTokenSource(RefreshTokenGrant(http, **kwargs), initial=seed)

    if config.access_token or config.refresh_token:
        _logger.warning("Incomplete token pair configured; using app grant instead")
    return RefreshingTokenSource(AppGrant(http, **kwargs))
