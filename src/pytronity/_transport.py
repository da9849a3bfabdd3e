"""HTTP transport with bearer token injection and one retry after refresh."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pytronity._constants import USER_AGENT
from pytronity.auth import TokenSource
from pytronity.exceptions import TronityTransportError
from pytronity.models.token import OAuthToken

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """What the endpoint modules in ``pytronity._api`` call.

    Implementations return the decoded JSON body (``None`` when empty)
    and raise :class:`TronityTransportError` for anything else.
    """

    async def request_json(self, method: str, endpoint: str, payload: Any = None) -> Any:
        ...


class OAuthTransport:
    """HTTP transport that authenticates every request with a bearer token.

    A ``401`` response invalidates the token, a fresh token is obtained
    from the token source, and the request is sent exactly once more.
    """

    def __init__(
        self,
        base_url: str,
        tokens: TokenSource,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._tokens = tokens
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout is not None else None

    async def _send(
        self,
        method: str,
        endpoint: str,
        token: OAuthToken,
        payload: Any,
    ) -> tuple[int, bytes]:
        url = f"{self._base_url}{endpoint}"
        headers: dict[str, str] = {
            "accept": "application/json",
            "authorization": token.authorization,
            "user-agent": USER_AGENT,
        }
        kwargs: dict[str, Any] = {"headers": headers}
        if payload is not None:
            kwargs["json"] = payload
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(method, url, **kwargs) as resp:
                return resp.status, await resp.read()
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TronityTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

    async def request_json(self, method: str, endpoint: str, payload: Any = None) -> Any:
        """Send an authenticated request and return the decoded JSON body.

        Returns ``None`` for an empty body.

        Raises
        ------
        TronityAuthenticationError
            If no token can be obtained.
        TronityTransportError
            On network failure, non-2xx status (``status_code`` is set),
            or a body that is not UTF-8 encoded JSON.
        """
        token = await self._tokens.token()
        status, raw = await self._send(method, endpoint, token, payload)

        if status == 401:
            _logger.debug("HTTP 401 from %s; refreshing token and retrying once", endpoint)
            self._tokens.invalidate(token)
            token = await self._tokens.token()
            status, raw = await self._send(method, endpoint, token, payload)

        if not 200 <= status < 300:
            raise TronityTransportError(
                f"HTTP {status} from {endpoint}: {raw[:200].decode(errors='replace')}",
                status_code=status,
                endpoint=endpoint,
            )

        if not raw.strip():
            return None

        try:
            return json.loads(raw.decode())
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TronityTransportError(
                f"Invalid JSON from {endpoint}: {raw[:200].decode(errors='replace')}",
                status_code=status,
                endpoint=endpoint,
            ) from exc
