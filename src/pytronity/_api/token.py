"""Token endpoint: /oauth/authentication.

Both grant modes post to the same endpoint; they differ only in the
request body.  The endpoint is called without a bearer token.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from pytronity._constants import USER_AGENT
from pytronity._redact import redact_for_log
from pytronity.exceptions import TronityAuthenticationError
from pytronity.models.token import OAuthToken

_logger = logging.getLogger(__name__)


def build_app_grant(client_id: str, client_secret: str) -> dict[str, str]:
    """JSON body for the ``app`` grant."""
    return {
        "client_id": client_id,
        "client_secret": client_secret,
        "grant_type": "app",
    }


def build_refresh_grant(client_id: str, client_secret: str, refresh_token: str) -> dict[str, str]:
    """Form body for the standard refresh-token grant."""
    return {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
        "client_id": client_id,
        "client_secret": client_secret,
    }


def parse_token_response(body: Any, *, endpoint: str) -> OAuthToken:
    """Validate a decoded token response."""
    if not isinstance(body, dict):
        raise TronityAuthenticationError(
            f"Token response from {endpoint} is not an object",
            endpoint=endpoint,
        )
    try:
        return OAuthToken.model_validate(body)
    except ValidationError as exc:
        raise TronityAuthenticationError(
            f"Token response from {endpoint} has no usable access token",
            endpoint=endpoint,
        ) from exc


async def exchange_token(
    http: aiohttp.ClientSession,
    token_url: str,
    *,
    json_body: dict[str, str] | None = None,
    form: dict[str, str] | None = None,
    timeout: float | None = None,
) -> OAuthToken:
    """POST a grant to the token endpoint and return the issued token.

    Raises
    ------
    TronityAuthenticationError
        On network failure, non-2xx status, invalid JSON, or a body
        without an access token.
    """
    headers = {"accept": "application/json", "user-agent": USER_AGENT}
    _logger.debug("POST %s body=%s", token_url, redact_for_log(json_body if json_body is not None else form))

    kwargs: dict[str, Any] = {"headers": headers}
    if json_body is not None:
        kwargs["json"] = json_body
    if form is not None:
        kwargs["data"] = form
    if timeout is not None:
        kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

    try:
        async with http.request("POST", token_url, **kwargs) as resp:
            status = resp.status
            raw = await resp.read()
    except (aiohttp.ClientError, TimeoutError) as exc:
        raise TronityAuthenticationError(
            f"Token request to {token_url} failed: {exc}",
            endpoint=token_url,
        ) from exc

    if not 200 <= status < 300:
        raise TronityAuthenticationError(
            f"HTTP {status} from {token_url}: {raw[:200].decode(errors='replace')}",
            status_code=status,
            endpoint=token_url,
        )

    try:
        body = json.loads(raw.decode())
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TronityAuthenticationError(
            f"Invalid JSON from {token_url}: {raw[:200].decode(errors='replace')}",
            status_code=status,
            endpoint=token_url,
        ) from exc

    _logger.debug("Token response %s", redact_for_log(body))
    return parse_token_response(body, endpoint=token_url)
