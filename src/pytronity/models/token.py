"""OAuth token model."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pytronity._constants import TOKEN_EXPIRY_DELTA


class OAuthToken(BaseModel):
    """Bearer token returned by the token endpoint.

    Parameters
    ----------
    access_token : str
        Token sent as ``Authorization: Bearer <access_token>``.
    token_type : str
        Token type reported by the server.
    refresh_token : str or None
        Refresh token, absent for the ``app`` grant.
    expiry : datetime or None
        Absolute expiry.  Derived from ``expires_in`` when the server
        only reports a lifetime.  ``None`` means the token is used until
        the API rejects it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    access_token: str = Field(min_length=1)
    token_type: str = "Bearer"
    refresh_token: str | None = None
    expiry: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _expiry_from_lifetime(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        expires_in = merged.pop("expires_in", None)
        if merged.get("expiry") is None and expires_in not in (None, "", 0):
            merged["expiry"] = datetime.now(UTC) + timedelta(seconds=float(expires_in))
        return merged

    def is_valid(self, now: datetime | None = None) -> bool:
        """Whether the token can still be used.

        A token is treated as expired slightly before its real expiry so
        that a request started now does not race the deadline.
        """
        if not self.access_token:
            return False
        if self.expiry is None:
            return True
        current = now or datetime.now(UTC)
        return current < self.expiry - timedelta(seconds=TOKEN_EXPIRY_DELTA)

    @property
    def authorization(self) -> str:
        """Value of the ``Authorization`` header for this token."""
        return f"Bearer {self.access_token}"
