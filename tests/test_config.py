from __future__ import annotations

import pytest

from pytronity._constants import BASE_URL, DEFAULT_CACHE_TTL
from pytronity.config import TronityConfig, parse_duration
from pytronity.exceptions import TronityConfigError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (90, 90.0),
        (1.5, 1.5),
        ("120", 120.0),
        ("90s", 90.0),
        ("15m", 900.0),
        ("1h30m", 5400.0),
        ("500ms", 0.5),
        (" 2M ", 120.0),
    ],
)
def test_parse_duration(value: object, expected: float) -> None:
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "soon", "15x", "m15", "1h 30m", True, None, [15]])
def test_parse_duration_rejects_garbage(value: object) -> None:
    with pytest.raises(TronityConfigError, match="invalid duration"):
        parse_duration(value)


def test_defaults() -> None:
    config = TronityConfig(client_id="cid", client_secret="csecret")

    assert config.cache_ttl == DEFAULT_CACHE_TTL
    assert config.base_url == BASE_URL
    assert config.resolved_token_url == f"{BASE_URL}/oauth/authentication"
    assert not config.has_tokens


def test_explicit_token_url_wins() -> None:
    config = TronityConfig(client_id="cid", client_secret="csecret", token_url="https://auth.example/token")

    assert config.resolved_token_url == "https://auth.example/token"


@pytest.mark.parametrize(
    ("access", "refresh", "expected"),
    [("a", "r", True), ("a", None, False), (None, "r", False), ("", "r", False)],
)
def test_has_tokens_needs_both(access: str | None, refresh: str | None, expected: bool) -> None:
    config = TronityConfig(client_id="cid", client_secret="csecret", access_token=access, refresh_token=refresh)

    assert config.has_tokens is expected


@pytest.mark.parametrize(
    "kwargs",
    [
        {"client_id": "", "client_secret": "csecret"},
        {"client_id": "cid", "client_secret": ""},
        {"client_id": "cid", "client_secret": "csecret", "cache_ttl": -1},
        {"client_id": "cid", "client_secret": "csecret", "request_timeout": 0},
    ],
    ids=["no-id", "no-secret", "negative-ttl", "zero-timeout"],
)
def test_invalid_config_is_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(TronityConfigError):
        TronityConfig(**kwargs)  # type: ignore[arg-type]


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRONITY_CLIENT_ID", "env-id")
    monkeypatch.setenv("TRONITY_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("TRONITY_VIN", "WVWZZZE1ZMP000001")
    monkeypatch.setenv("TRONITY_CACHE_TTL", "5m")
    monkeypatch.setenv("TRONITY_REQUEST_TIMEOUT", "10")
    monkeypatch.delenv("TRONITY_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("TRONITY_REFRESH_TOKEN", raising=False)

    config = TronityConfig.from_env()

    assert config.client_id == "env-id"
    assert config.client_secret == "env-secret"
    assert config.vin == "WVWZZZE1ZMP000001"
    assert config.cache_ttl == 300.0
    assert config.request_timeout == 10.0
    assert not config.has_tokens


def test_from_env_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRONITY_CLIENT_ID", "env-id")
    monkeypatch.setenv("TRONITY_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("TRONITY_CACHE_TTL", "not-a-duration")

    config = TronityConfig.from_env(client_id="explicit", cache_ttl=30)

    assert config.client_id == "explicit"
    assert config.cache_ttl == 30


def test_from_env_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TRONITY_CLIENT_ID", raising=False)
    monkeypatch.delenv("TRONITY_CLIENT_SECRET", raising=False)

    with pytest.raises(TronityConfigError, match="missing credentials"):
        TronityConfig.from_env()


def test_from_mapping_full_block() -> None:
    config = TronityConfig.from_mapping(
        {
            "Credentials": {"ID": "cid", "Secret": "csecret"},
            "Tokens": {"Access": "stored-access", "Refresh": "stored-refresh"},
            "VIN": "wvwzzze1zmp000001",
            "Cache": "1m",
            "timeout": "20s",
            "baseURL": "https://sandbox.tronity.example",
        }
    )

    assert config.client_id == "cid"
    assert config.client_secret == "csecret"
    assert config.has_tokens
    assert config.vin == "wvwzzze1zmp000001"
    assert config.cache_ttl == 60.0
    assert config.request_timeout == 20.0
    assert config.resolved_token_url == "https://sandbox.tronity.example/oauth/authentication"


def test_from_mapping_minimal_block_uses_defaults() -> None:
    config = TronityConfig.from_mapping({"credentials": {"id": "cid", "secret": "csecret"}})

    assert config.cache_ttl == DEFAULT_CACHE_TTL
    assert config.vin is None
    assert not config.has_tokens


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(TronityConfigError, match="unknown configuration keys: user"):
        TronityConfig.from_mapping({"credentials": {"id": "cid", "secret": "csecret"}, "user": "me"})


def test_from_mapping_requires_credentials() -> None:
    with pytest.raises(TronityConfigError, match="missing credentials"):
        TronityConfig.from_mapping({"vin": "X"})


def test_from_mapping_rejects_non_mapping_credentials() -> None:
    with pytest.raises(TronityConfigError, match="credentials must be a mapping"):
        TronityConfig.from_mapping({"credentials": "cid:csecret"})
