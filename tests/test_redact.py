from __future__ import annotations

from pytronity._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "client_id": "cid",
        "client_secret": "csecret",
        "grant_type": "app",
        "refresh_token": "stored-refresh",
        "nested": {"accessToken": "tok", "level": 72.5},
        "headers": [{"Authorization": "Bearer tok"}],
    }

    redacted = redact_for_log(payload)
    assert redacted["client_id"] == "cid"
    assert redacted["grant_type"] == "app"
    assert redacted["client_secret"] == "<redacted>"
    assert redacted["refresh_token"] == "<redacted>"
    assert redacted["nested"] == {"accessToken": "<redacted>", "level": 72.5}
    assert redacted["headers"] == [{"Authorization": "<redacted>"}]


def test_redact_for_log_does_not_modify_input() -> None:
    payload = {"access_token": "tok"}

    redact_for_log(payload)
    assert payload == {"access_token": "tok"}


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_keeps_scalars() -> None:
    body = {"token_type": "bearer", "expires_in": 3600, "scope": None, "active": True}

    assert redact_for_log(body) == body
